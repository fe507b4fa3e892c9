from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple

from topvan_server.repository.patch import Patch

# (field, direction) pairs; direction is 1 for ascending, -1 for descending
SortSpec = Sequence[Tuple[str, int]]


class WriteBatch(ABC):
    """A group of patch/delete operations committed together."""

    def __init__(self):
        self._ops: List[Tuple[str, str, str, Optional[Patch]]] = []

    def update(self, collection: str, doc_id: str, patch) -> 'WriteBatch':
        self._ops.append(('update', collection, doc_id, Patch.from_fields(patch)))
        return self

    def delete(self, collection: str, doc_id: str) -> 'WriteBatch':
        self._ops.append(('delete', collection, doc_id, None))
        return self

    def __len__(self):
        return len(self._ops)

    @abstractmethod
    def commit(self) -> int:
        """Apply all queued operations. Returns the number of operations applied."""
        pass


class DocumentStore(ABC):
    """Collection based document persistence.

    Documents are plain dicts. Stores assign ids on insert and return
    documents with an `id` key holding the string id.
    """

    @abstractmethod
    def find(self, collection: str, query: Optional[Dict[str, Any]] = None,
             sort: Optional[SortSpec] = None) -> List[Dict[str, Any]]:
        """Return documents whose fields equal every value in `query`."""
        pass

    @abstractmethod
    def find_one(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """Return the document with `doc_id`, or None."""
        pass

    @abstractmethod
    def insert(self, collection: str, document: Dict[str, Any]) -> str:
        """Insert a document and return its new id."""
        pass

    @abstractmethod
    def update(self, collection: str, doc_id: str, patch: Patch) -> None:
        """Apply a patch to an existing document. Raises NotFoundError."""
        pass

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> None:
        """Delete an existing document. Raises NotFoundError."""
        pass

    @abstractmethod
    def batch(self) -> WriteBatch:
        """Start a new batch of writes."""
        pass

    def close(self) -> None:
        pass
