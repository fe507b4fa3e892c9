"""In-memory DocumentStore used for tests and offline mode.

Each collection is a dict of id -> document; ids come from a single monotonic
counter per store instance, so two stores never share state.
"""
import copy
import itertools
import logging
import threading
from typing import Any, Dict, List, Optional

from topvan_server.exception.NotFoundError import NotFoundError
from topvan_server.repository.document_store import DocumentStore, SortSpec, WriteBatch
from topvan_server.repository.patch import Patch

logger = logging.getLogger(__name__)

_MISSING = object()


def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
    return all(document.get(k, _MISSING) == v for k, v in query.items())


def _sort_key(field):
    def key(doc):
        value = doc.get(field)
        # documents without the field sort after those with it (ascending)
        return (value is None, value if value is not None else 0)
    return key


class InMemoryWriteBatch(WriteBatch):
    def __init__(self, store: 'InMemoryStore'):
        super().__init__()
        self._store = store

    def commit(self) -> int:
        return self._store._apply_batch(self._ops)


class InMemoryStore(DocumentStore):

    def __init__(self, initial: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._counter = itertools.count(1)
        self._lock = threading.RLock()
        for collection, docs in (initial or {}).items():
            for doc in docs:
                self.insert(collection, doc)

    def _coll(self, collection: str) -> Dict[str, Dict[str, Any]]:
        return self._collections.setdefault(collection, {})

    def find(self, collection: str, query: Optional[Dict[str, Any]] = None,
             sort: Optional[SortSpec] = None) -> List[Dict[str, Any]]:
        with self._lock:
            docs = [
                self._out(doc_id, doc)
                for doc_id, doc in self._coll(collection).items()
                if _matches(doc, query or {})
            ]
        for field, direction in reversed(list(sort or [])):
            docs.sort(key=_sort_key(field), reverse=direction < 0)
        return docs

    def find_one(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            doc = self._coll(collection).get(str(doc_id))
            return self._out(str(doc_id), doc) if doc is not None else None

    def insert(self, collection: str, document: Dict[str, Any]) -> str:
        doc = copy.deepcopy({k: v for k, v in document.items() if k not in ('id', '_id')})
        with self._lock:
            doc_id = str(next(self._counter))
            self._coll(collection)[doc_id] = doc
        logger.debug('Inserted %s/%s', collection, doc_id)
        return doc_id

    def update(self, collection: str, doc_id: str, patch: Patch) -> None:
        patch = Patch.from_fields(patch)
        with self._lock:
            coll = self._coll(collection)
            if str(doc_id) not in coll:
                raise NotFoundError(collection, doc_id)
            coll[str(doc_id)] = copy.deepcopy(patch.apply(coll[str(doc_id)]))

    def delete(self, collection: str, doc_id: str) -> None:
        with self._lock:
            coll = self._coll(collection)
            if str(doc_id) not in coll:
                raise NotFoundError(collection, doc_id)
            del coll[str(doc_id)]

    def batch(self) -> WriteBatch:
        return InMemoryWriteBatch(self)

    def _apply_batch(self, ops) -> int:
        with self._lock:
            # validate every op before applying any, so a batch is all-or-nothing
            gone = set()
            for kind, collection, doc_id, _ in ops:
                key = (collection, str(doc_id))
                if key in gone or str(doc_id) not in self._coll(collection):
                    raise NotFoundError(collection, doc_id)
                if kind == 'delete':
                    gone.add(key)
            for kind, collection, doc_id, patch in ops:
                coll = self._coll(collection)
                if kind == 'delete':
                    del coll[str(doc_id)]
                else:
                    coll[str(doc_id)] = copy.deepcopy(patch.apply(coll[str(doc_id)]))
        return len(ops)

    @staticmethod
    def _out(doc_id: str, doc: Dict[str, Any]) -> Dict[str, Any]:
        out = copy.deepcopy(doc)
        out['id'] = doc_id
        return out
