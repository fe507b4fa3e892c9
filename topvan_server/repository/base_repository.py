import logging

from topvan_server.exception.NotFoundError import NotFoundError
from topvan_server.repository.patch import Patch

logger = logging.getLogger(__name__)


class BaseRepository:
    """CRUD over one collection of a DocumentStore.

    Subclasses set `collection_name` (and optionally `default_sort`) and add
    their entity specific operations. Store errors propagate unchanged.
    """
    collection_name = None
    default_sort = None

    def __init__(self, store):
        self.store = store

    def create(self, data):
        """Insert a new document and return its id."""
        doc_id = self.store.insert(self.collection_name, dict(data))
        logger.info(f"Created {self.collection_name}/{doc_id}")
        return doc_id

    def find(self, query=None, sort=None):
        """Find documents whose fields equal every value in `query`."""
        return self.store.find(self.collection_name, query, sort=sort or self.default_sort)

    def find_one(self, doc_id):
        """Return the document with `doc_id` or None."""
        return self.store.find_one(self.collection_name, doc_id)

    def get(self, doc_id):
        """Return the document with `doc_id` or raise NotFoundError."""
        doc = self.find_one(doc_id)
        if doc is None:
            raise NotFoundError(self.collection_name, doc_id)
        return doc

    def update(self, doc_id, update_fields):
        """Apply only the supplied fields (dict or Patch) to the document."""
        patch = Patch.from_fields(update_fields)
        self.store.update(self.collection_name, doc_id, patch)
        logger.info(f"Updated {self.collection_name}/{doc_id}: {sorted(k for k, _ in patch.items())}")

    def delete_field(self, doc_id, *fields):
        """Remove fields from the document (absent afterwards, not null)."""
        patch = Patch()
        for field in fields:
            patch.delete(field)
        self.update(doc_id, patch)

    def delete(self, doc_id):
        """Delete the document with `doc_id`."""
        self.store.delete(self.collection_name, doc_id)
        logger.info(f"Deleted {self.collection_name}/{doc_id}")

    def delete_all(self):
        """Delete every document in one batch. Returns the number deleted."""
        docs = self.find()
        if not docs:
            return 0
        batch = self.store.batch()
        for doc in docs:
            batch.delete(self.collection_name, doc['id'])
        batch.commit()
        logger.info(f"Deleted all {len(docs)} documents from {self.collection_name}")
        return len(docs)
