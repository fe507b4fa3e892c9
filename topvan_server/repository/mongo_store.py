"""MongoDB implementation of DocumentStore.

Documents are stored with a native ObjectId `_id`; callers only ever see
the string form under `id`. pymongo failures are translated to
StoreUnavailable so routes can report them without knowing the driver.
"""
import functools
import logging
from collections import OrderedDict
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, DESCENDING, DeleteOne, UpdateOne
from pymongo.errors import PyMongoError

from topvan_server.exception.NotFoundError import NotFoundError
from topvan_server.exception.StoreUnavailable import StoreUnavailable
from topvan_server.repository.document_store import DocumentStore, SortSpec, WriteBatch
from topvan_server.repository.patch import Patch

logger = logging.getLogger(__name__)


def _store_call(func):
    """Translate driver errors into StoreUnavailable."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except PyMongoError as e:
            logger.exception('MongoDB operation %s failed', func.__name__)
            raise StoreUnavailable(f'Document store unavailable: {e}', cause=e) from e
    return wrapper


def _object_id(doc_id) -> Optional[ObjectId]:
    if isinstance(doc_id, ObjectId):
        return doc_id
    try:
        return ObjectId(str(doc_id))
    except (InvalidId, TypeError):
        return None


def _out(doc: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(doc)
    out['id'] = str(out.pop('_id'))
    return out


class MongoWriteBatch(WriteBatch):
    def __init__(self, store: 'MongoDocumentStore'):
        super().__init__()
        self._store = store

    @_store_call
    def commit(self) -> int:
        by_collection: 'OrderedDict[str, list]' = OrderedDict()
        for kind, collection, doc_id, patch in self._ops:
            oid = _object_id(doc_id)
            if oid is None:
                raise NotFoundError(collection, doc_id)
            if kind == 'delete':
                op = DeleteOne({'_id': oid})
            else:
                op = UpdateOne({'_id': oid}, patch.to_mongo())
            by_collection.setdefault(collection, []).append(op)

        applied = 0
        for collection, ops in by_collection.items():
            result = self._store.db[collection].bulk_write(ops, ordered=True)
            touched = result.matched_count + result.deleted_count
            if touched < len(ops):
                logger.warning('Batch on %s touched %s of %s documents', collection, touched, len(ops))
            applied += touched
        return applied


class MongoDocumentStore(DocumentStore):

    def __init__(self, db):
        self.db = db

    @_store_call
    def find(self, collection: str, query: Optional[Dict[str, Any]] = None,
             sort: Optional[SortSpec] = None) -> List[Dict[str, Any]]:
        cursor = self.db[collection].find(dict(query or {}))
        if sort:
            cursor = cursor.sort([(f, ASCENDING if d >= 0 else DESCENDING) for f, d in sort])
        return [_out(doc) for doc in cursor]

    @_store_call
    def find_one(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        oid = _object_id(doc_id)
        if oid is None:
            return None
        doc = self.db[collection].find_one({'_id': oid})
        return _out(doc) if doc else None

    @_store_call
    def insert(self, collection: str, document: Dict[str, Any]) -> str:
        doc = {k: v for k, v in document.items() if k not in ('id', '_id')}
        res = self.db[collection].insert_one(doc)
        return str(res.inserted_id)

    @_store_call
    def update(self, collection: str, doc_id: str, patch: Patch) -> None:
        oid = _object_id(doc_id)
        update = Patch.from_fields(patch).to_mongo()
        if oid is None:
            raise NotFoundError(collection, doc_id)
        if not update:
            if self.db[collection].count_documents({'_id': oid}, limit=1) == 0:
                raise NotFoundError(collection, doc_id)
            return
        res = self.db[collection].update_one({'_id': oid}, update)
        if res.matched_count == 0:
            raise NotFoundError(collection, doc_id)

    @_store_call
    def delete(self, collection: str, doc_id: str) -> None:
        oid = _object_id(doc_id)
        if oid is None:
            raise NotFoundError(collection, doc_id)
        res = self.db[collection].delete_one({'_id': oid})
        if res.deleted_count == 0:
            raise NotFoundError(collection, doc_id)

    def batch(self) -> WriteBatch:
        return MongoWriteBatch(self)

    def close(self) -> None:
        client = getattr(self.db, 'client', None)
        if client is not None:
            client.close()
