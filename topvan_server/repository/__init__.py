"""Persistence layer: the DocumentStore abstraction, its implementations and
the per-entity repositories built on top of it."""
from .patch import Patch, SetField, DeleteField, DELETE_FIELD
from .document_store import DocumentStore, WriteBatch
from .memory_store import InMemoryStore
from .registry import RepositoryRegistry, create_store

__all__ = [
    'Patch', 'SetField', 'DeleteField', 'DELETE_FIELD',
    'DocumentStore', 'WriteBatch', 'InMemoryStore',
    'RepositoryRegistry', 'create_store',
]
