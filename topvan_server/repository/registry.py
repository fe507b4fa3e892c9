import logging

from topvan_server.repository.fuel_expense_repository import FuelExpenseRepository
from topvan_server.repository.general_expense_repository import GeneralExpenseRepository
from topvan_server.repository.institution_repository import InstitutionRepository
from topvan_server.repository.memory_store import InMemoryStore
from topvan_server.repository.student_repository import StudentRepository
from topvan_server.repository.trip_repository import TripRepository

logger = logging.getLogger(__name__)

STORE_BACKENDS = ('mongo', 'memory')


class RepositoryRegistry:
    """All entity repositories bound to one DocumentStore."""

    def __init__(self, store):
        self.store = store
        self.student = StudentRepository(store)
        self.institution = InstitutionRepository(store)
        self.trip = TripRepository(store)
        self.fuel_expense = FuelExpenseRepository(store)
        self.general_expense = GeneralExpenseRepository(store)


def create_store(settings, backend=None):
    """Build the DocumentStore selected by configuration (STORE_BACKEND)."""
    backend = (backend or settings.STORE_BACKEND).lower()
    if backend == 'memory':
        logger.info('Using in-memory document store')
        return InMemoryStore()
    if backend == 'mongo':
        from topvan_server.repository.mongo_helper import get_db
        from topvan_server.repository.mongo_store import MongoDocumentStore
        db = get_db(settings.MONGO_URI, settings.MONGO_DB,
                    serverSelectionTimeoutMS=settings.MONGO_TIMEOUT_MS)
        return MongoDocumentStore(db)
    raise ValueError(f"Unknown STORE_BACKEND '{backend}'; expected one of {', '.join(STORE_BACKENDS)}")
