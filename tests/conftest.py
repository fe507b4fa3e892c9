import pytest

from topvan_server.app import create_app
from topvan_server.dto.expense_dto import ExpenseCategory
from topvan_server.repository.memory_store import InMemoryStore
from topvan_server.repository.registry import RepositoryRegistry


class StubCategorizer:
    """Records descriptions and answers with a fixed category."""

    def __init__(self, category=ExpenseCategory.ALIMENTACAO, error=None):
        self.category = category
        self.error = error
        self.calls = []

    def categorize(self, description):
        self.calls.append(description)
        if self.error is not None:
            raise self.error
        return self.category


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def registry(store):
    return RepositoryRegistry(store)


@pytest.fixture
def categorizer():
    return StubCategorizer()


@pytest.fixture
def app(store, categorizer, monkeypatch):
    monkeypatch.delenv('RESET_TRIP_POLICY', raising=False)
    app = create_app(store=store, categorizer=categorizer)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def registry_of(app):
    return app.extensions['repositories']
