import pytest
from fastapi.testclient import TestClient

from file_vault.config.settings import Settings
from file_vault.main import create_app
from object_store import InMemoryObjectStore
from tests.fixtures.store_fixtures import (  # noqa: F401
    failing_store,
    mongo_store,
    object_store,
    sqlite_store,
)


@pytest.fixture
def settings() -> Settings:
    return Settings(deployment_mode="memory", frontend_url="http://localhost:3000")


@pytest.fixture
def memory_store() -> InMemoryObjectStore:
    return InMemoryObjectStore()


@pytest.fixture
def client(settings: Settings, memory_store: InMemoryObjectStore) -> TestClient:
    app = create_app(settings=settings, store=memory_store)
    with TestClient(app) as test_client:
        yield test_client
