import pytest
from fastapi.testclient import TestClient

from swiftlink.core.config import BaseOptions, DatabaseConfig, DatabaseType, Settings
from swiftlink.db.repository import create_store
from swiftlink.main import create_app
from swiftlink.services.shortener import LinkRegistry


TEST_BEARER_TOKEN = "s3cr3tT0kn"


@pytest.fixture
def settings():
    """Settings for an in-memory SQLite database."""
    return Settings(
        base=BaseOptions(bearer_token=TEST_BEARER_TOKEN),
        database=DatabaseConfig(database_type=DatabaseType.SQLITE, database=":memory:"),
    )


@pytest.fixture
def store(settings):
    """Creates a fresh database for each test."""
    store = create_store(settings.database)
    store.ensure_schema()
    try:
        yield store
    finally:
        store.dispose()


@pytest.fixture
def registry(store, settings):
    return LinkRegistry(store, code_size=settings.base.code_size)


@pytest.fixture
def app(settings, store):
    return create_app(settings, store=store)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(bearer_token):
    return {"Authorization": f"Bearer {bearer_token}"}


@pytest.fixture
def sample_urls():
    """Provides sample URLs for testing."""
    return [
        "https://example.com/test1",
        "https://google.com/search?q=test",
        "https://github.com/user/repo",
    ]


@pytest.fixture
def bearer_token():
    return TEST_BEARER_TOKEN
