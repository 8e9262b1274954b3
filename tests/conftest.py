"""
Test configuration and fixtures for the shortlink service.
This centralizes all test setup, making individual tests clean.
"""

from unittest.mock import MagicMock

import pytest
import redis
from fastapi.testclient import TestClient

from main import create_app
from shortlink_app.config import Settings
from shortlink_app.storage.strategies import InMemoryUrlStore, SQLUrlStore, RedisUrlStore


@pytest.fixture
def test_settings():
    """Settings isolated from any local .env file"""
    return Settings(
        _env_file=None,
        environment="test",
        store_backend="memory",
        log_level="WARNING",
        max_retries=3,
    )


@pytest.fixture
def memory_store():
    return InMemoryUrlStore(shards=8)


@pytest.fixture
def sql_store(tmp_path):
    """SQLite-file store, fresh per test"""
    store = SQLUrlStore(database_url=f"sqlite:///{tmp_path / 'shortlinks.db'}")
    yield store
    store.engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Runs a test once per real (non-mocked) backend"""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def redis_client():
    """Mock Redis client; tests set return values per command"""
    client = MagicMock(spec=redis.Redis)
    client.set.return_value = True
    client.get.return_value = None
    return client


@pytest.fixture
def redis_store(redis_client):
    return RedisUrlStore(redis_client, prefix="testapp")


@pytest.fixture
def app(test_settings, memory_store):
    """App wired to an in-memory store"""
    return create_app(settings=test_settings, store=memory_store)


@pytest.fixture
def client(app):
    """
    Create a test client for the app.
    This is the main fixture that tests will use.
    """
    with TestClient(app) as test_client:
        yield test_client
