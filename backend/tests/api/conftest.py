"""
Pytest fixtures for collector API tests.

Provides a FastAPI test client with a fresh submission store per test.
"""
import pytest
from fastapi.testclient import TestClient

from trialsink.main import app
from trialsink.api.collector import SubmissionStore, get_store


@pytest.fixture(scope="function")
def store():
    """Fresh in-process submission store."""
    return SubmissionStore()


@pytest.fixture(scope="function")
def api_app(store):
    """App with the store dependency overridden."""
    app.dependency_overrides[get_store] = lambda: store
    yield app
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client(api_app):
    with TestClient(api_app) as test_client:
        yield test_client
