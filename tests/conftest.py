"""
Pytest configuration and fixtures.
"""
import pytest
from fastapi.testclient import TestClient

from hwid_api.main import create_app
from hwid_api.services.credential_store import CredentialStore


@pytest.fixture(scope="function")
def store():
    """Fresh, isolated credential store for each test."""
    return CredentialStore()


@pytest.fixture(scope="function")
def app(store):
    """Application bound to the test's store."""
    return create_app(store=store)


@pytest.fixture(scope="function")
def client(app):
    """Test client for the application."""
    return TestClient(app)


@pytest.fixture(scope="function")
def created(client):
    """Register one device with an explicit HWID and return the response body."""
    response = client.post("/api/keys", json={"hwid": "DEVICE-1234"})
    assert response.status_code == 200
    return response.json()


@pytest.fixture(scope="function")
def auth_headers(created):
    """Headers that authorize the `created` credential."""
    return {"X-API-Key": created["key"], "X-HWID": created["hwid"]}
