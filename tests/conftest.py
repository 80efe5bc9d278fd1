import os

# Settings are read at import time, so the environment has to be in place first
os.environ["ENVIRONMENT"] = "development"
os.environ["DB_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ADMIN_EMAILS"] = "admin@example.com"
os.environ["OTEL_ENABLED"] = "false"
os.environ["JWT_SECRET_KEY"] = "test-access-secret"
os.environ["JWT_REFRESH_SECRET_KEY"] = "test-refresh-secret"
os.environ["COOKIE_SECRET"] = "test-cookie-secret"

import pytest
from fastapi.testclient import TestClient

from main import app
from shared.config.memory_store import MemoryStore
from shared.security import limiter

PASSWORD = "Passw0rd!"

SHIPPING_ADDRESS = {
    "name": "Asha Rao",
    "street": "12 MG Road",
    "city": "Bengaluru",
    "state": "Karnataka",
    "postal_code": "560001",
}


@pytest.fixture
def store():
    app.state.memory_store = MemoryStore()
    limiter.reset()
    return app.state.memory_store


@pytest.fixture
def client(store):
    # Startup loads the built-in catalog into the fresh store
    with TestClient(app) as test_client:
        yield test_client


def register(client, name="Test User", email="user@example.com", password=PASSWORD):
    response = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def user_client(client):
    register(client)
    return client


@pytest.fixture
def admin_client(client):
    register(client, name="Admin User", email="admin@example.com")
    return client


def replace_cookie(cookies, name, value):
    """Swaps a cookie's value in place, keeping the domain the server set it for."""
    domain = next(cookie.domain for cookie in cookies.jar if cookie.name == name)
    cookies.delete(name)
    cookies.set(name, value, domain=domain)
