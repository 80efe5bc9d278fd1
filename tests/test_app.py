from fastapi.testclient import TestClient

from conftest import PASSWORD
from main import app


def test_health_reports_memory_store(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["database"] == "disconnected"
    assert body["environment"] == "development"
    assert "timestamp" in body


def test_unknown_route(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json()["detail"] == "Route /api/nothing-here does not exist"


def test_security_headers(client):
    response = client.get("/api/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert "frame-ancestors" in response.headers["Content-Security-Policy"]


def test_login_is_rate_limited(client):
    statuses = [
        client.post("/api/auth/login", json={"email": "user@example.com", "password": PASSWORD}).status_code
        for _ in range(6)
    ]
    assert statuses == [401] * 5 + [429]


def test_unhandled_errors_include_stack_in_development(store):
    @app.get("/api/_boom", include_in_schema=False)
    async def boom():
        raise RuntimeError("kaboom")

    try:
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/_boom")
    finally:
        app.router.routes[:] = [route for route in app.router.routes if getattr(route, "path", None) != "/api/_boom"]

    assert response.status_code == 500
    body = response.json()
    assert body["detail"] == "kaboom"
    assert any("RuntimeError" in line for line in body["stack"])
