"""
Test cases for app startup and database readiness
"""
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from guardian.db import Database
from guardian.main import create_app


def test_health_check(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["database_ready"] is True


def test_requests_rejected_until_database_ready():
    """
    Test: Call the API before the database has been initialised
    Confirm: 503 instead of a crash
    """
    database = Database("sqlite:///:memory:", poolclass=StaticPool)
    app = create_app(database)

    # no context manager: lifespan (and database.init) never runs
    client = TestClient(app)
    response = client.post("/api/auth/signup", json={"email": "a@example.com", "password": "secret123"})

    assert response.status_code == 503
    assert response.json()["detail"] == "Database not ready. Please wait..."


def test_lifespan_initialises_database():
    database = Database("sqlite:///:memory:", poolclass=StaticPool)
    assert database.ready is False

    with TestClient(create_app(database)) as client:
        assert database.ready is True
        assert client.get("/api/health").json()["database_ready"] is True
