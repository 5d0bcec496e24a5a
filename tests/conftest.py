"""
Pytest configuration and fixtures for backend tests
"""
import os
import sys

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("LOG_FILE", "")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from guardian.db import Database
from guardian.main import create_app
from guardian.models import EmergencyContact, User, new_id
from guardian.services.json_fields import encode_list


@pytest.fixture(scope="function")
def database():
    """Create a fresh in-memory database for each test"""
    # StaticPool keeps the single in-memory connection alive across sessions
    db = Database("sqlite:///:memory:", poolclass=StaticPool)
    db.init()
    yield db
    db.dispose()


@pytest.fixture(scope="function")
def db_session(database):
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(database):
    """Create a test client bound to the test database"""
    app = create_app(database)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user(db_session):
    """A user row created directly in the database"""
    user = User(id=new_id(), email="alice@example.com", password_hash="not-a-real-hash")
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def sample_credentials():
    return {"email": "jane@example.com", "password": "secret123"}


@pytest.fixture
def auth_headers(client, sample_credentials):
    """Sign up through the API and return bearer headers for that user"""
    response = client.post("/api/auth/signup", json=sample_credentials)
    assert response.status_code == 200
    token = response.json()["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def current_user_id(client, auth_headers):
    return client.get("/api/auth/me", headers=auth_headers).json()["user"]["id"]


@pytest.fixture
def add_contact(db_session):
    """Factory for emergency contacts stored directly in the database"""
    def _add(user_id, name="John Doe", email="john@example.com", phone="15551234567",
             alert_methods=("email",), is_active=True):
        contact = EmergencyContact(
            id=new_id(),
            user_id=user_id,
            name=name,
            email=email,
            phone=phone,
            relationship="Friend",
            alert_methods=encode_list(alert_methods),
            is_active=is_active,
        )
        db_session.add(contact)
        db_session.commit()
        return contact
    return _add
