"""
Test cases for Emergency Contacts API
"""
from guardian.models import EmergencyContact, User, new_id


def test_add_contact(client, auth_headers):
    """
    Test: Add emergency contact to database
    Confirm: Contact saved with defaults for optional fields
    Input: name="John Doe", email="john@example.com"
    Result: Returns 200, id created, alert_methods=["email"]
    """
    response = client.post(
        "/api/emergency-contacts",
        json={"name": "John Doe", "email": "john@example.com"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Contact added successfully"

    contacts = client.get("/api/emergency-contacts", headers=auth_headers).json()
    assert len(contacts) == 1
    assert contacts[0]["id"] == data["id"]
    assert contacts[0]["relationship"] == "Friend"
    assert contacts[0]["phone"] == ""
    assert contacts[0]["is_active"] is True
    assert contacts[0]["alert_methods"] == ["email"]


def test_add_contact_requires_name_and_email(client, auth_headers):
    response = client.post("/api/emergency-contacts", json={"name": "John Doe"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Name and email are required"


def test_add_contact_rejects_unknown_method(client, auth_headers):
    response = client.post(
        "/api/emergency-contacts",
        json={"name": "John Doe", "email": "john@example.com", "alert_methods": ["pigeon"]},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json()["kind"] == "validation_error"


def test_get_contacts_only_own(client, auth_headers, current_user_id, add_contact, db_session):
    """
    Test: Get all contacts for user
    Confirm: Returns only the caller's contacts
    """
    other = User(id=new_id(), email="bob@example.com", password_hash="x")
    db_session.add(other)
    db_session.commit()
    add_contact(current_user_id, name="John Doe")
    add_contact(current_user_id, name="Jane Smith")
    add_contact(other.id, name="Bob Jones")

    response = client.get("/api/emergency-contacts", headers=auth_headers)

    assert response.status_code == 200
    names = {c["name"] for c in response.json()}
    assert names == {"John Doe", "Jane Smith"}


def test_update_contact(client, auth_headers, current_user_id, add_contact):
    contact = add_contact(current_user_id)

    response = client.put(
        f"/api/emergency-contacts/{contact.id}",
        json={"name": "John Q. Doe", "email": "jq@example.com", "alert_methods": ["sms", "email"],
              "is_active": False},
        headers=auth_headers,
    )

    assert response.status_code == 200
    updated = client.get("/api/emergency-contacts", headers=auth_headers).json()[0]
    assert updated["name"] == "John Q. Doe"
    assert updated["alert_methods"] == ["sms", "email"]
    assert updated["is_active"] is False


def test_update_other_users_contact(client, auth_headers, add_contact, user):
    contact = add_contact(user.id)

    response = client.put(
        f"/api/emergency-contacts/{contact.id}",
        json={"name": "Hijack", "email": "x@example.com"},
        headers=auth_headers,
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Contact not found"


def test_delete_contact(client, auth_headers, current_user_id, add_contact, db_session):
    """
    Test: Delete contact by ID
    Confirm: Contact removed from database
    """
    contact = add_contact(current_user_id)
    contact_id = contact.id

    response = client.delete(f"/api/emergency-contacts/{contact_id}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Contact deleted successfully"
    db_session.expire_all()
    assert db_session.query(EmergencyContact).filter_by(id=contact_id).first() is None


def test_delete_nonexistent_contact(client, auth_headers):
    response = client.delete("/api/emergency-contacts/999", headers=auth_headers)

    assert response.status_code == 404
    assert response.json()["detail"] == "Contact not found"


def test_add_contact_database_error(client, auth_headers, monkeypatch):
    """
    Test: Handle database error when adding contact
    Confirm: Returns 500 error with error message
    """
    from sqlalchemy.orm import Session

    def mock_commit_error(self):
        raise Exception("Database connection lost")

    monkeypatch.setattr(Session, "commit", mock_commit_error)

    response = client.post(
        "/api/emergency-contacts",
        json={"name": "John Doe", "email": "john@example.com"},
        headers=auth_headers,
    )

    assert response.status_code == 500
    assert "Error adding Contact" in response.json()["detail"]


def test_deleting_user_cascades(db_session, user, add_contact):
    add_contact(user.id)
    user_id = user.id

    db_session.delete(user)
    db_session.commit()

    assert db_session.query(EmergencyContact).filter_by(user_id=user_id).count() == 0
