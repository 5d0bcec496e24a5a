import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from guardian.config import ALERT_METHODS
from guardian.db import get_db
from guardian.errors import NotFoundError, ValidationError
from guardian.models import EmergencyContact, new_id
from guardian.schemas import EmergencyContactIn, EmergencyContactOut
from guardian.services.auth_service import get_current_user_id
from guardian.services.json_fields import decode_list, encode_list

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/emergency-contacts", tags=["contacts"])


def _validate_methods(methods):
    if not methods:
        return ["email"]
    unknown = [m for m in methods if m not in ALERT_METHODS]
    if unknown:
        raise ValidationError(f"Unknown alert method(s): {', '.join(unknown)}")
    # keep order, drop duplicates
    return list(dict.fromkeys(methods))


def _serialize(contact: EmergencyContact):
    return {
        "id": contact.id,
        "name": contact.name,
        "email": contact.email,
        "phone": contact.phone,
        "relationship": contact.relationship,
        "is_active": bool(contact.is_active),
        "alert_methods": decode_list(contact.alert_methods, "alert_methods"),
        "created_at": contact.created_at,
        "updated_at": contact.updated_at,
    }


def _owned_contact(db: Session, contact_id: str, user_id: str) -> EmergencyContact:
    contact = db.query(EmergencyContact).filter(EmergencyContact.id == contact_id).first()
    if not contact or contact.user_id != user_id:
        raise NotFoundError("Contact not found")
    return contact


@router.get("", response_model=List[EmergencyContactOut])
def get_contacts(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    contacts = (
        db.query(EmergencyContact)
        .filter(EmergencyContact.user_id == user_id)
        .order_by(EmergencyContact.created_at.desc())
        .all()
    )
    return [_serialize(c) for c in contacts]


@router.post("")
def add_contact(
        body: EmergencyContactIn,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    if not body.name or not body.email:
        raise ValidationError("Name and email are required")
    methods = _validate_methods(body.alert_methods)

    try:
        contact = EmergencyContact(
            id=new_id(),
            user_id=user_id,
            name=body.name,
            email=body.email,
            phone=body.phone or "",
            relationship=body.relationship or "Friend",
            alert_methods=encode_list(methods),
            is_active=True,
        )
        db.add(contact)
        db.commit()
        return {"id": contact.id, "message": "Contact added successfully"}
    except Exception as e:
        db.rollback()
        logger.exception("Error creating contact")
        raise HTTPException(status_code=500, detail=f"Error adding Contact: {str(e)}")


@router.put("/{contact_id}")
def update_contact(
        contact_id: str,
        body: EmergencyContactIn,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    contact = _owned_contact(db, contact_id, user_id)
    if not body.name or not body.email:
        raise ValidationError("Name and email are required")

    contact.name = body.name
    contact.email = body.email
    contact.phone = body.phone or ""
    contact.relationship = body.relationship or "Friend"
    contact.alert_methods = encode_list(_validate_methods(body.alert_methods))
    contact.is_active = True if body.is_active is None else body.is_active
    db.commit()
    return {"message": "Contact updated successfully"}


@router.delete("/{contact_id}")
def delete_contact(
        contact_id: str,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    contact = _owned_contact(db, contact_id, user_id)
    db.delete(contact)
    db.commit()
    return {"message": "Contact deleted successfully"}
