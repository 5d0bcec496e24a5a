"""
Append-only alert log and the emergency notification workflow.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from guardian import config
from guardian.errors import NoActiveContactsError, NotFoundError, ValidationError
from guardian.models import Alert, EmergencyContact, User, new_id, utcnow
from guardian.schemas import AlertCreate
from guardian.services import notifier
from guardian.services.json_fields import decode_list, encode_list

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("alert_type", "status", "description", "location", "action_taken")


@dataclass
class EmergencyResult:
    alert_id: str
    contacts_notified: int
    results: List[dict] = field(default_factory=list)


def clamp_confidence(value) -> int:
    try:
        value = int(value or 0)
    except (TypeError, ValueError, OverflowError):
        value = 0
    return max(0, min(100, value))


def normalize_limit(limit) -> int:
    """Default 100, capped at 1000; anything non-positive or non-integer gets the default."""
    if isinstance(limit, bool):
        return config.DEFAULT_ALERT_LIMIT
    if isinstance(limit, float):
        if not limit.is_integer():
            return config.DEFAULT_ALERT_LIMIT
        limit = int(limit)
    try:
        limit = int(limit)
    except (TypeError, ValueError):
        return config.DEFAULT_ALERT_LIMIT
    if limit <= 0:
        return config.DEFAULT_ALERT_LIMIT
    return min(limit, config.MAX_ALERT_LIMIT)


def serialize_alert(alert: Alert) -> dict:
    return {
        "id": alert.id,
        "alert_type": alert.alert_type,
        "status": alert.status,
        "confidence": alert.confidence,
        "description": alert.description,
        "location": alert.location,
        "camera_id": alert.camera_id,
        "camera_name": alert.camera_name,
        "action_taken": alert.action_taken,
        "contacts_notified": decode_list(alert.contacts_notified, "contacts_notified"),
        "alert_results": decode_list(alert.alert_results, "alert_results"),
        "created_at": alert.created_at,
    }


class AlertRecorder:
    def __init__(self, db: Session):
        self.db = db

    def create(self, user_id: str, fields: AlertCreate) -> str:
        missing = [name for name in REQUIRED_FIELDS if not getattr(fields, name)]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        if fields.status not in config.ALERT_STATUSES:
            raise ValidationError(
                f"Invalid status '{fields.status}', expected one of {', '.join(config.ALERT_STATUSES)}"
            )

        alert = Alert(
            id=new_id(),
            user_id=user_id,
            alert_type=fields.alert_type,
            status=fields.status,
            confidence=clamp_confidence(fields.confidence),
            description=fields.description,
            location=fields.location,
            camera_id=fields.camera_id or None,
            camera_name=fields.camera_name or None,
            action_taken=fields.action_taken,
            contacts_notified=encode_list(fields.contacts_notified),
            alert_results=encode_list(fields.alert_results),
            created_at=utcnow(),
        )
        self.db.add(alert)
        try:
            self.db.commit()
        except IntegrityError:
            # owning user row is gone
            self.db.rollback()
            raise NotFoundError("User not found")
        logger.info("Recorded %s alert %s for user %s", alert.status, alert.id, user_id)
        return alert.id

    def list(self, user_id: str, limit=config.DEFAULT_ALERT_LIMIT) -> List[dict]:
        rows = (
            self.db.query(Alert)
            .filter(Alert.user_id == user_id)
            .order_by(Alert.created_at.desc())
            .limit(normalize_limit(limit))
            .all()
        )
        return [serialize_alert(row) for row in rows]

    def send_emergency(
        self,
        user_id: str,
        location: Optional[str],
        alert_type: Optional[str],
        camera_id: Optional[str] = None,
        camera_name: Optional[str] = None,
    ) -> EmergencyResult:
        contacts = (
            self.db.query(EmergencyContact)
            .filter(EmergencyContact.user_id == user_id, EmergencyContact.is_active.is_(True))
            .all()
        )
        if not contacts:
            raise NoActiveContactsError("No active emergency contacts found. Please add contacts first.")

        logger.info("Emergency alert triggered for user %s, %d active contact(s)", user_id, len(contacts))

        user = self.db.query(User).filter(User.id == user_id).first()
        alert_type = alert_type or "Manual Emergency"
        location = location or "Location not available"
        message = notifier.AlertMessage(
            user_email=user.email if user else "a Guardian Vision user",
            alert_type=alert_type,
            location=location,
            alert_time=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            camera_name=camera_name,
        )

        results = []
        for contact in contacts:
            methods = decode_list(contact.alert_methods, "alert_methods")
            results.append(notifier.notify_contact(contact, methods, message))

        contacts_notified = [
            {"name": c.name, "email": c.email, "phone": c.phone,
             "methods": decode_list(c.alert_methods, "alert_methods")}
            for c in contacts
        ]

        # the summary row is written whatever the individual delivery outcomes
        alert = Alert(
            id=new_id(),
            user_id=user_id,
            alert_type=alert_type,
            status="danger",
            confidence=100,
            description=f"Emergency alert triggered: {alert_type}",
            location=location,
            camera_id=camera_id or None,
            camera_name=camera_name or None,
            action_taken=f"Alerted {len(contacts)} emergency contact(s)",
            contacts_notified=encode_list(contacts_notified),
            alert_results=encode_list(results),
            created_at=utcnow(),
        )
        self.db.add(alert)
        self.db.commit()
        logger.info("Emergency alert %s saved for user %s", alert.id, user_id)

        return EmergencyResult(alert_id=alert.id, contacts_notified=len(contacts), results=results)
