"""
Persistence of the one-row-per-user UserSettings record.
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from guardian.config import WEEKDAYS
from guardian.errors import NotFoundError, ValidationError
from guardian.models import UserSettings, new_id, utcnow
from guardian.schemas import SettingsUpdate
from guardian.services.json_fields import decode_list, encode_list
from guardian.services.quiet_hours import parse_time

logger = logging.getLogger(__name__)


class SettingsStore:
    def __init__(self, db: Session):
        self.db = db

    def _find(self, user_id: str) -> Optional[UserSettings]:
        return self.db.query(UserSettings).filter(UserSettings.user_id == user_id).first()

    def get(self, user_id: str) -> UserSettings:
        """Return the user's settings, creating the default row on first access."""
        settings = self._find(user_id)
        if settings:
            return settings

        self.db.add(UserSettings(id=new_id(), user_id=user_id))
        try:
            self.db.commit()
        except IntegrityError:
            # another request created the row first; user_id is unique
            self.db.rollback()
            logger.info("Settings for user %s created concurrently, reusing existing row", user_id)
        else:
            logger.info("Created default settings for user %s", user_id)

        settings = self._find(user_id)
        if settings is None:
            raise NotFoundError("Settings not found")
        return settings

    def update(self, user_id: str, fields: SettingsUpdate) -> UserSettings:
        updates = fields.present_fields()
        if not updates:
            raise ValidationError("No valid fields to update")

        for key in ("quiet_hours_start", "quiet_hours_end"):
            if key in updates:
                parse_time(updates[key])

        if "quiet_hours_days" in updates:
            updates["quiet_hours_days"] = encode_list(_normalize_days(updates["quiet_hours_days"]))

        settings = self._find(user_id)
        if settings is None:
            raise NotFoundError("Settings not found")

        for key, value in updates.items():
            setattr(settings, key, value)
        settings.updated_at = utcnow()

        self.db.commit()
        self.db.refresh(settings)
        return settings


def _normalize_days(days) -> list:
    normalized = []
    for day in days:
        name = str(day).strip().lower()
        if name not in WEEKDAYS:
            raise ValidationError(f"Unknown weekday '{day}'")
        if name not in normalized:
            normalized.append(name)
    return normalized


def serialize_settings(settings: UserSettings) -> dict:
    return {
        "id": settings.id,
        "user_id": settings.user_id,
        "detection_sensitivity": settings.detection_sensitivity,
        "confidence_threshold": settings.confidence_threshold,
        "realtime_processing": bool(settings.realtime_processing),
        "video_quality": settings.video_quality,
        "frame_rate": settings.frame_rate,
        "auto_start_detection": bool(settings.auto_start_detection),
        "audio_alerts": bool(settings.audio_alerts),
        "alert_volume": settings.alert_volume,
        "auto_notify_contacts": bool(settings.auto_notify_contacts),
        "quiet_hours_enabled": bool(settings.quiet_hours_enabled),
        "quiet_hours_start": settings.quiet_hours_start,
        "quiet_hours_end": settings.quiet_hours_end,
        "quiet_hours_days": decode_list(settings.quiet_hours_days, "quiet_hours_days"),
        "created_at": settings.created_at,
        "updated_at": settings.updated_at,
    }
