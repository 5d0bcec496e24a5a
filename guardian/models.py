#These objects represent the user, emergency contact, alert and settings records in the database
import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from guardian.db import Base

DEFAULT_QUIET_HOURS_DAYS = '["monday","tuesday","wednesday","thursday","friday","saturday","sunday"]'


def new_id():
    return str(uuid.uuid4())


def utcnow():
    # naive UTC; SQLite drops tzinfo on the way back anyway
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    contacts = relationship("EmergencyContact", cascade="all, delete-orphan", passive_deletes=True)
    alerts = relationship("Alert", cascade="all, delete-orphan", passive_deletes=True)
    settings = relationship("UserSettings", cascade="all, delete-orphan", passive_deletes=True, uselist=False)


class EmergencyContact(Base):
    __tablename__ = "emergency_contacts"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False, default="")
    relationship = Column(String(100), nullable=False, default="Friend")
    is_active = Column(Boolean, nullable=False, default=True)
    # JSON text list, e.g. '["email", "sms"]'
    alert_methods = Column(Text, nullable=False, default='["email"]')
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class Alert(Base):
    __tablename__ = "alerts"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    alert_type = Column(String(100), nullable=False)
    status = Column(String(10), nullable=False)
    confidence = Column(Integer, nullable=False, default=0)
    description = Column(Text, nullable=False)
    location = Column(String(255), nullable=False)
    camera_id = Column(String(100))
    camera_name = Column(String(255))
    action_taken = Column(Text, nullable=False)
    contacts_notified = Column(Text, default="[]")
    alert_results = Column(Text, default="[]")
    created_at = Column(DateTime, default=utcnow, index=True)


class UserSettings(Base):
    __tablename__ = "user_settings"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False, index=True)
    detection_sensitivity = Column(String(50), nullable=False, default="high")
    confidence_threshold = Column(Integer, nullable=False, default=75)
    realtime_processing = Column(Boolean, nullable=False, default=True)
    video_quality = Column(String(50), nullable=False, default="hd")
    frame_rate = Column(Integer, nullable=False, default=30)
    auto_start_detection = Column(Boolean, nullable=False, default=False)
    audio_alerts = Column(Boolean, nullable=False, default=True)
    alert_volume = Column(Integer, nullable=False, default=85)
    auto_notify_contacts = Column(Boolean, nullable=False, default=True)
    quiet_hours_enabled = Column(Boolean, nullable=False, default=False)
    quiet_hours_start = Column(String(10), nullable=False, default="22:00")
    quiet_hours_end = Column(String(10), nullable=False, default="08:00")
    quiet_hours_days = Column(Text, nullable=False, default=DEFAULT_QUIET_HOURS_DAYS)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
