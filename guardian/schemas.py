from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, EmailStr, Field

# ==================== Auth =========================

class UserCreate(BaseModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class UserOut(BaseModel):
    id: str
    email: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class Token(BaseModel):
    token: str
    user: UserOut


# ==================== Emergency Contacts ====================

class EmergencyContactIn(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    relationship: Optional[str] = None
    alert_methods: Optional[List[str]] = None
    is_active: Optional[bool] = None


class EmergencyContactOut(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    relationship: str
    is_active: bool
    alert_methods: List[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ==================== Alerts ====================

class AlertCreate(BaseModel):
    """Required fields are checked by the recorder so it can report them together."""
    alert_type: Optional[str] = None
    status: Optional[str] = None
    confidence: Optional[int] = None
    description: Optional[str] = None
    location: Optional[str] = None
    camera_id: Optional[str] = None
    camera_name: Optional[str] = None
    action_taken: Optional[str] = None
    contacts_notified: Optional[List[Any]] = None
    alert_results: Optional[List[Any]] = None


class AlertOut(BaseModel):
    id: str
    alert_type: str
    status: str
    confidence: int
    description: str
    location: str
    camera_id: Optional[str] = None
    camera_name: Optional[str] = None
    action_taken: str
    contacts_notified: List[Any]
    alert_results: List[Any]
    created_at: Optional[datetime] = None


class EmergencyAlertRequest(BaseModel):
    location: Optional[str] = None
    alertType: Optional[str] = None
    cameraId: Optional[str] = None
    cameraName: Optional[str] = None


class EmergencyAlertResponse(BaseModel):
    success: bool
    message: str
    alertId: str
    contactsNotified: int
    contacts: List[Any]


# ==================== User Settings ====================

class SettingsUpdate(BaseModel):
    """
    Partial settings update. Only fields the client actually sent are applied;
    pydantic's unset tracking is the "absent" marker.
    """
    detection_sensitivity: Optional[str] = None
    confidence_threshold: Optional[int] = Field(default=None, ge=0, le=100)
    realtime_processing: Optional[bool] = None
    video_quality: Optional[str] = None
    frame_rate: Optional[int] = Field(default=None, gt=0)
    auto_start_detection: Optional[bool] = None
    audio_alerts: Optional[bool] = None
    alert_volume: Optional[int] = Field(default=None, ge=0, le=100)
    auto_notify_contacts: Optional[bool] = None
    quiet_hours_enabled: Optional[bool] = None
    quiet_hours_start: Optional[str] = None
    quiet_hours_end: Optional[str] = None
    quiet_hours_days: Optional[List[str]] = None

    def present_fields(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class SettingsOut(BaseModel):
    id: str
    user_id: str
    detection_sensitivity: str
    confidence_threshold: int
    realtime_processing: bool
    video_quality: str
    frame_rate: int
    auto_start_detection: bool
    audio_alerts: bool
    alert_volume: int
    auto_notify_contacts: bool
    quiet_hours_enabled: bool
    quiet_hours_start: str
    quiet_hours_end: str
    quiet_hours_days: List[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class QuietHoursStatus(BaseModel):
    suppressed: bool


# ==================== Frame Analysis ====================

class FrameAnalysisRequest(BaseModel):
    frameData: str
    cameraId: Optional[str] = None
    cameraName: Optional[str] = None


class FrameAnalysisResult(BaseModel):
    status: str  # "safe" | "warning" | "danger"
    confidence: int
    description: str
    cameraId: Optional[str] = None
    cameraName: Optional[str] = None
    timestamp: str
    degraded: bool = False
    error: Optional[str] = None
