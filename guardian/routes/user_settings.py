from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from guardian.db import get_db
from guardian.schemas import QuietHoursStatus, SettingsOut, SettingsUpdate
from guardian.services.auth_service import get_current_user_id
from guardian.services.quiet_hours import settings_in_quiet_hours
from guardian.services.settings_store import SettingsStore, serialize_settings

router = APIRouter(prefix="/api/user-settings", tags=["user_settings"])


@router.get("", response_model=SettingsOut)
def get_settings(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return serialize_settings(SettingsStore(db).get(user_id))


@router.put("", response_model=SettingsOut)
def update_settings(
    body: SettingsUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return serialize_settings(SettingsStore(db).update(user_id, body))


@router.get("/quiet-hours", response_model=QuietHoursStatus)
def quiet_hours_status(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Whether notifications for this user are currently suppressed."""
    settings = SettingsStore(db).get(user_id)
    return {"suppressed": settings_in_quiet_hours(settings)}
