from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from guardian.db import get_db
from guardian.schemas import AlertCreate, AlertOut
from guardian.services.alert_recorder import AlertRecorder
from guardian.services.auth_service import get_current_user_id

router = APIRouter(prefix="/api/alerts", tags=["alerts"])


@router.get("", response_model=List[AlertOut])
def list_alerts(
    limit: Optional[str] = None,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    # limit stays a raw string so junk values fall back to the default instead of failing validation
    return AlertRecorder(db).list(user_id, limit)


@router.post("")
def create_alert(
    body: AlertCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    alert_id = AlertRecorder(db).create(user_id, body)
    return {"id": alert_id, "message": "Alert created successfully"}
