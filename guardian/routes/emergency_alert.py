from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from guardian.db import get_db
from guardian.schemas import EmergencyAlertRequest, EmergencyAlertResponse
from guardian.services.alert_recorder import AlertRecorder
from guardian.services.auth_service import get_current_user_id

router = APIRouter(prefix="/api/emergency-alert", tags=["emergency_alert"])


@router.post("", response_model=EmergencyAlertResponse)
def send_emergency_alert(
    body: EmergencyAlertRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    result = AlertRecorder(db).send_emergency(
        user_id,
        location=body.location,
        alert_type=body.alertType,
        camera_id=body.cameraId,
        camera_name=body.cameraName,
    )
    return {
        "success": True,
        "message": f"Emergency alert sent to {result.contacts_notified} contact(s)",
        "alertId": result.alert_id,
        "contactsNotified": result.contacts_notified,
        "contacts": result.results,
    }
