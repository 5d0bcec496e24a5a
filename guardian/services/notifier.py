"""
Per-contact, per-method delivery of an emergency alert.

Each channel either returns a short success note or raises; the caller
records the outcome of every method independently.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from guardian.errors import UpstreamUnavailableError
from guardian.models import EmergencyContact
from guardian.services import email_service
from guardian.services.sms_service import send_sms

logger = logging.getLogger(__name__)


@dataclass
class AlertMessage:
    user_email: str
    alert_type: str
    location: str
    alert_time: str
    camera_name: Optional[str] = None

    def text(self) -> str:
        return (
            f"🚨 EMERGENCY ALERT from {self.user_email}!\n\n"
            f"Type: {self.alert_type}\n"
            f"Time: {self.alert_time}\n"
            f"Location: {self.location}\n\n"
            "This person needs immediate assistance. Please respond or call them immediately."
        )


def notify_email(contact: EmergencyContact, message: AlertMessage) -> str:
    html = email_service.build_alert_html(
        message.user_email, message.alert_type, message.alert_time,
        message.location, message.camera_name,
    )
    email_service.send_email(contact.email, email_service.EMERGENCY_SUBJECT, html)
    return "Email sent successfully"


def notify_sms(contact: EmergencyContact, message: AlertMessage) -> str:
    if not contact.phone:
        raise UpstreamUnavailableError("No phone number on file")
    result = send_sms(contact.phone, message.text())
    if result.get("status") != "success":
        raise UpstreamUnavailableError(result.get("error") or "Unknown error")
    return "SMS sent successfully"


def notify_call(contact: EmergencyContact, message: AlertMessage) -> str:
    raise UpstreamUnavailableError("Voice calls are not configured")


def notify_push(contact: EmergencyContact, message: AlertMessage) -> str:
    # push notifications are delivered by the browser client
    raise UpstreamUnavailableError("Push notifications are not available server-side")


CHANNELS = {
    "email": ("Email", notify_email),
    "sms": ("SMS", notify_sms),
    "call": ("Call", notify_call),
    "push": ("Push", notify_push),
}


def notify_contact(contact: EmergencyContact, methods, message: AlertMessage) -> dict:
    """Attempt every method for one contact; one failure never blocks the others."""
    results = {"contact": contact.name, "methods": [], "success": [], "failed": []}

    for method in methods:
        method = str(method)
        label, channel = CHANNELS.get(method, (method, None))
        results["methods"].append(label)
        if channel is None:
            results["failed"].append(f"{label} error: unknown alert method")
            continue
        try:
            results["success"].append(channel(contact, message))
        except Exception as e:
            logger.warning("%s failed for %s: %s", label, contact.name, e)
            results["failed"].append(f"{label} error: {e}")

    return results
