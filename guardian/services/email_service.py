#This script sends the emergency email through the Resend HTTP API
import html
import logging

import requests

from guardian import config
from guardian.errors import UpstreamUnavailableError

logger = logging.getLogger(__name__)

EMERGENCY_SUBJECT = "🚨 EMERGENCY ALERT - Immediate Assistance Needed"


def build_alert_html(user_email, alert_type, alert_time, location, camera_name=None):
    user_email, alert_type, alert_time, location = (
        html.escape(str(v)) for v in (user_email, alert_type, alert_time, location)
    )
    camera_name = html.escape(camera_name) if camera_name else None
    camera_line = (
        f'<p style="margin: 10px 0; color: #4b5563;"><strong>Camera:</strong> {camera_name}</p>'
        if camera_name else ""
    )
    return f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
      <div style="background-color: #dc2626; color: white; padding: 20px; text-align: center;">
        <h1 style="margin: 0; font-size: 24px;">🚨 EMERGENCY ALERT</h1>
      </div>
      <div style="padding: 30px; background-color: #f9fafb;">
        <p style="font-size: 16px; line-height: 1.6; color: #1f2937;">
          <strong>{user_email}</strong> has triggered an emergency alert and needs immediate assistance.
        </p>
        <div style="background-color: white; padding: 20px; border-radius: 8px; margin: 20px 0; border-left: 4px solid #dc2626;">
          <h2 style="margin-top: 0; color: #dc2626; font-size: 18px;">Alert Details</h2>
          <p style="margin: 10px 0; color: #4b5563;"><strong>Type:</strong> {alert_type}</p>
          <p style="margin: 10px 0; color: #4b5563;"><strong>Time:</strong> {alert_time}</p>
          <p style="margin: 10px 0; color: #4b5563;"><strong>Location:</strong> {location}</p>
          {camera_line}
        </div>
        <p style="font-size: 14px; color: #6b7280; margin-top: 30px;">
          This is an automated emergency alert from the Harassment Detection System.
        </p>
      </div>
    </div>
    """


def send_email(to_email, subject, html):
    """
    Send one email. Returns the provider's message id; raises
    UpstreamUnavailableError when the provider is not configured or refuses.
    """
    if not config.RESEND_API_KEY:
        raise UpstreamUnavailableError("RESEND_API_KEY is not configured")

    try:
        response = requests.post(
            config.RESEND_API_URL,
            headers={"Authorization": f"Bearer {config.RESEND_API_KEY}"},
            json={
                "from": config.EMAIL_FROM,
                "to": [to_email],
                "subject": subject,
                "html": html,
            },
            timeout=config.NOTIFY_TIMEOUT,
        )
    except requests.RequestException as e:
        raise UpstreamUnavailableError(f"Email provider unreachable: {e}") from e

    if response.status_code >= 400:
        raise UpstreamUnavailableError(f"Email provider error ({response.status_code}): {response.text}")

    return response.json().get("id")
