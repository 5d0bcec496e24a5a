import json
import logging
import re
from datetime import datetime, timezone

import requests

from guardian import config
from guardian.errors import UpstreamUnavailableError
from guardian.services.alert_recorder import clamp_confidence

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an AI safety monitor analyzing video frames for weapons, threats, and dangerous situations. "
    "Analyze the image carefully and respond ONLY with a JSON object containing: status ('safe', 'warning', "
    "or 'danger'), confidence (0-100), and description (brief explanation). Be VERY sensitive to detecting: "
    "knives, guns, weapons, threatening gestures, physical violence, or any dangerous objects. Even if "
    "partially visible, flag as 'danger' or 'warning'. Only return the JSON object, nothing else."
)

USER_PROMPT = (
    "Analyze this video frame for ANY signs of: WEAPONS (knives, guns, blades, sharp objects), threats, "
    "aggressive behavior, or dangerous situations. Look VERY CAREFULLY for: knives (kitchen knives, pocket "
    "knives, any blades), guns, weapons of any kind, threatening hand gestures, physical aggression, "
    "distressed individuals, or intimidating behavior. If you see ANY weapon or potentially dangerous "
    "object, mark as 'danger' with high confidence."
)

_JSON_BLOCK = re.compile(r"\{[\s\S]*\}")


class FrameAnalyzer:
    """ Send a camera frame to a chat-completion vision model and get a safety verdict"""

    def __init__(self, api_url=None, api_key=None, model=None, timeout=None):
        self.api_url = api_url or config.VISION_API_URL
        self.api_key = api_key if api_key is not None else config.VISION_API_KEY
        self.model = model or config.VISION_MODEL
        self.timeout = timeout or config.VISION_TIMEOUT

    def request_verdict(self, frame_data: str) -> dict:
        """
        Call the vision endpoint. Raises UpstreamUnavailableError on any
        provider failure.
        """
        if not self.api_key:
            raise UpstreamUnavailableError("VISION_API_KEY is not configured")

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": USER_PROMPT},
                        {"type": "image_url", "image_url": {"url": frame_data}},
                    ],
                },
            ],
        }

        try:
            response = requests.post(
                self.api_url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UpstreamUnavailableError(f"AI gateway unreachable: {e}") from e

        if response.status_code == 429:
            raise UpstreamUnavailableError("Rate limit exceeded")
        if response.status_code == 402:
            raise UpstreamUnavailableError("Payment required")
        if response.status_code != 200:
            raise UpstreamUnavailableError(f"AI gateway error: {response.status_code}")

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise UpstreamUnavailableError("Malformed AI gateway response") from e

        logger.debug("AI Response: %s", content)
        return parse_verdict(content)

    def analyze(self, frame_data: str, camera_id=None, camera_name=None) -> dict:
        """Analyze one frame; provider failures degrade to a safe verdict flagged as degraded."""
        try:
            verdict = self.request_verdict(frame_data)
            verdict.update(degraded=False, error=None)
        except UpstreamUnavailableError as e:
            logger.warning("Frame analysis degraded to safe: %s", e.message)
            verdict = {
                "status": "safe",
                "confidence": 0,
                "description": "Analysis unavailable",
                "degraded": True,
                "error": e.message,
            }

        verdict.update(
            cameraId=camera_id,
            cameraName=camera_name,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        return verdict


def parse_verdict(content) -> dict:
    if not isinstance(content, str):
        raise UpstreamUnavailableError("Malformed AI gateway response")

    match = _JSON_BLOCK.search(content)
    if not match:
        # prose or a refusal; keep the text for the operator
        raise UpstreamUnavailableError(f"Unparseable AI response: {content[:200]}")

    try:
        data = json.loads(match.group(0))
    except ValueError as e:
        raise UpstreamUnavailableError("Failed to parse AI response") from e
    if not isinstance(data, dict):
        raise UpstreamUnavailableError("Failed to parse AI response")

    status = str(data.get("status", "safe")).lower()
    if status not in config.ALERT_STATUSES:
        status = "safe"
    return {
        "status": status,
        "confidence": clamp_confidence(data.get("confidence")),
        "description": str(data.get("description", "")),
    }
