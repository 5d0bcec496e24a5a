"""
Test cases for Frame Analysis (vision endpoint wrapper)
"""
from unittest.mock import MagicMock, patch

import pytest
import requests

from guardian.errors import UpstreamUnavailableError
from guardian.services.vision_service import FrameAnalyzer, parse_verdict

FRAME = "data:image/jpeg;base64,/9j/4AAQSkZJRg=="


def gateway_response(status_code=200, content=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = {"choices": [{"message": {"content": content}}]}
    return response


def test_parse_verdict_extracts_json_block():
    content = 'Here you go:\n```json\n{"status": "danger", "confidence": 97, "description": "Knife"}\n```'

    assert parse_verdict(content) == {"status": "danger", "confidence": 97, "description": "Knife"}


def test_parse_verdict_normalizes_values():
    verdict = parse_verdict('{"status": "DANGER", "confidence": 150}')
    assert verdict["status"] == "danger"
    assert verdict["confidence"] == 100

    assert parse_verdict('{"status": "panic", "confidence": 50}')["status"] == "safe"


def test_parse_verdict_prose_reply():
    with pytest.raises(UpstreamUnavailableError) as exc:
        parse_verdict("Everything looks calm.")
    assert "Everything looks calm." in exc.value.message


def test_analyze_refusal_is_degraded():
    """
    Test: Model answers with prose instead of a JSON verdict
    Confirm: Safe default flagged as degraded, not a genuine safe verdict
    """
    analyzer = FrameAnalyzer(api_key="test-key")

    with patch("guardian.services.vision_service.requests.post") as mock_post:
        mock_post.return_value = gateway_response(content="I cannot analyze this image.")
        result = analyzer.analyze(FRAME)

    assert result["status"] == "safe"
    assert result["degraded"] is True
    assert "Unparseable AI response" in result["error"]


@pytest.mark.parametrize("confidence", ["Infinity", "-Infinity", "1e400", "NaN"])
def test_analyze_non_finite_confidence(confidence):
    """
    Test: Model reply carries a non-finite confidence
    Confirm: Verdict kept with confidence 0 instead of an unhandled error
    """
    analyzer = FrameAnalyzer(api_key="test-key")
    content = '{"status": "danger", "confidence": ' + confidence + ', "description": "Knife"}'

    with patch("guardian.services.vision_service.requests.post") as mock_post:
        mock_post.return_value = gateway_response(content=content)
        result = analyzer.analyze(FRAME)

    assert result["status"] == "danger"
    assert result["confidence"] == 0
    assert result["degraded"] is False


def test_parse_verdict_broken_json():
    with pytest.raises(UpstreamUnavailableError):
        parse_verdict("{status: danger}")


def test_analyze_success():
    analyzer = FrameAnalyzer(api_key="test-key")

    with patch("guardian.services.vision_service.requests.post") as mock_post:
        mock_post.return_value = gateway_response(
            content='{"status": "warning", "confidence": 64, "description": "Raised fist"}'
        )
        result = analyzer.analyze(FRAME, camera_id="cam-1", camera_name="Porch")

    assert result["status"] == "warning"
    assert result["confidence"] == 64
    assert result["degraded"] is False
    assert result["cameraId"] == "cam-1"
    assert result["timestamp"]

    body = mock_post.call_args.kwargs["json"]
    assert body["messages"][1]["content"][1]["image_url"]["url"] == FRAME
    assert mock_post.call_args.kwargs["headers"]["Authorization"] == "Bearer test-key"


@pytest.mark.parametrize("status_code, error", [
    (429, "Rate limit exceeded"),
    (402, "Payment required"),
    (500, "AI gateway error: 500"),
])
def test_analyze_degrades_on_gateway_errors(status_code, error):
    """
    Test: Vision provider refuses the request
    Confirm: Safe default returned, flagged as degraded with the reason
    """
    analyzer = FrameAnalyzer(api_key="test-key")

    with patch("guardian.services.vision_service.requests.post") as mock_post:
        mock_post.return_value = gateway_response(status_code=status_code)
        result = analyzer.analyze(FRAME)

    assert result["status"] == "safe"
    assert result["confidence"] == 0
    assert result["degraded"] is True
    assert result["error"] == error


def test_analyze_degrades_on_network_error():
    analyzer = FrameAnalyzer(api_key="test-key")

    with patch("guardian.services.vision_service.requests.post") as mock_post:
        mock_post.side_effect = requests.ConnectionError("boom")
        result = analyzer.analyze(FRAME)

    assert result["status"] == "safe"
    assert result["degraded"] is True


def test_analyze_without_api_key():
    with patch("guardian.services.vision_service.requests.post") as mock_post:
        result = FrameAnalyzer(api_key="").analyze(FRAME)

    assert result["degraded"] is True
    assert "VISION_API_KEY" in result["error"]
    assert not mock_post.called


def test_analyze_frame_endpoint(client, auth_headers):
    with patch("guardian.services.vision_service.FrameAnalyzer.request_verdict") as mock_verdict:
        mock_verdict.return_value = {"status": "danger", "confidence": 91, "description": "Gun visible"}
        response = client.post(
            "/api/analyze-frame",
            json={"frameData": FRAME, "cameraId": "cam-2", "cameraName": "Hallway"},
            headers=auth_headers,
        )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "danger"
    assert data["cameraName"] == "Hallway"
    assert data["degraded"] is False


def test_analyze_frame_requires_token(client):
    response = client.post("/api/analyze-frame", json={"frameData": FRAME})

    assert response.status_code == 401
