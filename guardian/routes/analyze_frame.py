#When this endpoint is hit the frame is sent to the vision model for a safety verdict
from fastapi import APIRouter, Depends

from guardian.schemas import FrameAnalysisRequest, FrameAnalysisResult
from guardian.services.auth_service import get_current_user_id
from guardian.services.vision_service import FrameAnalyzer

router = APIRouter(prefix="/api/analyze-frame", tags=["analyze_frame"])


def get_analyzer() -> FrameAnalyzer:
    return FrameAnalyzer()


@router.post("", response_model=FrameAnalysisResult)
def analyze_frame(
    body: FrameAnalysisRequest,
    user_id: str = Depends(get_current_user_id),
    analyzer: FrameAnalyzer = Depends(get_analyzer),
):
    return analyzer.analyze(body.frameData, camera_id=body.cameraId, camera_name=body.cameraName)
