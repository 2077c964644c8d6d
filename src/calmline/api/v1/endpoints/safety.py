"""
Safety Endpoints

Stress-signal assessment for a single chat message. Called by the
chat route before a reply is generated.

PRIVACY: The message body is never logged or echoed back. Only
signal ids, categories and offsets are returned.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from calmline.api.dependencies import get_detector
from calmline.services.safety.stress_detector import StressSignalDetector

router = APIRouter()


# Request/Response Models

class AssessRequest(BaseModel):
    """Message to assess."""

    message: str = Field(..., max_length=8000, description="User message")


class SignalMatchResponse(BaseModel):
    """One matched signal."""

    signal_id: str
    category: str
    weight: float
    position: int


class AssessmentResponse(BaseModel):
    """Risk assessment for the message."""

    score: float
    tier: str
    matched_categories: list[str]
    matches: list[SignalMatchResponse]
    lexicon_version: str


class DirectiveResponse(BaseModel):
    """Escalation directive."""

    tier: str
    action: str
    message: str
    error: bool


class AssessResponse(BaseModel):
    """Assessment and directive."""

    assessment: Optional[AssessmentResponse]
    directive: DirectiveResponse

    class Config:
        json_schema_extra = {
            "example": {
                "assessment": {
                    "score": 4.0,
                    "tier": "MODERATE",
                    "matched_categories": ["anxiety", "stress"],
                    "matches": [
                        {"signal_id": "overwhelmed", "category": "stress", "weight": 2.0, "position": 10},
                        {"signal_id": "anxious", "category": "anxiety", "weight": 2.0, "position": 26},
                    ],
                    "lexicon_version": "builtin-2026.10",
                },
                "directive": {
                    "tier": "MODERATE",
                    "action": "suggest_resources",
                    "message": "It sounds like you're carrying a lot right now...",
                    "error": False,
                },
            }
        }


@router.post(
    "/assess",
    response_model=AssessResponse,
    summary="Assess a message",
    description="Detect stress signals in a message and select an escalation directive",
)
def assess_message(
    request: AssessRequest,
    detector: StressSignalDetector = Depends(get_detector),
) -> AssessResponse:
    """
    Assess one message.

    Runs in the threadpool; the detector is CPU-bound and shared.
    Always returns a directive, even if assessment failed.
    """
    result = detector.evaluate(request.message)
    return AssessResponse.model_validate(result.to_dict())
