from __future__ import annotations

import time
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from ..recommendations.models import Language

_feedback: list[dict[str, Any]] = []


class FeedbackType(str, Enum):
    feedback = "feedback"
    bug = "bug"
    suggestion = "suggestion"


class FeedbackRequest(BaseModel):
    type: FeedbackType = FeedbackType.feedback
    message: str = Field(..., min_length=1, max_length=2000)


class FeedbackResponse(BaseModel):
    status: str
    total_feedback: int


def record_feedback(
    feedback_type: FeedbackType,
    message: str,
    language: Language,
    user_email: str | None = None,
) -> None:
    _feedback.append({
        "type": feedback_type.value,
        "message": message.strip(),
        "language": language.value,
        "user_email": user_email,
        "timestamp": time.time(),
    })


def get_feedback() -> list[dict[str, Any]]:
    return _feedback


def clear_feedback() -> None:
    _feedback.clear()
