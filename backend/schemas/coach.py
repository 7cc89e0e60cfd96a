from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class CoachChatRequest(BaseModel):
    message: Any = None
    context: Any = None


class CoachReply(BaseModel):
    message: str
    # Passed through as-is; consumers must tolerate partial shapes
    proposedPlanDiff: dict[str, Any] | None = None
    proposedWorkoutEdits: dict[str, Any] | None = None
