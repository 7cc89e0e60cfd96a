from __future__ import annotations

from typing import Any

from schemas.coach import CoachReply

FALLBACK_MESSAGE = (
    "I can adjust your plan and swap exercises. Tell me what feels off today."
)


def fallback_reply() -> CoachReply:
    return CoachReply(
        message=FALLBACK_MESSAGE,
        proposedPlanDiff=None,
        proposedWorkoutEdits=None,
    )


def normalize_coach_reply(candidate: Any) -> CoachReply:
    """Coerce extracted model output into a CoachReply. Never raises."""
    if not isinstance(candidate, dict):
        return fallback_reply()

    message = candidate.get("message")
    if isinstance(message, str) and message.strip():
        message = message.strip()
    else:
        message = FALLBACK_MESSAGE

    plan_diff = candidate.get("proposedPlanDiff")
    workout_edits = candidate.get("proposedWorkoutEdits")
    return CoachReply(
        message=message,
        proposedPlanDiff=plan_diff if isinstance(plan_diff, dict) else None,
        proposedWorkoutEdits=workout_edits if isinstance(workout_edits, dict) else None,
    )
