"""Prompt builders for plan generation and coaching chat.

Both are pure: the same inputs always render the same text.
"""

from __future__ import annotations

import json
from typing import Any

PLAN_SHAPE = (
    '{"plan":{"id":"string","userId":"string","createdAt":"ISO-8601 string",'
    '"daysPerWeek":number,"workoutLength":"string","weeklySplit":["string"],'
    '"skillTrack":["string"],"blocks":["string"],"generator":"ai"}}'
)

COACH_SHAPE = (
    '{"message":"string","proposedPlanDiff":{"action":"adapt_week|keep_schedule|none",'
    '"before":"string","after":"string","notes":"string"},'
    '"proposedWorkoutEdits":{"action":"swap_today|ease_today|none","summary":"string",'
    '"edits":[{"exercise":"string","change":"string"}]}}'
)


def _dump(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def build_plan_prompt(profile: dict[str, Any], uid: str) -> str:
    return "\n".join(
        [
            "You are a calisthenics programming coach for SkillMax.",
            "Create a safe beginner-to-advanced personalized weekly plan.",
            "Return ONLY valid JSON with the shape:",
            PLAN_SHAPE,
            "Constraints:",
            "- weeklySplit length must equal daysPerWeek.",
            "- Respect user equipment and level.",
            "- Max 6 workout days.",
            "- Include mobility and recovery in blocks.",
            "- Keep responses concise in field values.",
            f"User ID: {uid}",
            f"Profile: {_dump(profile)}",
        ]
    )


def build_coach_prompt(uid: str, message: str, context: dict[str, Any]) -> str:
    return "\n".join(
        [
            "You are SkillMax AI Coach.",
            "You must provide practical coaching guidance and optionally return "
            "structured plan/workout edits.",
            "Return ONLY valid JSON with this shape:",
            COACH_SHAPE,
            "Rules:",
            "- If user missed a day and asks for adjustment, set proposedPlanDiff.action to adapt_week.",
            "- If user reports pain/injury, propose safer exercise edits.",
            "- Keep message concise, supportive, and specific to user context.",
            '- If no change needed, set actions to "none".',
            f"User ID: {uid}",
            f"User message: {message}",
            f"Context: {_dump(context)}",
        ]
    )
