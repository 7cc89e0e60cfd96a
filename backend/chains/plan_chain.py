from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from chains.parsing import extract_json
from chains.prompts import build_plan_prompt
from llm.gemini import GeminiClient, response_text
from schemas.workout import WorkoutPlan
from services.plan_normalizer import normalize_plan

logger = logging.getLogger(__name__)

PLAN_TEMPERATURE = 0.2


def _unwrap_plan(parsed: Any) -> Any:
    # The prompt asks for {"plan": {...}} but bare plan objects are common
    if isinstance(parsed, dict) and parsed.get("plan"):
        return parsed["plan"]
    return parsed


async def generate_workout_plan(
    profile: dict[str, Any],
    uid: str,
    api_key: str,
    *,
    client: GeminiClient | None = None,
    now: datetime | None = None,
) -> WorkoutPlan:
    """Prompt -> Gemini -> JSON extraction -> normalized WorkoutPlan.

    Raises:
        GenerationError: If every Gemini model failed.
        InvalidPlanOutputError: If the output held no usable plan object.
    """
    client = client or GeminiClient(api_key)
    prompt = build_plan_prompt(profile, uid)
    data = await client.generate_json(prompt, temperature=PLAN_TEMPERATURE)

    candidate = _unwrap_plan(extract_json(response_text(data)))
    if candidate is None:
        logger.warning("Plan generation returned no parseable JSON uid=%s", uid)
    return normalize_plan(candidate, uid, profile, now=now)
