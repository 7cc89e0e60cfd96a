from __future__ import annotations

import logging
from typing import Any

from chains.parsing import extract_json
from chains.prompts import build_coach_prompt
from llm.gemini import GeminiClient, response_text
from schemas.coach import CoachReply
from services.coach_normalizer import normalize_coach_reply

logger = logging.getLogger(__name__)

COACH_TEMPERATURE = 0.35


async def generate_coach_reply(
    uid: str,
    message: str,
    context: dict[str, Any],
    api_key: str,
    *,
    client: GeminiClient | None = None,
) -> CoachReply:
    """Ask the coach model and normalize whatever comes back.

    Malformed output degrades to the fallback reply; only a total
    generation failure (GenerationError) propagates.
    """
    client = client or GeminiClient(api_key)
    prompt = build_coach_prompt(uid, message, context)
    data = await client.generate_json(prompt, temperature=COACH_TEMPERATURE)

    parsed = extract_json(response_text(data))
    if not isinstance(parsed, dict):
        logger.warning("Coach reply was not a JSON object uid=%s, using fallback", uid)
    return normalize_coach_reply(parsed)
