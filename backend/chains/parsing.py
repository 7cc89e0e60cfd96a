"""Best-effort JSON recovery from model output text."""

from __future__ import annotations

import json
from typing import Any


def extract_json(text: Any) -> Any | None:
    """Recover a JSON value from ``text``.

    Tries the whole string first. Models sometimes wrap the object in prose
    or markdown fences, so on failure the span from the first ``{`` to the
    last ``}`` is tried. Returns None when nothing parses; never raises.
    """
    if not text or not isinstance(text, str):
        return None
    try:
        return json.loads(text)
    except ValueError:
        pass

    first = text.find("{")
    last = text.rfind("}")
    if first == -1 or last == -1 or last <= first:
        return None
    try:
        return json.loads(text[first : last + 1])
    except ValueError:
        return None
