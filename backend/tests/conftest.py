"""Pytest configuration and shared fixtures."""

import json
import os
import sys
from datetime import datetime, timedelta, timezone

import httpx
import pytest

# Ensure backend/ is on sys.path
backend_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)


def gemini_payload(text: str) -> dict:
    """A minimal generateContent response carrying ``text``."""
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def scripted_transport(responses: dict, calls: list | None = None) -> httpx.MockTransport:
    """MockTransport answering per model name.

    ``responses`` maps a model name to ``(status, body)``; body may be a dict
    (sent as JSON) or a string. Unknown models answer 404.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        model = request.url.path.rsplit("/", 1)[-1].split(":", 1)[0]
        if calls is not None:
            calls.append((model, json.loads(request.content), dict(request.headers)))
        status, body = responses.get(model, (404, "model not found"))
        if isinstance(body, (dict, list)):
            return httpx.Response(status, json=body)
        return httpx.Response(status, text=body)

    return httpx.MockTransport(handler)


@pytest.fixture
def now():
    # Wednesday afternoon, UTC+2
    return datetime(2026, 10, 21, 14, 30, 5, tzinfo=timezone(timedelta(hours=2)))


@pytest.fixture
def profile():
    return {
        "userId": "user-1",
        "daysPerWeek": 4,
        "workoutLength": "25-35 min",
        "goal": "Build strength",
        "equipment": ["pull-up bar", "rings"],
        "baselinePull": "8",
        "skills": ["Muscle-Up"],
    }
