"""Gemini generateContent client with ordered model fallback.

Models are tried one at a time in priority order. The first 2xx response
wins; every other outcome is recorded and the next model is tried. When
all models fail, a single GenerationError enumerates every attempt.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx

from schemas.generation import GenerationRequest, ModelAttempt

logger = logging.getLogger(__name__)

GEMINI_BASE_URL = os.getenv(
    "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
)
GEMINI_TIMEOUT_SECONDS = float(os.getenv("GEMINI_TIMEOUT_SECONDS", "30"))

# Most capable first
DEFAULT_MODELS: tuple[str, ...] = (
    "gemini-2.5-flash",
    "gemini-2.0-flash",
    "gemini-1.5-flash",
)


class GenerationError(RuntimeError):
    """Raised when every candidate model failed."""

    def __init__(self, attempts: list[ModelAttempt]):
        self.attempts = list(attempts)
        if self.attempts:
            detail = "; ".join(a.describe() for a in self.attempts)
        else:
            detail = "No Gemini model call attempted."
        super().__init__(f"Gemini request failed for all models: {detail}")


def configured_models() -> tuple[str, ...]:
    """Model priority list, overridable with a comma separated GEMINI_MODELS."""
    raw = os.getenv("GEMINI_MODELS", "")
    models = tuple(m.strip() for m in raw.split(",") if m.strip())
    return models or DEFAULT_MODELS


def response_text(payload: Any) -> str:
    """Pull the first candidate's first part text out of a generateContent payload."""
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return ""
    return text if isinstance(text, str) else ""


class GeminiClient:
    """Calls the Gemini REST API, falling back across models."""

    def __init__(
        self,
        api_key: str,
        *,
        models: tuple[str, ...] | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.models = tuple(models) if models else configured_models()
        self.base_url = (base_url or GEMINI_BASE_URL).rstrip("/")
        self.timeout = timeout or GEMINI_TIMEOUT_SECONDS
        self._transport = transport

    def build_request(self, prompt: str, temperature: float = 0.2) -> GenerationRequest:
        return GenerationRequest(
            models=self.models, prompt=prompt, temperature=temperature
        )

    @staticmethod
    def _body(request: GenerationRequest) -> dict:
        return {
            "generationConfig": {
                "temperature": request.temperature,
                "responseMimeType": request.response_mime_type,
            },
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": request.prompt}],
                }
            ],
        }

    async def generate(self, request: GenerationRequest) -> Any:
        """Return the raw payload of the first model that answers with 2xx.

        Raises:
            GenerationError: If every model failed.
        """
        attempts: list[ModelAttempt] = []
        body = self._body(request)

        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers={
                "Content-Type": "application/json",
                "x-goog-api-key": self.api_key,
            },
            transport=self._transport,
        ) as client:
            # Sequential on purpose: one outbound call at a time, in priority order
            for model in request.models:
                url = f"{self.base_url}/models/{model}:generateContent"
                try:
                    response = await client.post(url, json=body)
                except httpx.HTTPError as e:
                    logger.warning("Gemini model call errored model=%s: %s", model, e)
                    attempts.append(ModelAttempt(model=model, body=str(e)))
                    continue

                if not response.is_success:
                    logger.warning(
                        "Gemini model call failed model=%s status=%s",
                        model,
                        response.status_code,
                    )
                    attempts.append(
                        ModelAttempt(
                            model=model,
                            status=response.status_code,
                            body=response.text,
                        )
                    )
                    continue

                try:
                    data = response.json()
                except ValueError:
                    logger.warning(
                        "Gemini model returned a non-JSON body model=%s", model
                    )
                    attempts.append(
                        ModelAttempt(
                            model=model,
                            status=response.status_code,
                            body=response.text,
                        )
                    )
                    continue

                logger.info("Gemini model call succeeded model=%s", model)
                return data

        raise GenerationError(attempts)

    async def generate_json(self, prompt: str, *, temperature: float = 0.2) -> Any:
        """Build a JSON-mode request for ``prompt`` and run the fallback cascade."""
        return await self.generate(self.build_request(prompt, temperature))
