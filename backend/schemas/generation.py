"""Records describing a single generation call and its per-model attempts."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class GenerationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    models: tuple[str, ...]
    prompt: str
    temperature: float = 0.2
    response_mime_type: str = "application/json"


class ModelAttempt(BaseModel):
    model_config = ConfigDict(frozen=True)

    model: str
    status: int | None = None
    body: str = ""

    def describe(self) -> str:
        status = self.status if self.status is not None else "error"
        return f"model={self.model} status={status} body={self.body}"
