from __future__ import annotations

import json
import logging
import os
from typing import Any

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

from dotenv import load_dotenv

load_dotenv()

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from auth import get_verified_uid
from chains.coach_chain import generate_coach_reply
from chains.plan_chain import generate_workout_plan
from schemas.coach import CoachChatRequest, CoachReply
from schemas.workout import GeneratePlanRequest, PlanResponse

logger = logging.getLogger(__name__)

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:5173",
        os.getenv("FRONTEND_URL", ""),
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

COACH_UNAVAILABLE = "Coach is unavailable right now. Try again in a moment."


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _gemini_api_key() -> str:
    return os.getenv("GEMINI_API_KEY", "")


async def _read_body(request: Request) -> dict[str, Any]:
    """Decode the JSON body. Called only after the caller is verified."""
    raw = await request.body()
    if not raw:
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        logger.warning("Rejected malformed request body")
        raise HTTPException(status_code=400, detail="Invalid request payload")
    return body if isinstance(body, dict) else {}


# ============================================
# Error envelopes
# ============================================


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc: StarletteHTTPException):
    detail = "Method not allowed" if exc.status_code == 405 else exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": detail},
        headers=getattr(exc, "headers", None),
    )


# ============================================
# Endpoints
# ============================================


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/generate-workout-plan", response_model=PlanResponse)
async def generate_plan(
    request: Request,
    uid: str = Depends(get_verified_uid),
):
    payload = GeneratePlanRequest.model_validate(await _read_body(request))
    profile = payload.profile
    if not isinstance(profile, dict):
        logger.warning("generate-workout-plan missing profile payload uid=%s", uid)
        return _error(400, "Missing profile payload")

    if profile.get("userId") and profile["userId"] != uid:
        logger.warning(
            "generate-workout-plan profile/user mismatch uid=%s profileUserId=%s",
            uid,
            profile["userId"],
        )
        return _error(403, "Profile user does not match auth user")

    api_key = _gemini_api_key()
    if not api_key:
        logger.error("generate-workout-plan missing GEMINI_API_KEY")
        return _error(500, "GEMINI_API_KEY is not configured")

    logger.info("generate-workout-plan request accepted uid=%s", uid)
    try:
        plan = await generate_workout_plan(profile, uid, api_key)
    except Exception:
        logger.exception("generate-workout-plan failed uid=%s", uid)
        return _error(500, "Failed to generate plan")

    logger.info(
        "generate-workout-plan success uid=%s planId=%s generator=%s",
        uid,
        plan.id,
        plan.generator,
    )
    return PlanResponse(plan=plan)


@app.post("/coach-chat", response_model=CoachReply)
async def coach_chat(
    request: Request,
    uid: str = Depends(get_verified_uid),
):
    payload = CoachChatRequest.model_validate(await _read_body(request))
    message = str(payload.message or "").strip()
    context = payload.context if isinstance(payload.context, dict) else {}

    if not message:
        return _error(400, "Missing message")

    profile = context.get("profile")
    profile_user_id = (
        str(profile["userId"])
        if isinstance(profile, dict) and profile.get("userId")
        else None
    )
    if profile_user_id and profile_user_id != uid:
        logger.warning(
            "coach-chat profile/user mismatch uid=%s profileUserId=%s",
            uid,
            profile_user_id,
        )
        return _error(403, "Profile user does not match auth user")

    api_key = _gemini_api_key()
    if not api_key:
        logger.error("coach-chat missing GEMINI_API_KEY")
        return _error(500, "GEMINI_API_KEY is not configured")

    try:
        return await generate_coach_reply(uid, message, context, api_key)
    except Exception:
        logger.exception("coach-chat failed uid=%s", uid)
        return JSONResponse(status_code=500, content={"message": COACH_UNAVAILABLE})


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
