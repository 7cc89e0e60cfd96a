"""Bearer-token verification against Firebase Auth."""

from __future__ import annotations

import logging

import firebase_admin
from fastapi import Header, HTTPException
from firebase_admin import auth

logger = logging.getLogger(__name__)

_app: firebase_admin.App | None = None


def _get_app() -> firebase_admin.App:
    """Initialise the default Firebase app once, using ambient credentials."""
    global _app
    if _app is None:
        try:
            _app = firebase_admin.get_app()
        except ValueError:
            _app = firebase_admin.initialize_app()
    return _app


def bearer_token(authorization: str) -> str:
    prefix = "Bearer "
    if authorization.startswith(prefix):
        return authorization[len(prefix) :]
    return ""


def verify_token(token: str) -> str:
    """Return the uid for a Firebase ID token."""
    decoded = auth.verify_id_token(token, app=_get_app())
    return decoded["uid"]


def get_verified_uid(authorization: str = Header(default="")) -> str:
    """FastAPI dependency resolving the caller's uid from the Authorization header.

    Plain ``def`` so FastAPI runs it in its threadpool: verification may
    fetch Google's public certificates over the network.
    """
    token = bearer_token(authorization)
    if not token:
        logger.warning("Request missing bearer token")
        raise HTTPException(status_code=401, detail="Missing bearer token")
    try:
        return verify_token(token)
    except (auth.InvalidIdTokenError, auth.UserDisabledError) as e:
        logger.warning("Bearer token rejected: %s", e)
        raise HTTPException(status_code=401, detail="Invalid bearer token")
    except Exception:
        # Certificate fetch failures, missing project id and the like are ours, not the caller's
        logger.exception("Bearer token verification failed")
        raise HTTPException(status_code=500, detail="Failed to verify bearer token")
