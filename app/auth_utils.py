"""
Helpers for session cookies and current-user lookup.
"""
from __future__ import annotations

import os

from fastapi import HTTPException, Request
from fastapi.responses import Response

from core.database import SESSION_TIMEOUT_MINUTES, delete_session, get_user_by_id, refresh_session

SESSION_COOKIE_NAME = "session_id"
SESSION_COOKIE_MAX_AGE = SESSION_TIMEOUT_MINUTES * 60
SECURE_COOKIES = (
    os.getenv("COOKIE_SECURE", "").lower() in ("1", "true", "yes")
    or os.getenv("PUBLIC_BASE_URL", "").lower().startswith("https://")
)


def get_current_user(request: Request):
    """
    Read session cookie and return (user_dict, session_token) or (None, None).
    Refreshes inactivity timeout when the session is valid.
    """
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if not token:
        return None, None

    user_id = refresh_session(token)
    if user_id is None:
        return None, token

    user = get_user_by_id(user_id)
    if not user:
        delete_session(token)
        return None, token
    return user, token


def require_user(request: Request) -> dict:
    """FastAPI dependency: the signed-in user, or 401."""
    user, _ = get_current_user(request)
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def public_user(user: dict) -> dict:
    return {"id": user["id"], "email": user["email"], "created_at": user.get("created_at")}


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        max_age=SESSION_COOKIE_MAX_AGE,
        samesite="lax",
        secure=SECURE_COOKIES,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(SESSION_COOKIE_NAME)
