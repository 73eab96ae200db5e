from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.auth_utils import (
    clear_session_cookie,
    get_current_user,
    public_user,
    require_user,
    set_session_cookie,
)
from app.security import allow_request_with_remaining
from app.validation import is_valid_email, is_valid_password
from core.database import (
    create_session,
    create_user,
    delete_session,
    delete_user_data,
    get_user_by_email,
    get_user_by_id,
    verify_password,
)

router = APIRouter(prefix="/api")


class Credentials(BaseModel):
    email: str
    password: str


def _client_ip(request: Request) -> str:
    return request.client.host if request and request.client else "unknown"


@router.post("/auth/signup", status_code=201)
def signup(creds: Credentials, request: Request):
    allowed, _ = allow_request_with_remaining(f"signup:{_client_ip(request)}", limit=5, window_seconds=300)
    if not allowed:
        raise HTTPException(status_code=429, detail="Too many signup attempts. Please try again later.")

    email = (creds.email or "").strip().lower()
    if not is_valid_email(email):
        raise HTTPException(status_code=400, detail="Please enter a valid email address.")
    if not is_valid_password(creds.password):
        raise HTTPException(
            status_code=400,
            detail="Password must be 8-64 characters with at least one letter and one number.",
        )
    if get_user_by_email(email):
        raise HTTPException(status_code=409, detail="An account already exists for that email.")

    user_id = create_user(email, creds.password)
    token = create_session(user_id)
    resp = JSONResponse(public_user(get_user_by_id(user_id)), status_code=201)
    set_session_cookie(resp, token)
    return resp


@router.post("/auth/login")
def login(creds: Credentials, request: Request):
    allowed, remaining = allow_request_with_remaining(f"login:{_client_ip(request)}", limit=10, window_seconds=300)
    if not allowed:
        raise HTTPException(status_code=429, detail="Too many login attempts. Please try again later.")

    user = get_user_by_email(creds.email or "")
    # Same answer for unknown email and wrong password.
    if not user or not verify_password(creds.password, user["password_hash"]):
        raise HTTPException(status_code=401, detail=f"Invalid email or password. Attempts left: {remaining}")

    token = create_session(int(user["id"]))
    resp = JSONResponse(public_user(user))
    set_session_cookie(resp, token)
    return resp


@router.post("/auth/logout")
def logout(request: Request):
    _, token = get_current_user(request)
    if token:
        delete_session(token)
    resp = JSONResponse({"success": True})
    clear_session_cookie(resp)
    return resp


@router.get("/me")
def me(user: dict = Depends(require_user)):
    return public_user(user)


@router.delete("/me")
def delete_account(user: dict = Depends(require_user)):
    delete_user_data(int(user["id"]))
    resp = JSONResponse({"success": True})
    clear_session_cookie(resp)
    return resp
