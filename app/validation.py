"""
Server-side input validators shared by the JSON routes.
"""
from __future__ import annotations

import re
from urllib.parse import urlparse

from email_validator import EmailNotValidError, validate_email

MAX_EMAIL_LEN = 254
MAX_NAME_LEN = 200
MAX_URL_LEN = 2000
MAX_KEYWORD_LEN = 100


def is_valid_email(email: str) -> bool:
    email = (email or "").strip()
    if not email or len(email) > MAX_EMAIL_LEN:
        return False
    if not re.fullmatch(r"[^@\s]+@[^@\s]+\.[^@\s]+", email):
        return False
    try:
        # Syntax only; no MX/deliverability lookups.
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


# 8-64 chars, no whitespace, at least one letter and one number
def is_valid_password(pw: str) -> bool:
    raw_pw = pw or ""
    if re.search(r"\s", raw_pw):
        return False
    if len(raw_pw) < 8 or len(raw_pw) > 64:
        return False
    return bool(re.search(r"[A-Za-z]", raw_pw) and re.search(r"\d", raw_pw))


def is_valid_career_url(url: str) -> bool:
    url = (url or "").strip()
    if not url or len(url) > MAX_URL_LEN:
        return False
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


__all__ = [
    "MAX_EMAIL_LEN",
    "MAX_NAME_LEN",
    "MAX_URL_LEN",
    "MAX_KEYWORD_LEN",
    "is_valid_email",
    "is_valid_password",
    "is_valid_career_url",
]
