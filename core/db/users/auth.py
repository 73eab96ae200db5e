"""
Password hashing and verification (bcrypt).
"""
from __future__ import annotations

import bcrypt

# bcrypt silently ignores everything past 72 bytes.
MAX_PASSWORD_BYTES = 72


def hash_password(raw_password: str) -> str:
    encoded = raw_password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(encoded, bcrypt.gensalt()).decode("utf-8")


def verify_password(raw_password: str, password_hash: str) -> bool:
    if not raw_password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(raw_password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash.
        return False


__all__ = ["MAX_PASSWORD_BYTES", "hash_password", "verify_password"]
