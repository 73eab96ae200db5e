"""
User-related storage helpers, split by responsibility.
"""
from core.db.users.auth import hash_password, verify_password
from core.db.users.user_store import (
    create_user,
    get_user_by_email,
    get_user_by_id,
    delete_user_data,
)
from core.db.users.sessions import (
    create_session,
    delete_session,
    refresh_session,
    SESSION_TIMEOUT_MINUTES,
)

__all__ = [
    "hash_password",
    "verify_password",
    "create_user",
    "get_user_by_email",
    "get_user_by_id",
    "delete_user_data",
    "create_session",
    "delete_session",
    "refresh_session",
    "SESSION_TIMEOUT_MINUTES",
]
