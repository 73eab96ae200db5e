"""
Cookie sessions for the JSON API: opaque random tokens with a sliding 30-minute expiry.
"""
from __future__ import annotations

import secrets
from datetime import datetime, timedelta
from typing import Optional

from core.db.base import get_conn

SESSION_TIMEOUT_MINUTES = 30


def _stamp(moment: datetime) -> str:
    # Fixed-width ISO text, so string comparison in SQL orders by time.
    return moment.isoformat(timespec="seconds")


def create_session(user_id: int) -> str:
    token = secrets.token_urlsafe(32)
    now = datetime.utcnow()

    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        INSERT INTO sessions (id, user_id, created_at, last_seen_at, expires_at)
        VALUES (?, ?, ?, ?, ?)
        """,
        (token, user_id, _stamp(now), _stamp(now), _stamp(now + timedelta(minutes=SESSION_TIMEOUT_MINUTES))),
    )
    conn.commit()
    conn.close()
    return token


def delete_session(token: str) -> None:
    if not token:
        return
    conn = get_conn()
    cur = conn.cursor()
    cur.execute("DELETE FROM sessions WHERE id = ?", (token,))
    conn.commit()
    conn.close()


def refresh_session(token: str) -> Optional[int]:
    """
    Return the session's user_id and push its expiry forward, or None.

    Expired sessions are deleted on sight.
    """
    if not token:
        return None

    now = datetime.utcnow()
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        UPDATE sessions
        SET last_seen_at = ?, expires_at = ?
        WHERE id = ? AND expires_at > ?
        RETURNING user_id
        """,
        (_stamp(now), _stamp(now + timedelta(minutes=SESSION_TIMEOUT_MINUTES)), token, _stamp(now)),
    )
    row = cur.fetchone()
    if row is None:
        cur.execute("DELETE FROM sessions WHERE id = ?", (token,))
    conn.commit()
    conn.close()
    return int(row["user_id"]) if row else None


__all__ = [
    "SESSION_TIMEOUT_MINUTES",
    "create_session",
    "delete_session",
    "refresh_session",
]
