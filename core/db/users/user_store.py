"""
User (profile) storage helpers.

A user row doubles as the profile: its email is where match notifications are delivered.
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional

from core.db.base import get_conn
from core.db.users.auth import hash_password


def create_user(email: str, raw_password: str) -> int:
    conn = get_conn()
    cur = conn.cursor()
    now = datetime.utcnow().isoformat(timespec="seconds")

    cur.execute(
        """
        INSERT INTO users (email, password_hash, created_at)
        VALUES (?, ?, ?)
        RETURNING id
        """,
        (email.strip().lower(), hash_password(raw_password), now),
    )
    row = cur.fetchone()
    user_id = int(row["id"]) if row else 0

    conn.commit()
    conn.close()
    return user_id


def get_user_by_email(email: str) -> Dict | None:
    conn = get_conn()
    cur = conn.cursor()

    cur.execute(
        """
        SELECT id, email, password_hash, created_at
        FROM users
        WHERE email = ?
        """,
        (email.strip().lower(),),
    )
    row = cur.fetchone()
    conn.close()

    return dict(row) if row else None


def get_user_by_id(user_id: int) -> Optional[Dict]:
    """Look up a user by numeric id. Returns dict or None."""
    conn = get_conn()
    cur = conn.cursor()

    cur.execute(
        """
        SELECT id, email, password_hash, created_at
        FROM users
        WHERE id = ?
        """,
        (user_id,),
    )
    row = cur.fetchone()
    conn.close()

    return dict(row) if row else None


def delete_user_data(user_id: int) -> None:
    """
    Remove a user and everything they own.

    Companies cascade to jobs, jobs cascade to notifications; the explicit deletes keep this
    working on databases created before the cascades existed.
    """
    conn = get_conn()
    cur = conn.cursor()

    cur.execute("DELETE FROM notifications WHERE user_id=?", (user_id,))
    cur.execute(
        "DELETE FROM jobs WHERE company_id IN (SELECT id FROM tracked_companies WHERE user_id=?)",
        (user_id,),
    )
    cur.execute("DELETE FROM tracked_companies WHERE user_id=?", (user_id,))
    cur.execute("DELETE FROM keywords WHERE user_id=?", (user_id,))
    cur.execute("DELETE FROM sessions WHERE user_id=?", (user_id,))
    cur.execute("DELETE FROM users WHERE id=?", (user_id,))

    conn.commit()
    conn.close()


__all__ = [
    "create_user",
    "get_user_by_email",
    "get_user_by_id",
    "delete_user_data",
]
