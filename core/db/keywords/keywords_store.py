"""
Keyword storage helpers.
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, List

from core.db.base import get_conn


def add_keyword(*, user_id: int, keyword: str) -> Dict:
    now = datetime.utcnow().isoformat(timespec="seconds")
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        INSERT INTO keywords (user_id, keyword, created_at)
        VALUES (?, ?, ?)
        RETURNING id, user_id, keyword, created_at
        """,
        (user_id, keyword.strip(), now),
    )
    row = cur.fetchone()
    conn.commit()
    conn.close()
    return dict(row)


def get_keyword_rows_for_user(user_id: int) -> List[Dict]:
    """Return the owner's keyword rows, newest first (dashboard listing)."""
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        SELECT id, user_id, keyword, created_at
        FROM keywords
        WHERE user_id = ?
        ORDER BY created_at DESC, id DESC
        """,
        (user_id,),
    )
    rows = cur.fetchall()
    conn.close()
    return [dict(r) for r in rows]


def get_keywords_for_user(user_id: int) -> List[str]:
    """Return the owner's keyword texts in insertion order; matching uses this order."""
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        "SELECT keyword FROM keywords WHERE user_id = ? ORDER BY id",
        (user_id,),
    )
    rows = cur.fetchall()
    conn.close()
    return [r["keyword"] for r in rows if r["keyword"]]


def delete_keyword(*, user_id: int, keyword_id: int) -> bool:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        "DELETE FROM keywords WHERE id = ? AND user_id = ?",
        (keyword_id, user_id),
    )
    deleted = cur.rowcount
    conn.commit()
    conn.close()
    return deleted > 0


__all__ = [
    "add_keyword",
    "get_keyword_rows_for_user",
    "get_keywords_for_user",
    "delete_keyword",
]
