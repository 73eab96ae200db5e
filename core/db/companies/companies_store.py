"""
Tracked company storage helpers.
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, List

from core.db.base import get_conn


def add_company(*, user_id: int, company_name: str, career_page_url: str) -> Dict:
    """Insert a tracked company for the owner and return the stored row."""
    now = datetime.utcnow().isoformat(timespec="seconds")
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        INSERT INTO tracked_companies (user_id, company_name, career_page_url, created_at)
        VALUES (?, ?, ?, ?)
        RETURNING id, user_id, company_name, career_page_url, created_at
        """,
        (user_id, company_name.strip(), career_page_url.strip(), now),
    )
    row = cur.fetchone()
    conn.commit()
    conn.close()
    return dict(row)


def get_companies_for_user(user_id: int) -> List[Dict]:
    """Return the owner's companies, newest first."""
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        SELECT id, user_id, company_name, career_page_url, created_at
        FROM tracked_companies
        WHERE user_id = ?
        ORDER BY created_at DESC, id DESC
        """,
        (user_id,),
    )
    rows = cur.fetchall()
    conn.close()
    return [dict(r) for r in rows]


def delete_company(*, user_id: int, company_id: int) -> bool:
    """Delete a company owned by user_id. Returns False when nothing matched."""
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        "DELETE FROM tracked_companies WHERE id = ? AND user_id = ?",
        (company_id, user_id),
    )
    deleted = cur.rowcount
    conn.commit()
    conn.close()
    return deleted > 0


def get_tracked_companies() -> List[Dict]:
    """
    Return every tracked company with its owner's email, for a scrape run.

    Errors propagate: a failing companies query aborts the whole run.
    """
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        SELECT c.id, c.user_id, c.company_name, c.career_page_url, u.email
        FROM tracked_companies c
        LEFT JOIN users u ON u.id = c.user_id
        ORDER BY c.id
        """
    )
    rows = cur.fetchall()
    conn.close()
    return [dict(r) for r in rows]


__all__ = [
    "add_company",
    "get_companies_for_user",
    "delete_company",
    "get_tracked_companies",
]
