"""
Scraped job storage helpers.
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from core.db.base import get_conn
from core.db.schema import JOB_STATUSES


def insert_job_if_new(
    *,
    company_id: int,
    title: str,
    url: str | None = None,
    description: str | None = None,
    location: str | None = None,
    posted_date: str | None = None,
) -> Optional[Dict]:
    """
    Insert a scraped job unless the company already has one with the same title.

    The existence check and the insert are one statement, and UNIQUE(company_id, title, url)
    catches anything that slips between concurrent runs. Returns the new row, or None when
    the job was already known.
    """
    now = datetime.utcnow().isoformat(timespec="seconds")
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        INSERT INTO jobs (company_id, title, url, description, location, posted_date, scraped_at, is_new)
        SELECT CAST(? AS INTEGER), ?::text, ?::text, ?::text, ?::text, ?::text, ?::text, TRUE
        WHERE NOT EXISTS (
            SELECT 1 FROM jobs WHERE company_id = ? AND title = ?
        )
        ON CONFLICT (company_id, title, url) DO NOTHING
        RETURNING id, company_id, title, url, description, location, posted_date, scraped_at, is_new
        """,
        (company_id, title, url, description, location, posted_date, now, company_id, title),
    )
    row = cur.fetchone()
    conn.commit()
    conn.close()
    return dict(row) if row else None


def get_jobs_for_user(user_id: int, limit: Optional[int] = 100) -> List[Dict]:
    """Return jobs from the user's tracked companies, newest first, with the company name."""
    conn = get_conn()
    cur = conn.cursor()

    sql = """
        SELECT j.id, j.company_id, c.company_name, j.title, j.url, j.description, j.location,
               j.posted_date, j.scraped_at, j.is_new, j.status
        FROM jobs j
        JOIN tracked_companies c ON c.id = j.company_id
        WHERE c.user_id = ?
        ORDER BY j.scraped_at DESC, j.id DESC
    """
    if limit is not None:
        sql += " LIMIT ?"
        cur.execute(sql, (user_id, int(limit)))
    else:
        cur.execute(sql, (user_id,))

    rows = cur.fetchall()
    conn.close()
    return [dict(r) for r in rows]


def mark_jobs_seen(user_id: int) -> int:
    """Clear the is_new flag on every job of the user's companies. Returns rows touched."""
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        UPDATE jobs SET is_new = FALSE
        WHERE is_new = TRUE
          AND company_id IN (SELECT id FROM tracked_companies WHERE user_id = ?)
        """,
        (user_id,),
    )
    updated = cur.rowcount
    conn.commit()
    conn.close()
    return updated


def update_job_status(*, user_id: int, job_id: int, status: str | None) -> bool:
    """Set the application status of one of the user's jobs (None clears it)."""
    if status is not None and status not in JOB_STATUSES:
        raise ValueError(f"Unknown job status: {status!r}")

    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        UPDATE jobs SET status = ?
        WHERE id = ?
          AND company_id IN (SELECT id FROM tracked_companies WHERE user_id = ?)
        """,
        (status, job_id, user_id),
    )
    updated = cur.rowcount
    conn.commit()
    conn.close()
    return updated > 0


__all__ = [
    "insert_job_if_new",
    "get_jobs_for_user",
    "mark_jobs_seen",
    "update_job_status",
]
