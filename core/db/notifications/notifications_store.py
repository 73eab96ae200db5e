"""
Match notification history store.

One row per (job, matched keyword) event, recording whether the email actually went out.
Rows with email_sent = FALSE are the audit trail of missed emails.
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, List

from core.db.base import get_conn


def create_notification(
    *,
    user_id: int,
    job_id: int,
    keyword_matched: str,
    email_sent: bool,
) -> int:
    now = datetime.utcnow().isoformat(timespec="seconds")
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        INSERT INTO notifications (user_id, job_id, keyword_matched, sent_at, email_sent)
        VALUES (?, ?, ?, ?, ?)
        RETURNING id
        """,
        (user_id, job_id, keyword_matched, now, bool(email_sent)),
    )
    row = cur.fetchone()
    conn.commit()
    conn.close()
    return int(row["id"]) if row else 0


def get_notifications_for_user(*, user_id: int, limit: int = 50) -> List[Dict]:
    """
    Return notification history joined with job fields, newest first.
    """
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        SELECT
          n.id,
          n.keyword_matched,
          n.sent_at,
          n.email_sent,
          j.id AS job_id,
          j.title,
          j.url,
          j.location,
          c.company_name
        FROM notifications n
        JOIN jobs j ON j.id = n.job_id
        JOIN tracked_companies c ON c.id = j.company_id
        WHERE n.user_id = ?
        ORDER BY n.sent_at DESC, n.id DESC
        LIMIT ?
        """,
        (user_id, int(limit)),
    )
    rows = cur.fetchall()
    conn.close()
    return [dict(r) for r in rows]


__all__ = [
    "create_notification",
    "get_notifications_for_user",
]
