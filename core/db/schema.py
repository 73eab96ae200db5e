"""
Schema helpers for Postgres.
"""
from __future__ import annotations

from core.db.base import get_conn

JOB_STATUSES = ("applied", "interviewing", "offered", "rejected")


def init_db() -> None:
    """Create the users, sessions, companies, keywords, jobs and notifications tables if they don't exist."""
    conn = get_conn()
    cur = conn.cursor()

    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS users(
            id SERIAL PRIMARY KEY,
            email TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            created_at TEXT
        )
        """
    )
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS sessions(
            id TEXT PRIMARY KEY,
            user_id INTEGER NOT NULL,
            created_at TEXT NOT NULL,
            last_seen_at TEXT NOT NULL,
            expires_at TEXT NOT NULL,
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
        )
        """
    )
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS tracked_companies(
            id SERIAL PRIMARY KEY,
            user_id INTEGER NOT NULL,
            company_name TEXT NOT NULL,
            career_page_url TEXT NOT NULL,
            created_at TEXT NOT NULL,
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
        )
        """
    )
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS keywords(
            id SERIAL PRIMARY KEY,
            user_id INTEGER NOT NULL,
            keyword TEXT NOT NULL,
            created_at TEXT NOT NULL,
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
        )
        """
    )
    # Null status means "not applied yet".
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS jobs(
            id SERIAL PRIMARY KEY,
            company_id INTEGER NOT NULL,
            title TEXT NOT NULL,
            url TEXT,
            description TEXT,
            location TEXT,
            posted_date TEXT,
            scraped_at TEXT NOT NULL,
            is_new BOOLEAN NOT NULL DEFAULT TRUE,
            status TEXT CHECK (status IS NULL OR status IN ('applied', 'interviewing', 'offered', 'rejected')),
            FOREIGN KEY(company_id) REFERENCES tracked_companies(id) ON DELETE CASCADE,
            UNIQUE(company_id, title, url)
        )
        """
    )
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS notifications(
            id SERIAL PRIMARY KEY,
            user_id INTEGER NOT NULL,
            job_id INTEGER NOT NULL,
            keyword_matched TEXT NOT NULL,
            sent_at TEXT NOT NULL,
            email_sent BOOLEAN NOT NULL DEFAULT FALSE,
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE,
            FOREIGN KEY(job_id) REFERENCES jobs(id) ON DELETE CASCADE
        )
        """
    )
    cur.execute("CREATE INDEX IF NOT EXISTS idx_jobs_company_title ON jobs(company_id, title)")
    cur.execute("CREATE INDEX IF NOT EXISTS idx_keywords_user ON keywords(user_id)")
    cur.execute("CREATE INDEX IF NOT EXISTS idx_companies_user ON tracked_companies(user_id)")

    conn.commit()
    conn.close()


__all__ = [
    "JOB_STATUSES",
    "init_db",
]
