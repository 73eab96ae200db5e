"""
Scraped jobs storage re-exports.
"""
from core.db.jobs.jobs_store import (
    get_jobs_for_user,
    insert_job_if_new,
    mark_jobs_seen,
    update_job_status,
)

__all__ = [
    "get_jobs_for_user",
    "insert_job_if_new",
    "mark_jobs_seen",
    "update_job_status",
]
