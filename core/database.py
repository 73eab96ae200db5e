"""
Single import surface for the storage helpers used by routes and the worker.
"""
from core.db.schema import JOB_STATUSES, init_db
from core.db.users import (
    SESSION_TIMEOUT_MINUTES,
    create_session,
    create_user,
    delete_session,
    delete_user_data,
    get_user_by_email,
    get_user_by_id,
    hash_password,
    refresh_session,
    verify_password,
)
from core.db.companies import (
    add_company,
    delete_company,
    get_companies_for_user,
    get_tracked_companies,
)
from core.db.keywords import (
    add_keyword,
    delete_keyword,
    get_keyword_rows_for_user,
    get_keywords_for_user,
)
from core.db.jobs import (
    get_jobs_for_user,
    insert_job_if_new,
    mark_jobs_seen,
    update_job_status,
)
from core.db.notifications import (
    create_notification,
    get_notifications_for_user,
)

__all__ = [
    "JOB_STATUSES",
    "init_db",
    "SESSION_TIMEOUT_MINUTES",
    "create_session",
    "create_user",
    "delete_session",
    "delete_user_data",
    "get_user_by_email",
    "get_user_by_id",
    "hash_password",
    "refresh_session",
    "verify_password",
    "add_company",
    "delete_company",
    "get_companies_for_user",
    "get_tracked_companies",
    "add_keyword",
    "delete_keyword",
    "get_keyword_rows_for_user",
    "get_keywords_for_user",
    "get_jobs_for_user",
    "insert_job_if_new",
    "mark_jobs_seen",
    "update_job_status",
    "create_notification",
    "get_notifications_for_user",
]
