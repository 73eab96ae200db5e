"""
Tracked companies storage re-exports.
"""
from core.db.companies.companies_store import (
    add_company,
    delete_company,
    get_companies_for_user,
    get_tracked_companies,
)

__all__ = [
    "add_company",
    "delete_company",
    "get_companies_for_user",
    "get_tracked_companies",
]
