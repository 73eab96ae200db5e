"""
Keyword storage re-exports.
"""
from core.db.keywords.keywords_store import (
    add_keyword,
    delete_keyword,
    get_keyword_rows_for_user,
    get_keywords_for_user,
)

__all__ = [
    "add_keyword",
    "delete_keyword",
    "get_keyword_rows_for_user",
    "get_keywords_for_user",
]
