"""
Keyword matching for job titles.
"""
from __future__ import annotations

from typing import Iterable, Optional


def match_keyword(title: str, keywords: Iterable[str]) -> Optional[str]:
    """
    Return the first keyword (in caller order) contained in the title, ignoring case.

    Plain substring containment: no stemming, tokenizing or fuzzy matching. Blank keywords
    never match.
    """
    title_lower = (title or "").lower()
    for keyword in keywords:
        needle = (keyword or "").lower()
        if needle.strip() and needle in title_lower:
            return keyword
    return None


__all__ = ["match_keyword"]
