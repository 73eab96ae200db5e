"""
Lightweight in-memory rate limit helpers.
"""
from __future__ import annotations

import time
from typing import Dict, Tuple

_rate_state: Dict[str, list[float]] = {}


def allow_request_with_remaining(key: str, limit: int = 5, window_seconds: int = 60) -> Tuple[bool, int]:
    """
    Sliding-window rate limit with remaining-count feedback.
    Returns (allowed: bool, remaining_after: int).
    """
    now = time.time()
    window_start = now - window_seconds
    history = [t for t in _rate_state.get(key, []) if t > window_start]
    if len(history) >= limit:
        _rate_state[key] = history
        return False, 0
    history.append(now)
    _rate_state[key] = history
    return True, max(0, limit - len(history))


def reset_rate_limits() -> None:
    _rate_state.clear()


__all__ = [
    "allow_request_with_remaining",
    "reset_rate_limits",
]
