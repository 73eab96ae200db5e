"""
Scraper settings read from the environment (`.env` is honoured).
"""
from __future__ import annotations

import os

from dotenv import load_dotenv

# Load `.env` for local/dev runs (override=True so updates take effect after restart).
load_dotenv(override=True)


def _optional_float(name: str) -> float | None:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    value = float(raw)
    return value if value > 0 else None


# -------- CONFIG --------
CHECK_INTERVAL = int(os.getenv("CHECK_INTERVAL", "3600"))  # seconds between scheduled runs
FETCH_TIMEOUT_SECONDS = float(os.getenv("FETCH_TIMEOUT_SECONDS", "20"))
MAX_PAGE_BYTES = int(os.getenv("MAX_PAGE_BYTES", str(2 * 1024 * 1024)))
SCRAPE_DEADLINE_SECONDS = _optional_float("SCRAPE_DEADLINE_SECONDS")
SCRAPE_CONCURRENCY = max(1, int(os.getenv("SCRAPE_CONCURRENCY", "1")))
SCRAPER_TRIGGER_TOKEN = os.getenv("SCRAPER_TRIGGER_TOKEN") or None
USER_AGENT = os.getenv(
    "SCRAPER_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
)
# ------------------------
