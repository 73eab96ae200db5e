"""
Career page fetching.

Failures never raise out of `scrape_job_page`: they come back as an unsuccessful
ScrapeResult so a single unreachable site only costs its own company.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import httpx

from worker import config
from worker.extractor import Candidate, extract

log = logging.getLogger("scraper")


class FetchError(Exception):
    """Raised for non-2xx responses."""


@dataclass
class ScrapeResult:
    jobs: List[Candidate] = field(default_factory=list)
    success: bool = True
    error: Optional[str] = None
    truncated: bool = False


async def fetch_page(
    url: str,
    *,
    client: httpx.AsyncClient,
    timeout: float = config.FETCH_TIMEOUT_SECONDS,
    max_bytes: int = config.MAX_PAGE_BYTES,
) -> tuple[str, bool]:
    """
    GET a page and return (text, truncated).

    The body is streamed and cut at max_bytes, so a huge page can't exhaust memory.
    """
    headers = {
        "User-Agent": config.USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    }
    async with client.stream("GET", url, headers=headers, timeout=timeout, follow_redirects=True) as response:
        if not response.is_success:
            raise FetchError(f"HTTP error! status: {response.status_code}")

        chunks: List[bytes] = []
        total = 0
        truncated = False
        async for chunk in response.aiter_bytes():
            room = max_bytes - total
            if len(chunk) > room:
                chunks.append(chunk[:room])
                truncated = True
                break
            chunks.append(chunk)
            total += len(chunk)

        encoding = response.charset_encoding or "utf-8"

    body = b"".join(chunks)
    try:
        return body.decode(encoding, errors="replace"), truncated
    except LookupError:
        return body.decode("utf-8", errors="replace"), truncated


async def scrape_job_page(
    url: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = config.FETCH_TIMEOUT_SECONDS,
    max_bytes: int = config.MAX_PAGE_BYTES,
) -> ScrapeResult:
    """Fetch a career page and run the extractor over it."""
    log.info("Scraping URL", extra={"url": url})
    try:
        if client is None:
            async with httpx.AsyncClient() as own_client:
                text, truncated = await fetch_page(url, client=own_client, timeout=timeout, max_bytes=max_bytes)
        else:
            text, truncated = await fetch_page(url, client=client, timeout=timeout, max_bytes=max_bytes)
    except (httpx.HTTPError, httpx.InvalidURL, FetchError) as e:
        error = str(e) or e.__class__.__name__
        log.warning("Scrape failed", extra={"url": url, "error": error})
        return ScrapeResult(jobs=[], success=False, error=error)

    if truncated:
        log.warning("Page truncated", extra={"url": url, "max_bytes": max_bytes})

    jobs = extract(text, url)
    log.info("Found unique jobs", extra={"url": url, "count": len(jobs)})
    return ScrapeResult(jobs=jobs, success=True, truncated=truncated)


__all__ = ["FetchError", "ScrapeResult", "fetch_page", "scrape_job_page"]
