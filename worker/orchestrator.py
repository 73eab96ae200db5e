"""
One scrape run over every tracked company.

Collaborators are injected so tests (and alternative deployments) can swap the database,
the mailer and the page fetcher:

  store     get_tracked_companies(), get_keywords_for_user(user_id),
            insert_job_if_new(company_id, candidate), create_notification(...)
  notifier  notify(email, candidate, keyword, company_name) -> bool
  fetcher   async (url) -> ScrapeResult

Store and notifier are synchronous (psycopg, smtplib) and run in worker threads, so the
event loop stays free and the run deadline can interrupt a company mid-way. A call already
in flight when the deadline hits finishes in its thread; its outcome is not counted.
"""
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Awaitable, Callable, Dict, List, Optional

from core.database import (
    create_notification,
    get_keywords_for_user,
    get_tracked_companies,
    insert_job_if_new,
)
from worker import config
from worker.extractor import Candidate
from worker.fetcher import ScrapeResult, scrape_job_page
from worker.matcher import match_keyword
from worker.notifier import NotificationDispatcher

log = logging.getLogger("worker")

Fetcher = Callable[[str], Awaitable[ScrapeResult]]

STATUS_OK = "ok"
STATUS_SKIPPED = "skipped"
STATUS_FAILED = "failed"


@dataclass
class CompanyResult:
    company_id: Optional[int]
    company_name: str
    status: str = STATUS_OK
    new_jobs: int = 0
    notifications_sent: int = 0
    notifications_recorded: int = 0
    error: Optional[str] = None

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class RunSummary:
    companies_processed: int = 0
    new_jobs_found: int = 0
    notifications_sent: int = 0
    notifications_recorded: int = 0
    details: List[CompanyResult] = field(default_factory=list)

    def add(self, result: CompanyResult) -> None:
        self.details.append(result)
        self.new_jobs_found += result.new_jobs
        self.notifications_sent += result.notifications_sent
        self.notifications_recorded += result.notifications_recorded

    @property
    def failures(self) -> List[CompanyResult]:
        return [d for d in self.details if d.status == STATUS_FAILED]

    def stats(self) -> Dict:
        return {
            "companies_processed": self.companies_processed,
            "new_jobs_found": self.new_jobs_found,
            "notifications_sent": self.notifications_sent,
        }

    def to_dict(self) -> Dict:
        return {
            "success": True,
            "message": "Scraping completed successfully",
            "stats": self.stats(),
            "details": [d.to_dict() for d in self.details],
        }


class DatabaseStore:
    """Store collaborator backed by the Postgres helpers in core.database."""

    def get_tracked_companies(self) -> List[Dict]:
        return get_tracked_companies()

    def get_keywords_for_user(self, user_id: int) -> List[str]:
        return get_keywords_for_user(user_id)

    def insert_job_if_new(self, company_id: int, candidate: Candidate) -> Optional[Dict]:
        return insert_job_if_new(
            company_id=company_id,
            title=candidate.title,
            url=candidate.url,
            description=candidate.description,
            location=candidate.location,
            posted_date=candidate.posted_date,
        )

    def create_notification(self, *, user_id: int, job_id: int, keyword_matched: str, email_sent: bool) -> int:
        return create_notification(
            user_id=user_id,
            job_id=job_id,
            keyword_matched=keyword_matched,
            email_sent=email_sent,
        )


class ScrapeOrchestrator:
    def __init__(
        self,
        store,
        notifier,
        fetcher: Optional[Fetcher] = None,
        *,
        deadline_seconds: Optional[float] = None,
        max_concurrency: int = 1,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.store = store
        self.notifier = notifier
        self.fetcher = fetcher or scrape_job_page
        self.deadline_seconds = deadline_seconds
        self.max_concurrency = max(1, int(max_concurrency))
        self._clock = clock

    async def run(self) -> RunSummary:
        """
        Process every tracked company and return the aggregate summary.

        Only the companies query itself may raise; anything going wrong inside a company is
        recorded on that company's result.
        """
        log.info("Starting job scraping process...")
        companies = await asyncio.to_thread(self.store.get_tracked_companies)
        log.info("Found companies to scrape", extra={"count": len(companies)})

        summary = RunSummary(companies_processed=len(companies))
        started = self._clock()
        keyword_cache: Dict[int, asyncio.Task] = {}

        if self.max_concurrency == 1:
            for company in companies:
                summary.add(await self._process_within_deadline(company, started, keyword_cache))
        else:
            semaphore = asyncio.Semaphore(self.max_concurrency)

            async def _bounded(company: Dict) -> CompanyResult:
                async with semaphore:
                    return await self._process_within_deadline(company, started, keyword_cache)

            for result in await asyncio.gather(*(_bounded(c) for c in companies)):
                summary.add(result)

        log.info(
            "Scraping process completed",
            extra={**summary.stats(), "failed_companies": len(summary.failures)},
        )
        return summary

    def _remaining(self, started: float) -> Optional[float]:
        if self.deadline_seconds is None:
            return None
        return self.deadline_seconds - (self._clock() - started)

    async def _process_within_deadline(
        self,
        company: Dict,
        started: float,
        keyword_cache: Dict[int, asyncio.Task],
    ) -> CompanyResult:
        result = CompanyResult(
            company_id=company.get("id"),
            company_name=company.get("company_name") or "",
        )

        remaining = self._remaining(started)
        if remaining is not None and remaining <= 0:
            result.status = STATUS_SKIPPED
            result.error = "deadline exceeded"
            return result

        try:
            if remaining is None:
                await self._process_company(company, result, keyword_cache)
            else:
                await asyncio.wait_for(self._process_company(company, result, keyword_cache), timeout=remaining)
        except asyncio.TimeoutError:
            log.warning("Run deadline hit while processing company", extra={"company": result.company_name})
            result.status = STATUS_FAILED
            result.error = "deadline exceeded"
        except Exception as e:
            log.exception("Error processing company", extra={"company": result.company_name})
            result.status = STATUS_FAILED
            result.error = str(e) or e.__class__.__name__
        return result

    async def _keywords_for(self, user_id: int, keyword_cache: Dict[int, asyncio.Task]) -> List[str]:
        # One lookup per owner per run, shared by concurrently processed companies.
        if user_id not in keyword_cache:
            keyword_cache[user_id] = asyncio.ensure_future(
                asyncio.to_thread(self.store.get_keywords_for_user, user_id)
            )
        return list(await asyncio.shield(keyword_cache[user_id]))

    async def _process_company(
        self,
        company: Dict,
        result: CompanyResult,
        keyword_cache: Dict[int, asyncio.Task],
    ) -> None:
        name = result.company_name
        user_id = company.get("user_id")
        log.info("Processing company", extra={"company": name})

        keywords = await self._keywords_for(user_id, keyword_cache)
        if not keywords:
            log.info("No keywords for user, skipping", extra={"company": name, "user_id": user_id})
            result.status = STATUS_SKIPPED
            result.error = "no keywords"
            return

        scraped = await self.fetcher(company.get("career_page_url") or "")
        if not scraped.success:
            log.error("Failed to scrape company", extra={"company": name, "error": scraped.error})
            result.status = STATUS_FAILED
            result.error = scraped.error
            return

        email = (company.get("email") or "").strip()
        for candidate in scraped.jobs:
            try:
                job = await asyncio.to_thread(self.store.insert_job_if_new, result.company_id, candidate)
            except Exception:
                log.exception("Error inserting job", extra={"company": name, "job_title": candidate.title})
                continue
            if job is None:
                continue

            result.new_jobs += 1
            log.info("Added new job", extra={"company": name, "job_title": candidate.title})

            keyword = match_keyword(candidate.title, keywords)
            if not keyword:
                continue
            log.info("Keyword match found", extra={"keyword": keyword, "job_title": candidate.title})

            email_sent = False
            if email:
                email_sent = bool(await asyncio.to_thread(self.notifier.notify, email, candidate, keyword, name))
            else:
                log.warning("No email on file for user; recording unsent notification", extra={"user_id": user_id})
            if email_sent:
                result.notifications_sent += 1

            try:
                await asyncio.to_thread(
                    self.store.create_notification,
                    user_id=user_id,
                    job_id=job["id"],
                    keyword_matched=keyword,
                    email_sent=email_sent,
                )
            except Exception:
                log.exception("Error recording notification", extra={"company": name, "job_title": candidate.title})
                continue
            result.notifications_recorded += 1


def build_orchestrator() -> ScrapeOrchestrator:
    """Wire the production collaborators using settings from worker.config."""
    return ScrapeOrchestrator(
        store=DatabaseStore(),
        notifier=NotificationDispatcher(),
        deadline_seconds=config.SCRAPE_DEADLINE_SECONDS,
        max_concurrency=config.SCRAPE_CONCURRENCY,
    )


__all__ = [
    "CompanyResult",
    "RunSummary",
    "DatabaseStore",
    "ScrapeOrchestrator",
    "build_orchestrator",
    "STATUS_OK",
    "STATUS_SKIPPED",
    "STATUS_FAILED",
]
