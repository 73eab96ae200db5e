import asyncio
import time

import pytest

from worker.extractor import Candidate
from worker.fetcher import ScrapeResult
from worker.orchestrator import (
    STATUS_FAILED,
    STATUS_OK,
    STATUS_SKIPPED,
    RunSummary,
    ScrapeOrchestrator,
)


class FakeStore:
    def __init__(self, companies, keywords):
        self.companies = companies
        self.keywords = keywords
        self.jobs = {}
        self.notifications = []
        self.keyword_lookups = []
        self.fail_titles = set()

    def get_tracked_companies(self):
        return list(self.companies)

    def get_keywords_for_user(self, user_id):
        self.keyword_lookups.append(user_id)
        return self.keywords.get(user_id, [])

    def insert_job_if_new(self, company_id, candidate):
        if candidate.title in self.fail_titles:
            raise RuntimeError("insert failed")
        key = (company_id, candidate.title)
        if key in self.jobs:
            return None
        row = {"id": len(self.jobs) + 1, "company_id": company_id, "title": candidate.title}
        self.jobs[key] = row
        return row

    def create_notification(self, *, user_id, job_id, keyword_matched, email_sent):
        self.notifications.append(
            {"user_id": user_id, "job_id": job_id, "keyword_matched": keyword_matched, "email_sent": email_sent}
        )
        return len(self.notifications)


class FakeNotifier:
    def __init__(self, result=True):
        self.result = result
        self.calls = []

    def notify(self, email, job, matched_keyword, company_name):
        self.calls.append((email, job.title, matched_keyword, company_name))
        return self.result


class FakeFetcher:
    def __init__(self, pages):
        self.pages = pages
        self.urls = []

    async def __call__(self, url):
        self.urls.append(url)
        page = self.pages[url]
        if isinstance(page, Exception):
            raise page
        return page


def _company(cid, user_id=1, email="user@example.com"):
    return {
        "id": cid,
        "user_id": user_id,
        "company_name": f"Company {cid}",
        "career_page_url": f"https://c{cid}.example.com/careers",
        "email": email,
    }


def _ok(*titles, url="https://example.com/careers"):
    return ScrapeResult(jobs=[Candidate(title=t, url=url) for t in titles], success=True)


def _run(orchestrator) -> RunSummary:
    return asyncio.run(orchestrator.run())


def test_new_jobs_are_stored_and_matches_notified():
    store = FakeStore([_company(1)], {1: ["backend", "frontend"]})
    notifier = FakeNotifier()
    fetcher = FakeFetcher({"https://c1.example.com/careers": _ok("Senior Backend Engineer", "Office Manager Lead")})

    summary = _run(ScrapeOrchestrator(store, notifier, fetcher))

    assert summary.stats() == {"companies_processed": 1, "new_jobs_found": 2, "notifications_sent": 1}
    assert notifier.calls == [("user@example.com", "Senior Backend Engineer", "backend", "Company 1")]
    assert store.notifications == [
        {"user_id": 1, "job_id": 1, "keyword_matched": "backend", "email_sent": True}
    ]
    assert summary.details[0].status == STATUS_OK


def test_rerun_against_unchanged_page_finds_nothing_new():
    store = FakeStore([_company(1)], {1: ["backend"]})
    notifier = FakeNotifier()
    fetcher = FakeFetcher({"https://c1.example.com/careers": _ok("Senior Backend Engineer", "Data Analyst II")})
    orchestrator = ScrapeOrchestrator(store, notifier, fetcher)

    first = _run(orchestrator)
    second = _run(orchestrator)

    assert first.new_jobs_found == 2
    assert second.new_jobs_found == 0
    assert second.notifications_sent == 0
    assert len(store.notifications) == 1
    assert len(notifier.calls) == 1


def test_failed_fetch_is_recorded_and_does_not_stop_the_run():
    store = FakeStore([_company(1), _company(2)], {1: ["engineer"]})
    fetcher = FakeFetcher(
        {
            "https://c1.example.com/careers": ScrapeResult(success=False, error="HTTP error! status: 503"),
            "https://c2.example.com/careers": _ok("Senior Backend Engineer"),
        }
    )

    summary = _run(ScrapeOrchestrator(store, FakeNotifier(), fetcher))

    assert summary.companies_processed == 2
    assert summary.new_jobs_found == 1
    first, second = summary.details
    assert first.status == STATUS_FAILED
    assert first.error == "HTTP error! status: 503"
    assert first.company_name == "Company 1"
    assert second.status == STATUS_OK
    assert [d.company_name for d in summary.failures] == ["Company 1"]


def test_unexpected_exception_in_one_company_is_contained(caplog):
    store = FakeStore([_company(1), _company(2)], {1: ["engineer"]})
    fetcher = FakeFetcher(
        {
            "https://c1.example.com/careers": ValueError("bad page"),
            "https://c2.example.com/careers": _ok("Senior Backend Engineer"),
        }
    )

    with caplog.at_level("ERROR"):
        summary = _run(ScrapeOrchestrator(store, FakeNotifier(), fetcher))

    assert summary.details[0].status == STATUS_FAILED
    assert summary.details[0].error == "bad page"
    assert summary.details[1].new_jobs == 1
    assert any("Error processing company" in rec.message for rec in caplog.records)


def test_send_failure_still_records_one_unsent_notification():
    store = FakeStore([_company(1)], {1: ["backend"]})
    fetcher = FakeFetcher({"https://c1.example.com/careers": _ok("Senior Backend Engineer")})

    summary = _run(ScrapeOrchestrator(store, FakeNotifier(result=False), fetcher))

    assert summary.notifications_sent == 0
    assert summary.notifications_recorded == 1
    assert store.notifications == [
        {"user_id": 1, "job_id": 1, "keyword_matched": "backend", "email_sent": False}
    ]


def test_company_without_keywords_is_never_fetched():
    store = FakeStore([_company(1, user_id=1), _company(2, user_id=2)], {2: ["analyst"]})
    fetcher = FakeFetcher(
        {
            "https://c1.example.com/careers": _ok("Senior Data Analyst"),
            "https://c2.example.com/careers": _ok("Senior Data Analyst"),
        }
    )

    summary = _run(ScrapeOrchestrator(store, FakeNotifier(), fetcher))

    assert fetcher.urls == ["https://c2.example.com/careers"]
    assert summary.companies_processed == 2
    assert summary.details[0].status == STATUS_SKIPPED
    assert summary.details[0].error == "no keywords"
    assert summary.details[1].new_jobs == 1


def test_insert_failure_skips_only_that_job():
    store = FakeStore([_company(1)], {1: ["engineer"]})
    store.fail_titles = {"Broken Platform Engineer"}
    fetcher = FakeFetcher(
        {"https://c1.example.com/careers": _ok("Broken Platform Engineer", "Senior Backend Engineer")}
    )

    summary = _run(ScrapeOrchestrator(store, FakeNotifier(), fetcher))

    assert summary.details[0].status == STATUS_OK
    assert summary.new_jobs_found == 1
    assert summary.notifications_sent == 1


def test_notification_persist_failure_is_logged_and_skipped(caplog):
    class BrokenNotificationStore(FakeStore):
        def create_notification(self, **kwargs):
            raise RuntimeError("db down")

    store = BrokenNotificationStore([_company(1)], {1: ["engineer"]})
    fetcher = FakeFetcher({"https://c1.example.com/careers": _ok("Senior Backend Engineer")})

    with caplog.at_level("ERROR"):
        summary = _run(ScrapeOrchestrator(store, FakeNotifier(), fetcher))

    assert summary.details[0].status == STATUS_OK
    assert summary.notifications_recorded == 0
    assert summary.notifications_sent == 1
    assert any("Error recording notification" in rec.message for rec in caplog.records)


def test_missing_owner_email_records_unsent_notification_without_sending():
    store = FakeStore([_company(1, email=None)], {1: ["engineer"]})
    notifier = FakeNotifier()
    fetcher = FakeFetcher({"https://c1.example.com/careers": _ok("Senior Backend Engineer")})

    summary = _run(ScrapeOrchestrator(store, notifier, fetcher))

    assert notifier.calls == []
    assert summary.notifications_sent == 0
    assert store.notifications[0]["email_sent"] is False


def test_companies_query_failure_propagates():
    class BrokenStore(FakeStore):
        def get_tracked_companies(self):
            raise RuntimeError("relation tracked_companies does not exist")

    orchestrator = ScrapeOrchestrator(BrokenStore([], {}), FakeNotifier(), FakeFetcher({}))

    with pytest.raises(RuntimeError):
        _run(orchestrator)


def test_keywords_loaded_once_per_owner():
    store = FakeStore([_company(1), _company(2)], {1: ["engineer"]})
    fetcher = FakeFetcher(
        {
            "https://c1.example.com/careers": _ok("Senior Backend Engineer"),
            "https://c2.example.com/careers": _ok("Senior Frontend Engineer"),
        }
    )

    _run(ScrapeOrchestrator(store, FakeNotifier(), fetcher))

    assert store.keyword_lookups == [1]


def test_deadline_skips_remaining_companies_and_returns_partial_summary():
    store = FakeStore([_company(1), _company(2)], {1: ["engineer"]})
    fetcher = FakeFetcher(
        {
            "https://c1.example.com/careers": _ok("Senior Backend Engineer"),
            "https://c2.example.com/careers": _ok("Senior Frontend Engineer"),
        }
    )
    ticks = iter([0.0, 1.0, 11.0])

    orchestrator = ScrapeOrchestrator(
        store,
        FakeNotifier(),
        fetcher,
        deadline_seconds=10,
        clock=lambda: next(ticks),
    )
    summary = _run(orchestrator)

    assert summary.companies_processed == 2
    assert summary.new_jobs_found == 1
    assert summary.details[1].status == STATUS_SKIPPED
    assert summary.details[1].error == "deadline exceeded"
    assert fetcher.urls == ["https://c1.example.com/careers"]


def test_slow_company_is_cut_off_by_deadline():
    store = FakeStore([_company(1)], {1: ["engineer"]})

    async def slow_fetcher(url):
        await asyncio.sleep(5)
        return _ok("Senior Backend Engineer")

    summary = _run(ScrapeOrchestrator(store, FakeNotifier(), slow_fetcher, deadline_seconds=0.05))

    assert summary.details[0].status == STATUS_FAILED
    assert summary.details[0].error == "deadline exceeded"
    assert summary.new_jobs_found == 0


def test_bounded_concurrency_processes_every_company():
    companies = [_company(i) for i in range(1, 6)]
    store = FakeStore(companies, {1: ["engineer"]})
    pages = {c["career_page_url"]: _ok(f"Senior Engineer Number {c['id']}") for c in companies}

    summary = _run(ScrapeOrchestrator(store, FakeNotifier(), FakeFetcher(pages), max_concurrency=3))

    assert summary.companies_processed == 5
    assert summary.new_jobs_found == 5
    assert summary.notifications_sent == 5
    assert [d.company_id for d in summary.details] == [1, 2, 3, 4, 5]


def test_summary_to_dict_shape():
    store = FakeStore([_company(1)], {1: ["engineer"]})
    fetcher = FakeFetcher({"https://c1.example.com/careers": _ok("Senior Backend Engineer")})

    payload = _run(ScrapeOrchestrator(store, FakeNotifier(), fetcher)).to_dict()

    assert payload["success"] is True
    assert payload["message"] == "Scraping completed successfully"
    assert payload["stats"] == {"companies_processed": 1, "new_jobs_found": 1, "notifications_sent": 1}
    assert payload["details"][0]["company_name"] == "Company 1"
    assert payload["details"][0]["status"] == "ok"


def test_blocking_notifier_cannot_outlive_deadline():
    class SlowNotifier(FakeNotifier):
        def notify(self, email, job, matched_keyword, company_name):
            time.sleep(0.5)
            return super().notify(email, job, matched_keyword, company_name)

    store = FakeStore([_company(1)], {1: ["engineer"]})
    titles = [f"Senior Backend Engineer {i}" for i in range(4)]
    fetcher = FakeFetcher({"https://c1.example.com/careers": _ok(*titles)})

    summary = _run(ScrapeOrchestrator(store, SlowNotifier(), fetcher, deadline_seconds=0.6))

    assert summary.details[0].status == STATUS_FAILED
    assert summary.details[0].error == "deadline exceeded"
    assert summary.notifications_sent < 4


def test_sync_store_calls_do_not_block_the_event_loop():
    class SlowStore(FakeStore):
        def insert_job_if_new(self, company_id, candidate):
            time.sleep(0.2)
            return super().insert_job_if_new(company_id, candidate)

    store = SlowStore([_company(1)], {1: ["engineer"]})
    fetcher = FakeFetcher({"https://c1.example.com/careers": _ok("Senior Backend Engineer", "Staff Data Engineer")})
    ticks = []

    async def scenario():
        run = asyncio.ensure_future(ScrapeOrchestrator(store, FakeNotifier(), fetcher).run())
        while not run.done():
            ticks.append(time.monotonic())
            await asyncio.sleep(0.02)
        return await run

    summary = asyncio.run(scenario())

    assert summary.new_jobs_found == 2
    assert len(ticks) > 5
