"""
Show what the extractor finds on a career page, without touching the database.

Usage:
  python -m scripts.preview_extract https://example.com/careers
  python -m scripts.preview_extract saved_page.html --source-url https://example.com/careers
"""
import argparse
import asyncio
import sys
from pathlib import Path

from worker.extractor import extract
from worker.fetcher import scrape_job_page
from worker.matcher import match_keyword


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("target", help="career page URL or a saved HTML file")
    parser.add_argument("--source-url", default=None, help="base URL for relative links when reading a file")
    parser.add_argument("-k", "--keyword", action="append", default=[], help="keyword to highlight (repeatable)")
    args = parser.parse_args(argv)

    path = Path(args.target)
    if path.exists():
        source_url = args.source_url or path.resolve().as_uri()
        jobs = extract(path.read_text(encoding="utf-8", errors="replace"), source_url)
    else:
        result = asyncio.run(scrape_job_page(args.target))
        if not result.success:
            print(f"Scrape failed: {result.error}", file=sys.stderr)
            sys.exit(1)
        jobs = result.jobs

    print(f"Found {len(jobs)} candidate(s):")
    for idx, job in enumerate(jobs, start=1):
        matched = match_keyword(job.title, args.keyword) if args.keyword else None
        flag = f"  [match: {matched}]" if matched else ""
        print(f"{idx:>3}. {job.title}{flag}")
        print(f"     {job.url}")
        if job.location:
            print(f"     location: {job.location}")


if __name__ == "__main__":
    main()
