import argparse
import asyncio
import json
import logging

from core.database import init_db
from worker import config
from worker.orchestrator import RunSummary, build_orchestrator

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
log = logging.getLogger("worker")


async def run_once() -> RunSummary:
    """
    Do one full scrape run:
    - load tracked companies
    - scrape each career page and store unseen jobs
    - email keyword matches
    Returns the run summary.
    """
    orchestrator = build_orchestrator()
    return await orchestrator.run()


async def main(once: bool = False):
    init_db()

    while True:
        try:
            summary = await run_once()
            log.info("Cycle complete", extra=summary.stats())
            if once:
                print(json.dumps(summary.to_dict(), indent=2))
        except Exception as e:
            log.exception("Error during run", extra={"error": str(e)})

        if once:
            break

        log.info("Sleeping", extra={"seconds": config.CHECK_INTERVAL})
        await asyncio.sleep(config.CHECK_INTERVAL)


def cli(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Scrape tracked career pages for keyword matches.")
    parser.add_argument("--once", action="store_true", help="run a single pass and print the summary")
    args = parser.parse_args(argv)
    asyncio.run(main(once=args.once))


if __name__ == "__main__":
    cli()
