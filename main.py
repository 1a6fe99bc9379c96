import argparse
import asyncio
import logging
import sys
from pathlib import Path

from scraper.config.settings import settings
from scraper.core.runner import run

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Crawl Computrabajo job postings.")
    parser.add_argument(
        "--start-url",
        action="append",
        dest="start_urls",
        help="Listing or detail URL to start from (repeatable). Defaults to START_URLS.",
    )
    parser.add_argument(
        "--results-wanted",
        type=int,
        default=settings.RESULTS_WANTED,
        help="Stop after this many saved jobs.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=settings.OUTPUT_PATH,
        help="JSON Lines file the jobs are appended to.",
    )
    return parser.parse_args()


async def main():
    """
    Main entry point.
    """
    args = parse_args()

    await run(
        portal="computrabajo",
        start_urls=args.start_urls or settings.START_URLS,
        results_wanted=args.results_wanted,
        output_path=args.output,
    )


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
