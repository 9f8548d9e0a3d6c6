"""
Daily reminder run.

Meant to be invoked once a day by an external scheduler (cron, a cloud
scheduler job). Exits non-zero if any owner's digest failed to send, so
the scheduler can alert on it.

Usage:
    trackie-reminders                 # run for today
    trackie-reminders --date 2024-03-28
"""

import argparse
import asyncio
import sys
from datetime import date
from typing import Optional

import structlog

from trackie.orchestrator import create_app_components


logger = structlog.get_logger(__name__)


def run_async(coro):
    """Run a coroutine on a fresh event loop."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Send due-today / due-tomorrow reminders.")
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Run as if today were this date (YYYY-MM-DD)",
    )
    parser.add_argument(
        "--no-storage",
        action="store_true",
        help="Use in-memory storage instead of Google Sheets",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    _, dispatcher = create_app_components(use_storage=not args.no_storage)

    report = run_async(dispatcher.run(today=args.date))
    logger.info(
        "reminder_run_finished",
        run_id=str(report.run_id),
        notified=len(report.notified),
        skipped=len(report.skipped),
        failed=len(report.failed),
    )
    return 1 if report.has_failures else 0


if __name__ == "__main__":
    sys.exit(main())
