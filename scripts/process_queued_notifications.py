"""Run one delivery pass over the queued notifications.

Meant to be invoked by cron or any other external scheduler.
"""

from __future__ import annotations

import argparse
import logging

from workflow_notifier.application.use_cases.notifications import (
    NotificationProcessor,
    get_notification_stats,
)
from workflow_notifier.domain.exceptions import NotificationPersistenceError
from workflow_notifier.infrastructure.database import SessionLocal, initialize_database
from workflow_notifier.interfaces.api.dependencies import get_dispatcher


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the delivery pass."""

    parser = argparse.ArgumentParser(
        description="Deliver every queued workflow notification once.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print notification counts by status after the pass.",
    )
    return parser.parse_args()


def main() -> None:
    """Process the queue and print the aggregated result."""

    args = parse_args()
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    initialize_database()
    processor = NotificationProcessor(SessionLocal, get_dispatcher())

    try:
        summary = processor()
    except NotificationPersistenceError as exc:
        raise SystemExit(f"Notification store unavailable: {exc}") from exc

    print(f"Sent: {summary.sent}\nFailed: {summary.failed}")

    if args.stats:
        session = SessionLocal()
        try:
            stats = get_notification_stats(session)
        finally:
            session.close()
        print(
            f"Total: {stats.total}\n"
            f"Queued: {stats.queued}\n"
            f"Sent: {stats.sent}\n"
            f"Failed: {stats.failed}"
        )


if __name__ == "__main__":
    main()
