"""Batch pass delivering every queued notification once."""

from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy.orm import Session

from workflow_notifier.domain.entities import ProcessingSummary
from workflow_notifier.domain.exceptions import (
    InvalidStatusTransition,
    NotificationNotFoundError,
)
from workflow_notifier.infrastructure.repositories import NotificationRepository
from workflow_notifier.utils import now_in_app_timezone

from .dispatch import ChannelDispatcher

logger = logging.getLogger(__name__)


def process_queued_notifications(
    session: Session, dispatcher: ChannelDispatcher
) -> ProcessingSummary:
    """Dispatch the current snapshot of queued notifications and record outcomes.

    A delivery failure only marks that notification as ``failed``; the pass
    continues with the rest. Store errors propagate to the caller.
    """

    repository = NotificationRepository(session)
    snapshot = list(repository.list_queued())

    sent = 0
    failed = 0
    for notification in snapshot:
        result = dispatcher.dispatch(notification)
        try:
            if result.success:
                repository.mark_sent(notification.id, sent_at=now_in_app_timezone())
                sent += 1
                continue

            logger.error(
                "Failed to send notification %s (%s): %s",
                notification.id,
                notification.channel,
                result.error,
            )
            repository.mark_failed(notification.id, error=result.error or "Unknown error")
            failed += 1
        except (InvalidStatusTransition, NotificationNotFoundError) as exc:
            # Another pass already settled this record after our snapshot was taken.
            logger.warning("Skipping notification %s: %s", notification.id, exc)

    logger.info("Processed notifications - Sent: %s, Failed: %s", sent, failed)
    return ProcessingSummary(sent=sent, failed=failed)


class NotificationProcessor:
    """Zero-argument trigger for an external scheduler.

    Each call opens a fresh session, runs one batch pass and closes it.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        dispatcher: ChannelDispatcher,
    ) -> None:
        self._session_factory = session_factory
        self._dispatcher = dispatcher

    def __call__(self) -> ProcessingSummary:
        session = self._session_factory()
        try:
            return process_queued_notifications(session, self._dispatcher)
        finally:
            session.close()


__all__ = ["NotificationProcessor", "process_queued_notifications"]
