"""Use case reporting notification counts by status."""

from sqlalchemy.orm import Session

from workflow_notifier.domain.entities import (
    NOTIFICATION_STATUS_FAILED,
    NOTIFICATION_STATUS_QUEUED,
    NOTIFICATION_STATUS_SENT,
    NotificationStats,
)
from workflow_notifier.infrastructure.repositories import NotificationRepository


def get_notification_stats(
    session: Session, *, workflow_id: str | None = None
) -> NotificationStats:
    """Return totals for all notifications, or only those of ``workflow_id``."""

    counts = NotificationRepository(session).count_by_status(workflow_id=workflow_id)
    return NotificationStats(
        total=sum(counts.values()),
        sent=counts.get(NOTIFICATION_STATUS_SENT, 0),
        queued=counts.get(NOTIFICATION_STATUS_QUEUED, 0),
        failed=counts.get(NOTIFICATION_STATUS_FAILED, 0),
    )
