"""Endpoints for queueing, delivering and inspecting notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from workflow_notifier.application.use_cases.notifications import (
    ChannelDispatcher,
    get_notification_stats,
    process_queued_notifications,
    schedule_notification,
)
from workflow_notifier.domain.entities import Notification
from workflow_notifier.domain.exceptions import NotificationPersistenceError
from workflow_notifier.infrastructure.database import get_db
from workflow_notifier.interfaces.api.dependencies import get_dispatcher
from workflow_notifier.interfaces.api.schemas import (
    NotificationCreate,
    NotificationRead,
    NotificationStatsRead,
    ProcessingSummaryRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        workflow_id=notification.workflow_id,
        channel=notification.channel,
        payload=notification.payload or {},
        status=notification.status,
        scheduled_for=notification.scheduled_for,
        sent_at=notification.sent_at,
        error=notification.error,
        created_at=notification.created_at,
    )


def store_unavailable(exc: NotificationPersistenceError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=str(exc),
    )


@router.post("/", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
def create_notification(
    notification_in: NotificationCreate,
    db: Session = Depends(get_db),
) -> NotificationRead:
    """Queue a notification for a later delivery pass."""

    try:
        notification = schedule_notification(
            db,
            workflow_id=notification_in.workflow_id,
            channel=notification_in.channel,
            payload=notification_in.payload,
            scheduled_for=notification_in.scheduled_for,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except NotificationPersistenceError as exc:
        raise store_unavailable(exc) from exc
    return notification_to_schema(notification)


@router.post("/process", response_model=ProcessingSummaryRead)
def process_notifications(
    db: Session = Depends(get_db),
    dispatcher: ChannelDispatcher = Depends(get_dispatcher),
) -> ProcessingSummaryRead:
    """Run one delivery pass over the queued notifications."""

    try:
        summary = process_queued_notifications(db, dispatcher)
    except NotificationPersistenceError as exc:
        raise store_unavailable(exc) from exc
    return ProcessingSummaryRead(sent=summary.sent, failed=summary.failed)


@router.get("/stats", response_model=NotificationStatsRead)
def notification_stats(
    workflow_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> NotificationStatsRead:
    """Return notification counts grouped by status."""

    try:
        stats = get_notification_stats(db, workflow_id=workflow_id)
    except NotificationPersistenceError as exc:
        raise store_unavailable(exc) from exc
    return NotificationStatsRead(
        total=stats.total,
        sent=stats.sent,
        queued=stats.queued,
        failed=stats.failed,
    )
