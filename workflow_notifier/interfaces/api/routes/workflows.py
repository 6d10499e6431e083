"""Workflow scoped notification endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from workflow_notifier.application.use_cases.notifications import (
    preview_notifications,
    schedule_stakeholder_notifications,
)
from workflow_notifier.domain.entities import Stakeholder
from workflow_notifier.domain.exceptions import NotificationPersistenceError
from workflow_notifier.infrastructure.database import get_db
from workflow_notifier.interfaces.api.dependencies import get_dashboard_url
from workflow_notifier.interfaces.api.schemas import (
    NotificationPreviewRead,
    NotificationRead,
    StakeholderNotificationsCreate,
)

from .notifications import notification_to_schema, store_unavailable

router = APIRouter(prefix="/workflows", tags=["workflows"])


@router.post(
    "/{workflow_id}/stakeholder-notifications",
    response_model=list[NotificationRead],
    status_code=status.HTTP_201_CREATED,
)
def create_stakeholder_notifications(
    workflow_id: str,
    request: StakeholderNotificationsCreate,
    db: Session = Depends(get_db),
) -> list[NotificationRead]:
    """Queue a ``stakeholder_added`` notification for every stakeholder."""

    stakeholders = [
        Stakeholder(name=item.name, role=item.role, email=item.email)
        for item in request.stakeholders
    ]
    try:
        notifications = schedule_stakeholder_notifications(
            db, workflow_id=workflow_id, stakeholders=stakeholders
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except NotificationPersistenceError as exc:
        raise store_unavailable(exc) from exc
    return [notification_to_schema(notification) for notification in notifications]


@router.get(
    "/{workflow_id}/notification-previews",
    response_model=list[NotificationPreviewRead],
)
def list_notification_previews(
    workflow_id: str,
    db: Session = Depends(get_db),
    dashboard_url: str | None = Depends(get_dashboard_url),
) -> list[NotificationPreviewRead]:
    """Render the queued notifications of a workflow without sending them."""

    try:
        previews = preview_notifications(
            db, workflow_id=workflow_id, dashboard_url=dashboard_url
        )
    except NotificationPersistenceError as exc:
        raise store_unavailable(exc) from exc
    return [
        NotificationPreviewRead(
            channel=preview.channel,
            recipients=preview.recipients,
            subject=preview.subject,
            message=preview.message,
            scheduled_for=preview.scheduled_for,
        )
        for preview in previews
    ]
