"""Use case for previewing a workflow's pending notifications."""

from sqlalchemy.orm import Session

from workflow_notifier.domain.entities import NotificationPreview
from workflow_notifier.infrastructure.repositories import NotificationRepository

from .render_preview import render_preview


def preview_notifications(
    session: Session,
    *,
    workflow_id: str,
    dashboard_url: str | None = None,
) -> list[NotificationPreview]:
    """Render every queued notification of ``workflow_id`` without sending it."""

    queued = NotificationRepository(session).list_queued(workflow_id=workflow_id)
    return [render_preview(notification, dashboard_url=dashboard_url) for notification in queued]
