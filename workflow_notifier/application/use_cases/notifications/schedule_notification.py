"""Use cases for placing notifications in the delivery queue."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from workflow_notifier.domain.entities import (
    CHANNEL_STAKEHOLDER,
    NOTIFICATION_STATUS_QUEUED,
    Notification,
    Stakeholder,
)
from workflow_notifier.infrastructure.repositories import NotificationRepository
from workflow_notifier.utils import ensure_app_timezone, now_in_app_timezone

from .render_preview import TYPE_STAKEHOLDER_ADDED

logger = logging.getLogger(__name__)


def _build_notification(
    *,
    workflow_id: str,
    channel: str,
    payload: Mapping[str, Any] | None,
    scheduled_for: datetime | None,
) -> Notification:
    if payload is None:
        raise ValueError("A notification payload is required")
    if not isinstance(payload, Mapping):
        raise ValueError("The notification payload must be a mapping")

    now = now_in_app_timezone()
    return Notification(
        id=None,
        workflow_id=workflow_id,
        channel=channel,
        payload=dict(payload),
        status=NOTIFICATION_STATUS_QUEUED,
        scheduled_for=ensure_app_timezone(scheduled_for) or now,
        sent_at=None,
        error=None,
        created_at=now,
    )


def schedule_notification(
    session: Session,
    *,
    workflow_id: str,
    channel: str,
    payload: Mapping[str, Any] | None,
    scheduled_for: datetime | None = None,
) -> Notification:
    """Persist a new ``queued`` notification.

    The payload shape is not validated; an odd payload only produces a poor
    preview later on.
    """

    notification = _build_notification(
        workflow_id=workflow_id,
        channel=channel,
        payload=payload,
        scheduled_for=scheduled_for,
    )
    saved = NotificationRepository(session).create(notification)
    logger.info("Scheduled %s notification for workflow %s", channel, workflow_id)
    return saved


def stakeholder_payload(workflow_id: str, stakeholder: Stakeholder) -> dict[str, Any]:
    """Return the ``stakeholder_added`` payload announcing ``stakeholder``."""

    return {
        "type": TYPE_STAKEHOLDER_ADDED,
        "workflowId": workflow_id,
        "stakeholderName": stakeholder.name,
        "stakeholderRole": stakeholder.role,
        "email": stakeholder.email,
    }


def schedule_stakeholder_notifications(
    session: Session,
    *,
    workflow_id: str,
    stakeholders: Iterable[Stakeholder],
) -> list[Notification]:
    """Queue one stakeholder notification per entry, all in one transaction.

    Either every notification is stored or, when the store fails, none is.
    """

    notifications = [
        _build_notification(
            workflow_id=workflow_id,
            channel=CHANNEL_STAKEHOLDER,
            payload=stakeholder_payload(workflow_id, stakeholder),
            scheduled_for=None,
        )
        for stakeholder in stakeholders
    ]
    if not notifications:
        return []

    saved = NotificationRepository(session).create_many(notifications)
    logger.info(
        "Scheduled %s stakeholder notifications for workflow %s", len(saved), workflow_id
    )
    return saved


__all__ = [
    "schedule_notification",
    "schedule_stakeholder_notifications",
    "stakeholder_payload",
]
