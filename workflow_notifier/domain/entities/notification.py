"""Domain entity representing a queued workflow notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

NOTIFICATION_STATUS_QUEUED = "queued"
NOTIFICATION_STATUS_SENT = "sent"
NOTIFICATION_STATUS_FAILED = "failed"

NOTIFICATION_STATUSES = (
    NOTIFICATION_STATUS_QUEUED,
    NOTIFICATION_STATUS_SENT,
    NOTIFICATION_STATUS_FAILED,
)

CHANNEL_EMAIL = "email"
CHANNEL_STAKEHOLDER = "stakeholder"
CHANNEL_DASHBOARD = "dashboard"
CHANNEL_MILESTONE = "milestone"


@dataclass
class Notification:
    """Message waiting in, or already processed by, the delivery queue."""

    id: int | None
    workflow_id: str
    channel: str
    payload: dict[str, Any] = field(default_factory=dict)
    status: str = NOTIFICATION_STATUS_QUEUED
    scheduled_for: datetime | None = None
    sent_at: datetime | None = None
    error: str | None = None
    created_at: datetime | None = None


__all__ = [
    "Notification",
    "NOTIFICATION_STATUS_QUEUED",
    "NOTIFICATION_STATUS_SENT",
    "NOTIFICATION_STATUS_FAILED",
    "NOTIFICATION_STATUSES",
    "CHANNEL_EMAIL",
    "CHANNEL_STAKEHOLDER",
    "CHANNEL_DASHBOARD",
    "CHANNEL_MILESTONE",
]
