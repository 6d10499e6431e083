"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class NotificationCreate(BaseModel):
    """Payload used to queue a single notification."""

    workflow_id: str = Field(..., min_length=1, description="Owning workflow identifier")
    channel: str = Field(..., min_length=1, description="Delivery channel, e.g. email")
    payload: dict[str, Any] = Field(..., description="Template data; should include 'type'")
    scheduled_for: datetime | None = None


class StakeholderItem(BaseModel):
    name: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)
    email: str | None = None


class StakeholderNotificationsCreate(BaseModel):
    """Stakeholders that must be told they joined a workflow."""

    stakeholders: list[StakeholderItem] = Field(..., min_length=1)


class NotificationRead(BaseModel):
    """Representation of a stored notification."""

    id: int
    workflow_id: str
    channel: str
    payload: dict[str, Any] = Field(default_factory=dict)
    status: str
    scheduled_for: datetime | None = None
    sent_at: datetime | None = None
    error: str | None = None
    created_at: datetime | None = None


class NotificationPreviewRead(BaseModel):
    channel: str
    recipients: list[str]
    subject: str
    message: str
    scheduled_for: datetime | None = None


class ProcessingSummaryRead(BaseModel):
    sent: int
    failed: int


class NotificationStatsRead(BaseModel):
    total: int
    sent: int
    queued: int
    failed: int


__all__ = [
    "NotificationCreate",
    "NotificationPreviewRead",
    "NotificationRead",
    "NotificationStatsRead",
    "ProcessingSummaryRead",
    "StakeholderItem",
    "StakeholderNotificationsCreate",
]
