"""Pydantic schemas exposed by the HTTP API."""

from .notification import (
    NotificationCreate,
    NotificationPreviewRead,
    NotificationRead,
    NotificationStatsRead,
    ProcessingSummaryRead,
    StakeholderItem,
    StakeholderNotificationsCreate,
)

__all__ = [
    "NotificationCreate",
    "NotificationPreviewRead",
    "NotificationRead",
    "NotificationStatsRead",
    "ProcessingSummaryRead",
    "StakeholderItem",
    "StakeholderNotificationsCreate",
]
