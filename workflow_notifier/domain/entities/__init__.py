"""Domain entities exposed by the application."""

from .delivery import (
    DeliveryResult,
    EmailMessage,
    NotificationPreview,
    NotificationStats,
    ProcessingSummary,
)
from .notification import (
    CHANNEL_DASHBOARD,
    CHANNEL_EMAIL,
    CHANNEL_MILESTONE,
    CHANNEL_STAKEHOLDER,
    NOTIFICATION_STATUS_FAILED,
    NOTIFICATION_STATUS_QUEUED,
    NOTIFICATION_STATUS_SENT,
    NOTIFICATION_STATUSES,
    Notification,
)
from .stakeholder import Stakeholder

__all__ = [
    "CHANNEL_DASHBOARD",
    "CHANNEL_EMAIL",
    "CHANNEL_MILESTONE",
    "CHANNEL_STAKEHOLDER",
    "DeliveryResult",
    "EmailMessage",
    "Notification",
    "NotificationPreview",
    "NotificationStats",
    "NOTIFICATION_STATUS_FAILED",
    "NOTIFICATION_STATUS_QUEUED",
    "NOTIFICATION_STATUS_SENT",
    "NOTIFICATION_STATUSES",
    "ProcessingSummary",
    "Stakeholder",
]
