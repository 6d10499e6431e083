"""Aggregate application use cases."""

from .notifications import (
    get_notification_stats,
    process_queued_notifications,
    schedule_notification,
    schedule_stakeholder_notifications,
)

__all__ = [
    "get_notification_stats",
    "process_queued_notifications",
    "schedule_notification",
    "schedule_stakeholder_notifications",
]
