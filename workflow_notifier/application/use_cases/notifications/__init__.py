"""Use cases for queueing, previewing and delivering notifications."""

from .dispatch import ChannelDispatcher, format_email_as_html
from .preview_notifications import preview_notifications
from .process_queued import NotificationProcessor, process_queued_notifications
from .render_preview import render_preview, render_preview_for
from .schedule_notification import (
    schedule_notification,
    schedule_stakeholder_notifications,
)
from .stats import get_notification_stats

__all__ = [
    "ChannelDispatcher",
    "NotificationProcessor",
    "format_email_as_html",
    "get_notification_stats",
    "preview_notifications",
    "process_queued_notifications",
    "render_preview",
    "render_preview_for",
    "schedule_notification",
    "schedule_stakeholder_notifications",
]
