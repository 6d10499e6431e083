"""Route notifications to the transport that delivers their channel."""

from __future__ import annotations

import html
import logging
from collections.abc import Mapping
from typing import Any, Protocol

from workflow_notifier.domain.entities import (
    CHANNEL_DASHBOARD,
    CHANNEL_EMAIL,
    CHANNEL_MILESTONE,
    CHANNEL_STAKEHOLDER,
    DeliveryResult,
    EmailMessage,
    Notification,
)

from .render_preview import render_preview

logger = logging.getLogger(__name__)

EMAIL_CHANNELS = frozenset({CHANNEL_EMAIL, CHANNEL_STAKEHOLDER, CHANNEL_MILESTONE})
DASHBOARD_PAYLOAD_NOT_MAPPING = "Dashboard payload is not a mapping"


class EmailSender(Protocol):
    def send(self, message: EmailMessage) -> DeliveryResult: ...


class WebhookSender(Protocol):
    def post(self, payload: Mapping[str, Any]) -> DeliveryResult: ...


def format_email_as_html(message: str) -> str:
    """Wrap every line of ``message`` in its own paragraph element."""

    return "".join(f"<p>{html.escape(line)}</p>" for line in message.split("\n"))


class ChannelDispatcher:
    """Deliver a single notification through the transport of its channel.

    The dispatcher never touches the store; recording the outcome is left to
    the caller.
    """

    def __init__(
        self,
        email_sender: EmailSender,
        webhook_sender: WebhookSender,
        *,
        dashboard_url: str | None = None,
    ) -> None:
        self._email_sender = email_sender
        self._webhook_sender = webhook_sender
        self._dashboard_url = dashboard_url

    def dispatch(self, notification: Notification) -> DeliveryResult:
        channel = notification.channel
        if channel in EMAIL_CHANNELS:
            deliver = self._send_email
        elif channel == CHANNEL_DASHBOARD:
            deliver = self._send_dashboard_webhook
        else:
            return DeliveryResult.failure(f"unknown notification channel: {channel}")

        try:
            return deliver(notification)
        except Exception as exc:
            logger.exception(
                "Transport raised while delivering notification %s", notification.id
            )
            return DeliveryResult.failure(str(exc) or exc.__class__.__name__)

    def build_email(self, notification: Notification) -> EmailMessage:
        preview = render_preview(notification, dashboard_url=self._dashboard_url)
        return EmailMessage(
            to=", ".join(preview.recipients),
            subject=preview.subject,
            text=preview.message,
            html=format_email_as_html(preview.message),
        )

    def _send_email(self, notification: Notification) -> DeliveryResult:
        return self._email_sender.send(self.build_email(notification))

    def _send_dashboard_webhook(self, notification: Notification) -> DeliveryResult:
        if not isinstance(notification.payload, Mapping):
            return DeliveryResult.failure(DASHBOARD_PAYLOAD_NOT_MAPPING)
        return self._webhook_sender.post(notification.payload)


__all__ = [
    "ChannelDispatcher",
    "DASHBOARD_PAYLOAD_NOT_MAPPING",
    "EMAIL_CHANNELS",
    "EmailSender",
    "WebhookSender",
    "format_email_as_html",
]
