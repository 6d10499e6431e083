"""Email transport delivering notification messages through SendGrid."""

from __future__ import annotations

import json
import logging
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from workflow_notifier.config import Settings
from workflow_notifier.domain.entities import DeliveryResult, EmailMessage

logger = logging.getLogger(__name__)

EMAIL_NOT_CONFIGURED = "Email transport not configured"


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        messages = [
            str(item["message"])
            for item in parsed.get("errors") or []
            if isinstance(item, dict) and item.get("message")
        ]
        if messages:
            return "; ".join(messages)
        try:
            return json.dumps(parsed, sort_keys=True)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _describe_failure(status_code: Any, details: str | None) -> str:
    if status_code and details:
        return f"SendGrid request failed with status {status_code}: {details}"
    if status_code:
        return f"SendGrid request failed with status {status_code}"
    if details:
        return f"SendGrid request failed: {details}"
    return "SendGrid request failed"


class SendGridEmailSender:
    """Send :class:`EmailMessage` objects using the SendGrid REST API."""

    def __init__(self, api_key: str | None, sender: str | None) -> None:
        self._api_key = api_key
        self._sender = sender

    @classmethod
    def from_settings(cls, settings: Settings) -> "SendGridEmailSender":
        return cls(settings.sendgrid_api_key, settings.sendgrid_sender)

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key and self._sender)

    def send(self, message: EmailMessage) -> DeliveryResult:
        """Deliver ``message`` and report the outcome without raising."""

        if not self.is_configured:
            logger.info("SendGrid configuration incomplete; skipping email delivery")
            return DeliveryResult.failure(EMAIL_NOT_CONFIGURED)

        recipients = message.recipient_list()
        if not recipients:
            return DeliveryResult.failure("Email message has no recipients")

        mail = Mail(
            from_email=self._sender,
            to_emails=recipients,
            subject=message.subject,
            plain_text_content=message.text,
            html_content=message.html,
        )

        try:
            client = SendGridAPIClient(self._api_key)
            response = client.send(mail)
        except Exception as exc:
            reason = _describe_failure(
                getattr(exc, "status_code", None),
                _extract_sendgrid_error_details(getattr(exc, "body", None)) or str(exc) or None,
            )
            logger.error("%s", reason)
            return DeliveryResult.failure(reason)

        status_code = getattr(response, "status_code", None)
        if not isinstance(status_code, int) or not 200 <= status_code < 300:
            reason = _describe_failure(
                status_code,
                _extract_sendgrid_error_details(getattr(response, "body", None)),
            )
            logger.error("%s", reason)
            return DeliveryResult.failure(reason)

        logger.debug("SendGrid accepted email '%s' for %s", message.subject, message.to)
        return DeliveryResult.ok()


__all__ = ["EMAIL_NOT_CONFIGURED", "SendGridEmailSender"]
