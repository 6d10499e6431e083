"""HTTP transport posting workflow payloads to the dashboard webhook."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from workflow_notifier.config import Settings
from workflow_notifier.domain.entities import DeliveryResult

logger = logging.getLogger(__name__)

DASHBOARD_WEBHOOK_PATH = "/webhooks/workflow"
DASHBOARD_NOT_CONFIGURED = "Dashboard webhook not configured"


def build_dashboard_webhook_url(base_url: str | None) -> str:
    """Return the endpoint receiving workflow payloads for ``base_url``."""

    return f"{(base_url or '').rstrip('/')}{DASHBOARD_WEBHOOK_PATH}"


class DashboardWebhookSender:
    """POST JSON payloads to the dashboard with bearer token authentication."""

    def __init__(
        self,
        base_url: str | None,
        api_key: str | None,
        *,
        timeout_seconds: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds
        self._client = client

    @classmethod
    def from_settings(
        cls, settings: Settings, *, client: httpx.Client | None = None
    ) -> "DashboardWebhookSender":
        return cls(
            settings.dashboard_url,
            settings.dashboard_api_key,
            timeout_seconds=settings.dashboard_timeout_seconds,
            client=client,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self._base_url and self._api_key)

    @property
    def url(self) -> str:
        return build_dashboard_webhook_url(self._base_url)

    def post(self, payload: Mapping[str, Any]) -> DeliveryResult:
        """Send ``payload`` as the JSON body; only a 2xx response counts as success."""

        if not self.is_configured:
            logger.warning("Dashboard webhook skipped: URL or API key missing")
            return DeliveryResult.failure(DASHBOARD_NOT_CONFIGURED)

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }
        try:
            if self._client is not None:
                response = self._client.post(
                    self.url, json=dict(payload), headers=headers, timeout=self._timeout_seconds
                )
            else:
                with httpx.Client(timeout=self._timeout_seconds) as client:
                    response = client.post(self.url, json=dict(payload), headers=headers)
        except httpx.TimeoutException:
            reason = f"Dashboard webhook timed out after {self._timeout_seconds}s"
            logger.warning("%s (url=%s)", reason, self.url)
            return DeliveryResult.failure(reason)
        except httpx.HTTPError as exc:
            reason = f"Dashboard webhook request error: {exc}"
            logger.warning("%s (url=%s)", reason, self.url)
            return DeliveryResult.failure(reason)

        if not response.is_success:
            reason = f"Dashboard webhook failed: {response.status_code} {response.reason_phrase}"
            logger.warning("%s (url=%s)", reason, self.url)
            return DeliveryResult.failure(reason)

        return DeliveryResult.ok()


__all__ = [
    "DASHBOARD_NOT_CONFIGURED",
    "DASHBOARD_WEBHOOK_PATH",
    "DashboardWebhookSender",
    "build_dashboard_webhook_url",
]
