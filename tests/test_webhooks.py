"""Tests for the dashboard webhook transport."""

from __future__ import annotations

import json

import httpx

from workflow_notifier.config import Settings
from workflow_notifier.infrastructure.webhooks import (
    DashboardWebhookSender,
    build_dashboard_webhook_url,
)


def _sender(handler, base_url="https://dash.example.com/", api_key="secret-key"):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return DashboardWebhookSender(base_url, api_key, timeout_seconds=5, client=client)


def test_build_dashboard_webhook_url_strips_trailing_slash():
    assert build_dashboard_webhook_url("https://dash.example.com/") == (
        "https://dash.example.com/webhooks/workflow"
    )


def test_post_sends_json_with_bearer_token():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(204)

    result = _sender(handler).post({"type": "status", "open": 2})

    assert result.success
    request = requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://dash.example.com/webhooks/workflow"
    assert request.headers["Authorization"] == "Bearer secret-key"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {"type": "status", "open": 2}


def test_non_success_status_is_a_failure():
    result = _sender(lambda request: httpx.Response(500)).post({"type": "status"})

    assert not result.success
    assert result.error == "Dashboard webhook failed: 500 Internal Server Error"


def test_connection_error_is_a_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = _sender(handler).post({"type": "status"})

    assert not result.success
    assert "connection refused" in result.error


def test_timeout_is_a_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    result = _sender(handler).post({"type": "status"})

    assert not result.success
    assert "timed out" in result.error


def test_missing_configuration_skips_the_request():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200)

    result = _sender(handler, api_key=None).post({"type": "status"})

    assert not result.success
    assert result.error == "Dashboard webhook not configured"
    assert calls == []


def test_from_settings():
    settings = Settings(
        database_url="sqlite://",
        dashboard_url="https://dash.example.com",
        dashboard_api_key="k",
        dashboard_timeout_seconds=3,
    )

    sender = DashboardWebhookSender.from_settings(settings)

    assert sender.is_configured
    assert sender.url == "https://dash.example.com/webhooks/workflow"
