"""Tests for the side-effect free preview renderer."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from workflow_notifier.application.use_cases.notifications import (
    render_preview,
    render_preview_for,
)
from workflow_notifier.domain.entities import Notification

CHANNELS = ["email", "stakeholder", "dashboard", "milestone", "carrier-pigeon", ""]


class UnprintableValue:
    def __str__(self):
        raise RuntimeError("cannot render")


SELF_REFERENCING_PAYLOAD = {"type": "loop"}
SELF_REFERENCING_PAYLOAD["self"] = SELF_REFERENCING_PAYLOAD
PAYLOADS = [
    {"type": "workflow_initiated", "incidentTitle": "DB outage", "dueAt": "2024-01-01"},
    {"type": "sla_breach_warning", "incidentTitle": "DB outage", "timeRemaining": "2h"},
    {"type": "stakeholder_added", "stakeholderName": "Ann", "stakeholderRole": "owner"},
    {"type": "something_else", "nested": {"when": datetime(2024, 1, 1)}},
    {},
    {"type": None},
    {"type": 42, "incidentTitle": None},
    {"type": "x", "meta": {(1, 2): "a"}},
    SELF_REFERENCING_PAYLOAD,
    {"type": "workflow_initiated", "incidentTitle": UnprintableValue()},
    {"type": UnprintableValue(), "stakeholderName": UnprintableValue()},
]


@pytest.mark.parametrize("channel", CHANNELS)
@pytest.mark.parametrize("payload", PAYLOADS)
def test_renderer_is_total_and_deterministic(channel, payload):
    """Every channel/type combination renders, and identically on each call."""

    first = render_preview_for(channel, payload, dashboard_url="https://dash.example.com")
    second = render_preview_for(channel, payload, dashboard_url="https://dash.example.com")

    assert first == second
    assert first.channel == channel
    assert first.recipients
    assert isinstance(first.subject, str)
    assert isinstance(first.message, str)


@pytest.mark.parametrize("payload", [None, ["not", "a", "mapping"], "text"])
def test_renderer_tolerates_malformed_payloads(payload):
    for channel in CHANNELS:
        preview = render_preview_for(channel, payload)
        assert preview.recipients


def test_workflow_initiated_email():
    preview = render_preview_for(
        "email",
        {"type": "workflow_initiated", "incidentTitle": "DB outage", "dueAt": "2024-01-01"},
    )

    assert preview.subject == "Workflow Initiated - DB outage"
    assert preview.recipients == ["workflow-team@company.com"]
    assert "DB outage" in preview.message
    assert "Due: 2024-01-01" in preview.message


def test_sla_breach_warning_email():
    preview = render_preview_for(
        "email",
        {"type": "sla_breach_warning", "incidentTitle": "DB outage", "timeRemaining": "45m"},
    )

    assert preview.recipients == ["management@company.com"]
    assert preview.subject == "SLA Breach Warning - DB outage"
    assert "Time remaining: 45m" in preview.message


def test_unknown_email_type_serializes_payload():
    payload = {"type": "digest", "count": 3}

    preview = render_preview_for("email", payload)

    assert preview.recipients == ["system@company.com"]
    assert preview.subject == "Workflow Notification"
    assert preview.message == '{"count": 3, "type": "digest"}'


def test_stakeholder_preview_uses_payload_email():
    preview = render_preview_for(
        "stakeholder",
        {
            "stakeholderName": "Ann",
            "stakeholderRole": "owner",
            "email": "a@x.com",
            "workflowId": "w1",
        },
    )

    assert preview.recipients == ["a@x.com"]
    assert preview.subject == "You've been added as a stakeholder - owner"
    assert preview.message.startswith("Hello Ann,")
    assert "owner for workflow w1" in preview.message


def test_stakeholder_without_email_uses_placeholder_address():
    preview = render_preview_for("stakeholder", {"stakeholderName": "Bob", "stakeholderRole": "qa"})

    assert preview.recipients == ["unknown@company.com"]


def test_dashboard_preview_describes_webhook():
    preview = render_preview_for(
        "dashboard", {"type": "status", "state": "open"}, dashboard_url="https://dash.example.com"
    )

    assert preview.recipients == ["https://dash.example.com"]
    assert preview.subject == "Dashboard Update"
    assert preview.message.startswith("POST https://dash.example.com/webhooks/workflow")
    assert '"state": "open"' in preview.message


def test_dashboard_preview_without_configuration():
    preview = render_preview_for("dashboard", {"type": "status"})

    assert preview.recipients == ["dashboard-webhook"]


def test_milestone_preview():
    preview = render_preview_for("milestone", {"type": "reminder", "timeRemaining": "1 day"})

    assert preview.recipients == ["workflow-participants@company.com"]
    assert preview.subject == "Milestone Reminder - 1 day remaining"
    assert "Time remaining: 1 day" in preview.message


def test_unknown_channel_fallback():
    preview = render_preview_for("carrier-pigeon", {"type": "coo"})

    assert preview.recipients == ["Unknown"]
    assert preview.subject == "Unknown notification type"
    assert preview.message == '{"type": "coo"}'


def test_render_preview_from_record_carries_schedule_and_workflow():
    scheduled = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)
    notification = Notification(
        id=7,
        workflow_id="wf-9",
        channel="stakeholder",
        payload={"type": "stakeholder_added", "stakeholderName": "Ann", "stakeholderRole": "lead"},
        scheduled_for=scheduled,
    )

    preview = render_preview(notification)

    assert preview.scheduled_for == scheduled
    assert "lead for workflow wf-9" in preview.message


def test_status_fields_do_not_change_rendering():
    payload = {"type": "workflow_initiated", "incidentTitle": "Outage"}
    queued = Notification(id=1, workflow_id="w", channel="email", payload=payload)
    failed = Notification(
        id=2, workflow_id="w", channel="email", payload=payload, status="failed", error="boom"
    )

    assert render_preview(queued) == render_preview(failed)


def test_payload_json_cannot_represent_falls_back_to_repr():
    preview = render_preview_for("carrier-pigeon", {"type": "x", "meta": {(1, 2): "a"}})

    assert preview.message == repr({"type": "x", "meta": {(1, 2): "a"}})


def test_self_referencing_payload_renders():
    preview = render_preview_for("email", SELF_REFERENCING_PAYLOAD)

    assert "{...}" in preview.message
