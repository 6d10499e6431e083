"""Render human readable previews for queued notifications.

Rendering is a pure function of ``(channel, payload["type"])``: it never reads
or writes the store and never raises, whatever the payload looks like.
Unknown channels and unknown email types fall back to generic templates that
serialize the raw payload.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from workflow_notifier.domain.entities import (
    CHANNEL_DASHBOARD,
    CHANNEL_EMAIL,
    CHANNEL_MILESTONE,
    CHANNEL_STAKEHOLDER,
    Notification,
    NotificationPreview,
)
from workflow_notifier.infrastructure.webhooks import build_dashboard_webhook_url

WORKFLOW_TEAM_ADDRESS = "workflow-team@company.com"
MANAGEMENT_ADDRESS = "management@company.com"
SYSTEM_ADDRESS = "system@company.com"
PARTICIPANTS_ADDRESS = "workflow-participants@company.com"
UNKNOWN_STAKEHOLDER_ADDRESS = "unknown@company.com"
DEFAULT_DASHBOARD_RECIPIENT = "dashboard-webhook"
UNKNOWN_RECIPIENT = "Unknown"

TYPE_WORKFLOW_INITIATED = "workflow_initiated"
TYPE_SLA_BREACH_WARNING = "sla_breach_warning"
TYPE_STAKEHOLDER_ADDED = "stakeholder_added"


@dataclass(frozen=True)
class RenderContext:
    """Values outside the payload that templates may need."""

    channel: str
    workflow_id: str | None = None
    dashboard_url: str | None = None


Template = Callable[[Any, RenderContext], NotificationPreview]


def _safe_str(value: Any) -> str:
    try:
        return str(value)
    except Exception:  # payload values may define a broken __str__ or __repr__
        return object.__repr__(value)


def _text(payload: Any, key: str) -> str:
    if not isinstance(payload, Mapping):
        return ""
    value = payload.get(key)
    return "" if value is None else _safe_str(value)


def serialize_payload_for_display(payload: Any) -> str:
    """Return a stable JSON rendering of ``payload`` that never raises.

    Payloads JSON cannot represent (non-string nested keys, cycles) fall back
    to their ``repr``.
    """

    try:
        return json.dumps(payload, sort_keys=True, default=_safe_str, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError):
        pass
    try:
        return json.dumps(payload, default=_safe_str, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError):
        pass
    try:
        return repr(payload)
    except Exception:  # payload values may define a broken __str__ or __repr__
        return object.__repr__(payload)


def _workflow_initiated(payload: Any, context: RenderContext) -> NotificationPreview:
    title = _text(payload, "incidentTitle")
    return NotificationPreview(
        channel=context.channel,
        recipients=[WORKFLOW_TEAM_ADDRESS],
        subject=f"Workflow Initiated - {title}",
        message=(
            f"A new workflow has been initiated for incident: {title}\n\n"
            f"Due: {_text(payload, 'dueAt')}\n\n"
            "Please review and take action as needed."
        ),
    )


def _sla_breach_warning(payload: Any, context: RenderContext) -> NotificationPreview:
    title = _text(payload, "incidentTitle")
    return NotificationPreview(
        channel=context.channel,
        recipients=[MANAGEMENT_ADDRESS],
        subject=f"SLA Breach Warning - {title}",
        message=(
            f'Warning: Workflow for "{title}" is approaching SLA breach.\n\n'
            f"Time remaining: {_text(payload, 'timeRemaining')}"
        ),
    )


def _generic_email(payload: Any, context: RenderContext) -> NotificationPreview:
    return NotificationPreview(
        channel=context.channel,
        recipients=[SYSTEM_ADDRESS],
        subject="Workflow Notification",
        message=serialize_payload_for_display(payload),
    )


def _stakeholder(payload: Any, context: RenderContext) -> NotificationPreview:
    role = _text(payload, "stakeholderRole")
    workflow_id = _text(payload, "workflowId") or (context.workflow_id or "")
    return NotificationPreview(
        channel=context.channel,
        recipients=[_text(payload, "email") or UNKNOWN_STAKEHOLDER_ADDRESS],
        subject=f"You've been added as a stakeholder - {role}",
        message=(
            f"Hello {_text(payload, 'stakeholderName')},\n\n"
            f"You have been added as a {role} for workflow {workflow_id}.\n\n"
            "Please log in to the system to review your responsibilities."
        ),
    )


def _dashboard(payload: Any, context: RenderContext) -> NotificationPreview:
    return NotificationPreview(
        channel=context.channel,
        recipients=[context.dashboard_url or DEFAULT_DASHBOARD_RECIPIENT],
        subject="Dashboard Update",
        message=(
            f"POST {build_dashboard_webhook_url(context.dashboard_url)}\n\n"
            f"Payload: {serialize_payload_for_display(payload)}"
        ),
    )


def _milestone(payload: Any, context: RenderContext) -> NotificationPreview:
    remaining = _text(payload, "timeRemaining")
    return NotificationPreview(
        channel=context.channel,
        recipients=[PARTICIPANTS_ADDRESS],
        subject=f"Milestone Reminder - {remaining} remaining",
        message=(
            "Reminder: Workflow milestone approaching.\n\n"
            f"Time remaining: {remaining}\n\n"
            "Please ensure all tasks are completed on time."
        ),
    )


def _unknown(payload: Any, context: RenderContext) -> NotificationPreview:
    return NotificationPreview(
        channel=context.channel,
        recipients=[UNKNOWN_RECIPIENT],
        subject="Unknown notification type",
        message=serialize_payload_for_display(payload),
    )


# A ``None`` type registers the template used for every type of that channel.
TEMPLATES: dict[tuple[str, str | None], Template] = {
    (CHANNEL_EMAIL, TYPE_WORKFLOW_INITIATED): _workflow_initiated,
    (CHANNEL_EMAIL, TYPE_SLA_BREACH_WARNING): _sla_breach_warning,
    (CHANNEL_EMAIL, None): _generic_email,
    (CHANNEL_STAKEHOLDER, None): _stakeholder,
    (CHANNEL_DASHBOARD, None): _dashboard,
    (CHANNEL_MILESTONE, None): _milestone,
}


def resolve_template(channel: str, notification_type: str | None) -> Template:
    """Return the template registered for ``channel`` and ``notification_type``."""

    return (
        TEMPLATES.get((channel, notification_type))
        or TEMPLATES.get((channel, None))
        or _unknown
    )


def render_preview_for(
    channel: str,
    payload: Any,
    *,
    scheduled_for: datetime | None = None,
    workflow_id: str | None = None,
    dashboard_url: str | None = None,
) -> NotificationPreview:
    """Render ``payload`` using the template selected by ``channel`` and its type."""

    channel = str(channel)
    raw_type = payload.get("type") if isinstance(payload, Mapping) else None
    notification_type = _safe_str(raw_type) if raw_type is not None else None
    template = resolve_template(channel, notification_type)
    preview = template(
        payload,
        RenderContext(channel=channel, workflow_id=workflow_id, dashboard_url=dashboard_url),
    )
    return NotificationPreview(
        channel=preview.channel,
        recipients=list(preview.recipients),
        subject=preview.subject,
        message=preview.message,
        scheduled_for=scheduled_for,
    )


def render_preview(
    notification: Notification, *, dashboard_url: str | None = None
) -> NotificationPreview:
    """Render the preview for a stored notification."""

    return render_preview_for(
        notification.channel,
        notification.payload,
        scheduled_for=notification.scheduled_for,
        workflow_id=notification.workflow_id,
        dashboard_url=dashboard_url,
    )


__all__ = [
    "RenderContext",
    "TEMPLATES",
    "TYPE_SLA_BREACH_WARNING",
    "TYPE_STAKEHOLDER_ADDED",
    "TYPE_WORKFLOW_INITIATED",
    "render_preview",
    "render_preview_for",
    "resolve_template",
    "serialize_payload_for_display",
]
