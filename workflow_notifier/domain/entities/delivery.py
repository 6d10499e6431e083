"""Value objects produced while rendering and delivering notifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class NotificationPreview:
    """Human readable rendering of a notification before it is delivered."""

    channel: str
    recipients: list[str] = field(default_factory=list)
    subject: str = ""
    message: str = ""
    scheduled_for: datetime | None = None


@dataclass(frozen=True)
class EmailMessage:
    """Outbound email handed to an email transport."""

    to: str
    subject: str
    text: str
    html: str

    def recipient_list(self) -> list[str]:
        return [address.strip() for address in self.to.split(",") if address.strip()]


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of a single transport call."""

    success: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> "DeliveryResult":
        return cls(success=True)

    @classmethod
    def failure(cls, reason: str) -> "DeliveryResult":
        return cls(success=False, error=reason or "Unknown error")


@dataclass(frozen=True)
class ProcessingSummary:
    """Aggregated counts for one batch pass over the queue."""

    sent: int = 0
    failed: int = 0


@dataclass(frozen=True)
class NotificationStats:
    """Notification counts grouped by status."""

    total: int = 0
    sent: int = 0
    queued: int = 0
    failed: int = 0


__all__ = [
    "DeliveryResult",
    "EmailMessage",
    "NotificationPreview",
    "NotificationStats",
    "ProcessingSummary",
]
