"""Shared fixtures for the notification queue tests."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Ensure the project root (which contains the ``workflow_notifier`` package) is importable
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_TIMEZONE"] = "UTC"
for _name in ("SENDGRID_API_KEY", "SENDGRID_SENDER", "DASHBOARD_URL", "DASHBOARD_API_KEY"):
    os.environ.pop(_name, None)

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from workflow_notifier.application.use_cases.notifications import ChannelDispatcher
from workflow_notifier.domain.entities import DeliveryResult
from workflow_notifier.infrastructure.database import initialize_database


class RecordingEmailSender:
    """Email transport double that records messages and fails on request."""

    def __init__(self, fail_subjects: tuple[str, ...] = ()) -> None:
        self.messages = []
        self.fail_subjects = fail_subjects
        self.on_send = None

    def send(self, message):
        self.messages.append(message)
        if self.on_send is not None:
            self.on_send(message)
        if message.subject in self.fail_subjects:
            return DeliveryResult.failure(f"SMTP rejected '{message.subject}'")
        return DeliveryResult.ok()


class RecordingWebhookSender:
    """Webhook transport double that records every posted payload."""

    def __init__(self, result: DeliveryResult | None = None) -> None:
        self.payloads = []
        self.result = result or DeliveryResult.ok()

    def post(self, payload):
        self.payloads.append(dict(payload))
        return self.result


@pytest.fixture()
def engine():
    """Return an isolated in-memory SQLite engine with the schema created."""

    test_engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    initialize_database(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture()
def webhook_sender() -> RecordingWebhookSender:
    return RecordingWebhookSender()


@pytest.fixture()
def dispatcher(email_sender, webhook_sender) -> ChannelDispatcher:
    return ChannelDispatcher(
        email_sender, webhook_sender, dashboard_url="https://dashboard.example.com"
    )
