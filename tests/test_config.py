"""Tests for settings validation."""

import pytest

from workflow_notifier.config import Settings


def test_defaults():
    settings = Settings(database_url="sqlite://")

    assert settings.app_timezone == "UTC"
    assert settings.dashboard_url is None
    assert settings.dashboard_timeout_seconds == 30.0


def test_sendgrid_settings_must_come_in_pairs():
    with pytest.raises(ValueError, match="must both be provided"):
        Settings(database_url="sqlite://", sendgrid_api_key="SG.key")


def test_sendgrid_sender_must_be_an_email():
    with pytest.raises(ValueError, match="valid email"):
        Settings(database_url="sqlite://", sendgrid_api_key="SG.key", sendgrid_sender="nobody")
