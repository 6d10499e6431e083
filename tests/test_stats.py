"""Tests for the read-only notification statistics."""

from workflow_notifier.application.use_cases.notifications import (
    get_notification_stats,
    process_queued_notifications,
    schedule_notification,
)
from workflow_notifier.domain.entities import NotificationStats


def test_stats_on_empty_store(session):
    assert get_notification_stats(session) == NotificationStats(total=0, sent=0, queued=0, failed=0)


def test_stats_group_by_status_and_workflow(session, dispatcher):
    schedule_notification(session, workflow_id="w1", channel="email", payload={"type": "x"})
    schedule_notification(session, workflow_id="w1", channel="carrier-pigeon", payload={})
    process_queued_notifications(session, dispatcher)
    schedule_notification(session, workflow_id="w1", channel="milestone", payload={})
    schedule_notification(session, workflow_id="w2", channel="email", payload={"type": "x"})

    assert get_notification_stats(session) == NotificationStats(total=4, sent=1, queued=2, failed=1)
    assert get_notification_stats(session, workflow_id="w1") == NotificationStats(
        total=3, sent=1, queued=1, failed=1
    )
    assert get_notification_stats(session, workflow_id="missing") == NotificationStats()


def test_stats_are_stable_without_writes(session):
    schedule_notification(session, workflow_id="w1", channel="email", payload={"type": "x"})

    assert get_notification_stats(session) == get_notification_stats(session)
