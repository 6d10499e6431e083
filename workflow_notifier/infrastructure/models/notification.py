"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Column, DateTime, Index, Integer, JSON, String, Text

from workflow_notifier.domain.entities import NOTIFICATION_STATUS_QUEUED
from workflow_notifier.infrastructure.database import Base


class NotificationModel(Base):
    """Database representation for queued workflow notifications."""

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_status_scheduled_for", "status", "scheduled_for"),
    )

    id = Column(Integer, primary_key=True, index=True)
    workflow_id = Column(String(100), nullable=False, index=True)
    channel = Column(String(50), nullable=False)
    payload = Column(JSON, nullable=False, default=dict)
    status = Column(String(20), nullable=False, default=NOTIFICATION_STATUS_QUEUED)
    scheduled_for = Column(DateTime(), nullable=False)
    sent_at = Column(DateTime(), nullable=True)
    error = Column(Text, nullable=True)
    created_at = Column(DateTime(), nullable=False)


__all__ = ["NotificationModel"]
