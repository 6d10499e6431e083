"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from workflow_notifier.domain.entities import (
    NOTIFICATION_STATUS_FAILED,
    NOTIFICATION_STATUS_QUEUED,
    NOTIFICATION_STATUS_SENT,
    Notification,
)
from workflow_notifier.domain.exceptions import (
    InvalidStatusTransition,
    NotificationNotFoundError,
    NotificationPersistenceError,
)
from workflow_notifier.infrastructure.models import NotificationModel
from workflow_notifier.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide storage operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        try:
            model = self.session.get(NotificationModel, notification_id)
        except SQLAlchemyError as exc:
            raise self._persistence_error("read", exc) from exc
        return self._to_entity(model) if model is not None else None

    def list_notifications(
        self,
        *,
        workflow_id: str | None = None,
        status: str | None = None,
    ) -> Sequence[Notification]:
        """Return notifications matching the optional filters, oldest schedule first."""

        query = self.session.query(NotificationModel)
        if workflow_id is not None:
            query = query.filter(NotificationModel.workflow_id == workflow_id)
        if status is not None:
            query = query.filter(NotificationModel.status == status)
        query = query.order_by(
            NotificationModel.scheduled_for.asc(), NotificationModel.id.asc()
        )
        try:
            models = query.all()
        except SQLAlchemyError as exc:
            raise self._persistence_error("read", exc) from exc
        return [self._to_entity(model) for model in models]

    def list_queued(self, *, workflow_id: str | None = None) -> Sequence[Notification]:
        return self.list_notifications(
            workflow_id=workflow_id, status=NOTIFICATION_STATUS_QUEUED
        )

    def count_by_status(self, *, workflow_id: str | None = None) -> dict[str, int]:
        query = self.session.query(
            NotificationModel.status, func.count(NotificationModel.id)
        )
        if workflow_id is not None:
            query = query.filter(NotificationModel.workflow_id == workflow_id)
        try:
            rows = query.group_by(NotificationModel.status).all()
        except SQLAlchemyError as exc:
            raise self._persistence_error("read", exc) from exc
        return {status: int(count) for status, count in rows}

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        try:
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise self._persistence_error("insert", exc) from exc
        return self._to_entity(model)

    def create_many(self, notifications: Iterable[Notification]) -> list[Notification]:
        """Insert every notification in one transaction; nothing persists on error."""

        models: list[NotificationModel] = []
        try:
            for notification in notifications:
                model = NotificationModel()
                self._apply_entity_to_model(model, notification)
                self.session.add(model)
                models.append(model)
            self.session.flush()
            self.session.commit()
            for model in models:
                self.session.refresh(model)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise self._persistence_error("insert", exc) from exc
        return [self._to_entity(model) for model in models]

    def mark_sent(self, notification_id: int, *, sent_at: datetime | None = None) -> Notification:
        return self._transition(
            notification_id,
            status=NOTIFICATION_STATUS_SENT,
            sent_at=sent_at or now_in_app_timezone(),
        )

    def mark_failed(self, notification_id: int, *, error: str) -> Notification:
        return self._transition(
            notification_id,
            status=NOTIFICATION_STATUS_FAILED,
            error=error or "Unknown error",
        )

    def _transition(
        self,
        notification_id: int,
        *,
        status: str,
        sent_at: datetime | None = None,
        error: str | None = None,
    ) -> Notification:
        try:
            model = self.session.get(NotificationModel, notification_id)
        except SQLAlchemyError as exc:
            raise self._persistence_error("read", exc) from exc
        if model is None:
            msg = f"Notification with id {notification_id} not found"
            raise NotificationNotFoundError(msg)
        if model.status != NOTIFICATION_STATUS_QUEUED:
            msg = (
                f"Notification {notification_id} is already {model.status}; "
                f"cannot mark it as {status}"
            )
            raise InvalidStatusTransition(msg)

        model.status = status
        model.sent_at = ensure_app_naive_datetime(sent_at)
        model.error = error
        try:
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise self._persistence_error("update", exc) from exc
        return self._to_entity(model)

    @staticmethod
    def _persistence_error(operation: str, exc: SQLAlchemyError) -> NotificationPersistenceError:
        return NotificationPersistenceError(f"Notification store {operation} failed: {exc}")

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        now = now_in_app_timezone()
        model.workflow_id = notification.workflow_id
        model.channel = notification.channel
        model.payload = serialize_payload(notification.payload or {})
        model.status = notification.status
        model.scheduled_for = ensure_app_naive_datetime(notification.scheduled_for or now)
        model.sent_at = ensure_app_naive_datetime(notification.sent_at)
        model.error = notification.error
        model.created_at = ensure_app_naive_datetime(notification.created_at or now)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            workflow_id=model.workflow_id,
            channel=model.channel,
            payload=dict(model.payload or {}),
            status=model.status,
            scheduled_for=ensure_app_timezone(model.scheduled_for),
            sent_at=ensure_app_timezone(model.sent_at),
            error=model.error,
            created_at=ensure_app_timezone(model.created_at),
        )


def _serialize_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return format(value.normalize(), "f")
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return serialize_payload(value)
    if isinstance(value, (list, tuple, set)):
        return [_serialize_value(item) for item in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    # UUIDs, enums and other objects are stored as their string form
    return str(value)


def serialize_payload(data: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON column friendly copy of ``data``."""

    return {str(key): _serialize_value(value) for key, value in data.items()}


__all__ = ["NotificationRepository", "serialize_payload"]
