"""Repository implementations for infrastructure layer."""

from .notification_repository import NotificationRepository, serialize_payload

__all__ = ["NotificationRepository", "serialize_payload"]
