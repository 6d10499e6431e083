"""Errors raised by the notification queue."""


class NotificationPersistenceError(RuntimeError):
    """Raised when the notification store cannot complete an operation."""


class NotificationNotFoundError(ValueError):
    """Raised when a notification id does not exist in the store."""


class InvalidStatusTransition(ValueError):
    """Raised when a processed notification would change status again."""


__all__ = [
    "InvalidStatusTransition",
    "NotificationNotFoundError",
    "NotificationPersistenceError",
]
