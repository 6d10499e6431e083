"""FastAPI dependency utilities."""

from functools import lru_cache

from workflow_notifier.application.use_cases.notifications import ChannelDispatcher
from workflow_notifier.config import Settings, get_settings
from workflow_notifier.infrastructure.email import SendGridEmailSender
from workflow_notifier.infrastructure.webhooks import DashboardWebhookSender


def build_dispatcher(settings: Settings) -> ChannelDispatcher:
    """Wire the transports described by ``settings`` into a dispatcher."""

    return ChannelDispatcher(
        SendGridEmailSender.from_settings(settings),
        DashboardWebhookSender.from_settings(settings),
        dashboard_url=settings.dashboard_url,
    )


@lru_cache
def get_dispatcher() -> ChannelDispatcher:
    """Return the process wide dispatcher built from the application settings."""

    return build_dispatcher(get_settings())


def get_dashboard_url() -> str | None:
    return get_settings().dashboard_url


__all__ = ["build_dispatcher", "get_dashboard_url", "get_dispatcher"]
