"""ASGI entry point: ``uvicorn main:app``."""

from workflow_notifier.main import app, create_app

__all__ = ["app", "create_app"]
