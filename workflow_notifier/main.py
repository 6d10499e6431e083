import logging

from fastapi import FastAPI
from contextlib import asynccontextmanager

from workflow_notifier.interfaces.api.routes import register_routes
from workflow_notifier.infrastructure.database import initialize_database, engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the notification tables on startup and release the pool on shutdown."""

    initialize_database()
    logger.info("Notification queue API started")
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(title="Workflow Notifier", lifespan=lifespan)
    register_routes(app)
    return app


app = create_app()
