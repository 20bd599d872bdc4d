import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.infrastructure.database import engine, initialize_database
from app.infrastructure.scheduler import shutdown_scheduler, start_scheduler
from app.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the database and triggers on startup and release them on shutdown."""

    initialize_database()
    if get_settings().scheduler_enabled:
        start_scheduler()
    else:
        logger.info("Notification scheduler disabled by configuration")
    yield
    shutdown_scheduler()
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    configure_logging()
    app = FastAPI(title="Flashcards Notifications API", lifespan=lifespan)

    # Allow requests from the client application.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[get_settings().frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
