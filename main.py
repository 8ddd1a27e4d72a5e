import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.application.use_cases.notifications import run_retention_loop
from app.config import get_settings
from app.infrastructure.database import SessionLocal, engine, initialize_database
from app.interfaces.api.container import NotificationServices, build_notification_services
from app.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema on startup, run the retention loop and release resources on shutdown."""

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    initialize_database()

    services: NotificationServices = app.state.notification_services
    retention_task = asyncio.create_task(
        run_retention_loop(
            services.session_factory,
            retention_days=settings.notification_retention_days,
            interval_seconds=settings.notification_cleanup_interval_minutes * 60,
        )
    )
    try:
        yield
    finally:
        retention_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await retention_task
        engine.dispose()


def create_app(notification_services: NotificationServices | None = None) -> FastAPI:
    """Build the VaultDesk FastAPI application."""

    settings = get_settings()
    app = FastAPI(title="VaultDesk API", lifespan=lifespan)
    app.state.notification_services = notification_services or build_notification_services(
        SessionLocal
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
