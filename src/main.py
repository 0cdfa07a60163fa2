"""taskmaster - task and contact management backend."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.core.db_client import close_connection, init_db
from src.core.logging import configure_logfire, instrument_fastapi
from src.interface.api import register_exception_handlers
from src.interface.api import router as api_router


logger = logging.getLogger(__name__)


def validate_startup_configuration() -> None:
    """Validate configuration that must be present before serving requests.

    Production deployments need an invite backend; elsewhere a missing URL
    only disables invite delivery.
    """
    logger.info("startup_validation_begin")

    if not settings.is_production:
        if not settings.invite_backend_url:
            logger.warning("startup_validation", extra={"service": "invite_backend", "status": "disabled"})
        return

    try:
        settings.require_credential("invite_backend_url", "Invite backend")
        logger.info("startup_validation_complete", extra={"status": "ok"})
    except ValueError as e:
        logger.error("startup_validation_failed", extra={"error": str(e)})
        print(f"\n❌ Startup validation failed: {e}\n", file=sys.stderr)  # noqa: T201
        sys.exit(1)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    # Startup
    # Configure logging first so validation logs are captured
    configure_logfire()

    validate_startup_configuration()

    # Initialize database
    await init_db()
    logger.info("Database initialized")

    yield
    # Shutdown
    await close_connection()


app = FastAPI(
    title="taskmaster",
    description="Task and contact management with visibility rules and change history",
    version="0.1.0",
    lifespan=lifespan,
)

# Instrument FastAPI with Logfire
instrument_fastapi(app)

# Register routers and error handlers
app.include_router(api_router)
register_exception_handlers(app)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "healthy"}, status_code=200)
