"""FastAPI application entry point."""

import logging
import threading
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from portfolio_tracker.app_context import get_app_context
from portfolio_tracker.config.settings import get_settings
from portfolio_tracker.config.logging_config import setup_logging
from portfolio_tracker.api.routers import (
    holdings_router,
    summary_router,
    prices_router,
    snapshot_router,
)
from portfolio_tracker.core.exceptions import AppError, NotFoundError

logger = logging.getLogger(__name__)

STARTUP_REFRESH_JOIN_TIMEOUT_SECONDS = 10.0


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    context = get_app_context()
    if not context.is_initialized:
        context.initialize()

    refresh_thread = None
    if context.settings.refresh_on_startup and context.store.symbols():
        refresh_thread = threading.Thread(target=context.refresh_all, name="startup-refresh", daemon=True)
        refresh_thread.start()
    yield
    # Shutdown; the refresh writes through the context, so let it finish first
    if refresh_thread is not None:
        refresh_thread.join(timeout=STARTUP_REFRESH_JOIN_TIMEOUT_SECONDS)
        if refresh_thread.is_alive():
            logger.warning("Startup price refresh still running at shutdown")
    context.close()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Holdings ledger with cached market prices and JSON backups",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(holdings_router)
app.include_router(summary_router)
app.include_router(prices_router)
app.include_router(snapshot_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=400,
        content={"error": exc.code, "message": exc.message},
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
