"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from paper_dashboard.api.routers import (
    account_router,
    dashboard_router,
    history_router,
    prices_router,
    reasoning_router,
    sync_router,
)
from paper_dashboard.config.logging_config import setup_logging
from paper_dashboard.config.settings import get_settings
from paper_dashboard.core.exceptions import AppError
from paper_dashboard.providers import (
    build_brokerage_provider,
    build_price_bar_provider,
    build_reasoning_provider,
)
from paper_dashboard.repositories.sqlalchemy.database import init_db
from paper_dashboard.services import ResponseCache

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    "UPSTREAM_ERROR": 502,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    settings = get_settings()
    app.state.cache = ResponseCache(
        short_ttl_seconds=settings.short_cache_ttl_seconds,
        long_ttl_seconds=settings.long_cache_ttl_seconds,
    )
    app.state.brokerage_provider = build_brokerage_provider(settings)
    app.state.price_bar_provider = build_price_bar_provider(settings)
    app.state.reasoning_provider = build_reasoning_provider(settings)
    logger.info("%s started", settings.app_name)
    yield
    # Shutdown (cache is process-local; nothing to persist)


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Paper-trading dashboard backend with cached brokerage and price data",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(account_router)
app.include_router(history_router)
app.include_router(prices_router)
app.include_router(dashboard_router)
app.include_router(sync_router)
app.include_router(reasoning_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    status_code = ERROR_STATUS_CODES.get(exc.code, 400)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status_code,
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
