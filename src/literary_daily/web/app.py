# ABOUTME: FastAPI application factory with database lifespan and error mapping.
# ABOUTME: Main entry point for the Literary Daily web API.

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from literary_daily import __version__
from literary_daily.db.session import close_db, init_db
from literary_daily.errors import ConfigurationError, LiteraryDailyError
from literary_daily.web.routes import api

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan context for database setup/teardown."""
    logger.info("app_startup")
    await init_db()
    yield
    logger.info("app_shutdown")
    await close_db()


async def handle_app_error(request: Request, exc: LiteraryDailyError) -> JSONResponse:
    """Turn a failed fetch or generation into a JSON 500 response."""
    if isinstance(exc, ConfigurationError):
        logger.error("server_configuration_error", path=request.url.path, error=str(exc))
    else:
        logger.error(
            "request_failed",
            path=request.url.path,
            error_type=type(exc).__name__,
            error=str(exc),
        )
    return JSONResponse(status_code=500, content={"error": str(exc)})


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Keep the JSON error shape for failures outside the application taxonomy."""
    logger.exception("request_failed_unexpectedly", path=request.url.path, error_type=type(exc).__name__)
    return JSONResponse(status_code=500, content={"error": "An unexpected error occurred."})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Literary Daily",
        description="Daily literary review, concept and exam question",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_exception_handler(LiteraryDailyError, handle_app_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
    app.include_router(api.router)

    return app


# Application instance for uvicorn
app = create_app()
