"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from stackforge import __version__
from stackforge.api.middleware import RequestLoggingMiddleware
from stackforge.api.v1.router import router as v1_router
from stackforge.config import settings
from stackforge.core.exceptions import (
    RemotePublishError,
    RemoteRateLimitedError,
    StackForgeError,
)
from stackforge.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

ARCHIVE_FALLBACK = "/v1/scaffold/download"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    configure_logging()
    logger.info(
        "application.starting",
        version=__version__,
        environment=settings.app_env,
    )

    yield

    logger.info("application.shutdown")


def error_body(exc: StackForgeError) -> dict[str, Any]:
    """JSON error envelope for an application exception."""
    error: dict[str, Any] = {
        "code": type(exc).__name__.upper(),
        "message": exc.message,
        "details": exc.details,
    }
    if isinstance(exc, RemotePublishError):
        # The same configuration can always be downloaded instead.
        error["fallback"] = {"method": "POST", "path": ARCHIVE_FALLBACK}
    return {"error": error}


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="StackForge API",
        description="Configurable full-stack project scaffold generator",
        version=__version__,
        docs_url="/docs" if settings.app_debug else None,
        redoc_url="/redoc" if settings.app_debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins or (["*"] if settings.is_development else []),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Generation-ID", "Retry-After"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    @app.exception_handler(StackForgeError)
    async def stackforge_error_handler(
        request: Request, exc: StackForgeError
    ) -> JSONResponse:
        """Handle application-specific errors."""
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "request.failed",
            path=request.url.path,
            error_code=type(exc).__name__,
            error=exc.message,
        )
        headers = None
        if isinstance(exc, RemoteRateLimitedError):
            headers = {"Retry-After": str(exc.retry_after)}
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc),
            headers=headers,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected errors."""
        logger.error(
            "unhandled_exception",
            error=str(exc),
            path=request.url.path,
            exc_info=True,
        )

        if settings.is_development:
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": {
                        "code": "INTERNAL_ERROR",
                        "message": str(exc),
                        "type": type(exc).__name__,
                    }
                },
            )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                }
            },
        )

    app.include_router(v1_router)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "stackforge.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
    )
