"""FastAPI application factory."""

import logging
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .routes import (
    analysis_router,
    enhancement_router,
    platforms_router,
    tokens_router,
    health_router,
)
from .schemas import ErrorResponse
from ..core.config import get_settings
from ..core.exceptions import InvalidInputError, InvalidPlatformError, PromptForgeError
from ..core.logging_config import configure_from_settings

logger = logging.getLogger(__name__)


def _error_response(status_code: int, exc: PromptForgeError) -> JSONResponse:
    body = ErrorResponse(error=exc.message, details=exc.details)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    """Map library errors onto HTTP status codes."""

    @app.exception_handler(InvalidPlatformError)
    async def invalid_platform_handler(request: Request, exc: InvalidPlatformError) -> JSONResponse:
        return _error_response(400, exc)

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
        return _error_response(422, exc)

    @app.exception_handler(PromptForgeError)
    async def promptforge_error_handler(request: Request, exc: PromptForgeError) -> JSONResponse:
        logger.error("Request to %s failed: %s", request.url.path, exc, exc_info=exc.cause)
        return _error_response(500, exc)


def create_app(
    title: str = "PromptForge API",
    description: str = "Prompt analysis and enhancement for AI platforms",
    version: str = "1.0.0",
    enable_cors: bool = True,
    cors_origins: Optional[List[str]] = None
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        title: API title
        description: API description
        version: API version
        enable_cors: Whether to enable CORS
        cors_origins: Allowed CORS origins (default: from settings)

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()

    app = FastAPI(
        title=title,
        description=description,
        version=version,
        debug=settings.api.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Configure CORS
    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins or settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(analysis_router, prefix="/api/v1")
    app.include_router(enhancement_router, prefix="/api/v1")
    app.include_router(platforms_router, prefix="/api/v1")
    app.include_router(tokens_router, prefix="/api/v1")

    return app


# Default app instance
app = create_app()


def run_server(
    host: Optional[str] = None,
    port: Optional[int] = None,
    reload: bool = False,
    workers: int = 1
) -> None:
    """
    Run the API server.

    Args:
        host: Host to bind to (default: from settings)
        port: Port to listen on (default: from settings)
        reload: Enable auto-reload
        workers: Number of worker processes
    """
    import uvicorn

    settings = get_settings()
    configure_from_settings(settings)
    uvicorn.run(
        "promptforge.api.app:app",
        host=host or settings.api.host,
        port=port or settings.api.port,
        reload=reload,
        workers=workers,
        log_config=None,
    )


if __name__ == "__main__":
    run_server()
