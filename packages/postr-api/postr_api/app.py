"""
FastAPI application factory.

The database adapter is created and initialized once in the lifespan and
shared through app.state; REST handlers and GraphQL resolvers receive it
by dependency injection.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from postr.config import PostrConfig, load_config
from postr.db import DatabaseAdapter, create_adapter
from postr.errors import PostrError
from postr.validation import format_errors
from postr_api import __version__, responses
from postr_api.dependencies import AdapterDep
from postr_api.graphql import create_graphql_router
from postr_api.middleware import RequestLoggerMiddleware
from postr_api.rest import api_router

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[PostrConfig] = None,
    adapter: Optional[DatabaseAdapter] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        config: Configuration; loaded from file and environment when omitted
        adapter: Pre-built adapter (tests); created from config when omitted

    Returns:
        FastAPI app. Startup fails if the database cannot be initialized.
    """
    config = config or load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = app.state.adapter or create_adapter(config.database)
        await db.initialize()
        try:
            await db.ensure_schema()
        except Exception:
            await db.close()
            raise
        app.state.adapter = db
        logger.info(
            f"Postr API ready: {db.backend_type.value} database ({db.dialect}), "
            f"environment {config.server.environment}"
        )
        try:
            yield
        finally:
            await db.close()
            logger.info("Database connection closed")

    app = FastAPI(
        title="Postr API",
        description="Users, categories, posts and comments over REST and GraphQL",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.adapter = adapter

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggerMiddleware)

    _register_exception_handlers(app, config)

    @app.get("/", tags=["Meta"], summary="Service information")
    async def root():
        return responses.success({
            "name": "Postr API",
            "version": __version__,
            "endpoints": {
                "rest": "/api",
                "graphql": "/graphql",
                "health": "/health",
            },
        })

    @app.get("/health", tags=["Meta"], summary="Database health")
    async def health(db: AdapterDep):
        healthy = await db.health()
        data = {
            "status": "healthy" if healthy else "unhealthy",
            "database": {
                "type": db.backend_type.value,
                "dialect": db.dialect,
                "healthy": healthy,
            },
        }
        if not healthy:
            return responses.error(
                "Database unavailable",
                status.HTTP_503_SERVICE_UNAVAILABLE,
                details=data,
            )
        return responses.success(data)

    app.include_router(api_router)
    app.include_router(create_graphql_router(config), prefix="/graphql", tags=["GraphQL"])

    return app


def _register_exception_handlers(app: FastAPI, config: PostrConfig) -> None:
    """Translate errors into the response envelope."""

    def internal_error(exc: Exception):
        details = {"error": str(exc)} if config.is_development else None
        return responses.error(
            "Internal server error",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
        )

    @app.exception_handler(PostrError)
    async def handle_postr_error(request: Request, exc: PostrError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
            return internal_error(exc)
        return responses.error(exc.message, exc.status_code, exc.details)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return responses.validation_error(format_errors(exc.errors()))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return responses.error(
                f"Endpoint not found: {request.method} {request.url.path}",
                status.HTTP_404_NOT_FOUND,
            )
        return responses.error(str(exc.detail), exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return internal_error(exc)
