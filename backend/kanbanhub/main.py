"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException as StarletteHTTPException
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from kanbanhub.api import router as api_router
from kanbanhub.config import get_settings
from kanbanhub.db.session import close_db, init_db
from kanbanhub.exceptions import NotFoundError, ValidationError
from kanbanhub.middleware.logging import LoggingMiddleware, configure_logging
from kanbanhub.middleware.request_id import RequestIDMiddleware

logger = structlog.get_logger()
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown events."""
    logger.info("Starting Kanbanhub API", version=settings.app_version)
    await init_db()
    logger.info("Database connection initialized")

    yield

    logger.info("Shutting down Kanbanhub API")
    await close_db()
    logger.info("Database connection closed")


def _error_body(message: str, field: str | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"message": message}
    if field:
        body["field"] = field
    return body


def _field_from_location(loc: tuple[Any, ...]) -> str | None:
    """Name the offending field of a request validation error, camelCased."""
    parts = [str(p) for p in loc if not isinstance(p, int)]
    if parts and parts[0] in ("body", "path", "query", "header"):
        parts = parts[1:]
    if not parts:
        return None
    # Body locations already carry the camelCase alias
    name = parts[0]
    return to_camel(name) if "_" in name else name


async def request_validation_handler(request: Request, exc: RequestValidationError) -> ORJSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = _field_from_location(tuple(first.get("loc", ())))
    logger.info("request_validation_failed", field=field, error_count=len(errors))
    return ORJSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("Invalid input", field),
    )


async def validation_error_handler(request: Request, exc: ValidationError) -> ORJSONResponse:
    return ORJSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(exc.message, exc.field),
    )


async def not_found_handler(request: Request, exc: NotFoundError) -> ORJSONResponse:
    return ORJSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=_error_body(exc.message),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> ORJSONResponse:
    return ORJSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Kanban project management: workspaces, projects, columns and tasks",
        openapi_url=f"{settings.api_prefix}/openapi.json",
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # Add middleware (order matters - last added is first executed)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    # Trust proxy headers (X-Forwarded-Proto, X-Forwarded-For) from the reverse proxy
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint for load balancers."""
        return {"status": "healthy", "version": settings.app_version}

    return app


app = create_app()
