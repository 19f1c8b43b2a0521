"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from learnlog.config import Settings, configure_logging, get_settings
from learnlog.database import create_tables, dispose_engine, initialize_database
from learnlog.domain.common.exceptions import DomainError
from learnlog.exceptions import (
    BadRequestError,
    ConflictError,
    InternalServerError,
    LearnlogError,
    NotFoundError,
    UnauthorizedError,
)
from learnlog.infrastructure.common.schemas import ErrorResponse, HealthResponse
from learnlog.infrastructure.identity import build_identity_resolver
from learnlog.infrastructure.journal.routers import logs_router, notes_router, themes_router

logger = logging.getLogger(__name__)

INVALID_JSON_MESSAGE = "Invalid JSON body"
NOT_AN_OBJECT_MESSAGE = "Request body must be a JSON object"

_HTTP_STATUS_CODES = {
    status.HTTP_401_UNAUTHORIZED: UnauthorizedError.code,
    status.HTTP_404_NOT_FOUND: NotFoundError.code,
    status.HTTP_409_CONFLICT: ConflictError.code,
}


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    """Render the ``{"error": {"code", "message"}}`` envelope."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse.of(code, message).model_dump(),
    )


async def learnlog_error_handler(request: Request, exc: LearnlogError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return error_response(exc.status_code, exc.code, exc.message)


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, BadRequestError.code, str(exc))


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Turn FastAPI's own validation failures into 400 BadRequest.

    Handlers validate their inputs themselves, so this only sees bodies that
    are not JSON at all.
    """
    errors = exc.errors()
    first = errors[0] if errors else {}
    if first.get("type") == "json_invalid":
        message = INVALID_JSON_MESSAGE
    elif first.get("loc", ())[:1] == ("body",):
        message = NOT_AN_OBJECT_MESSAGE
    else:
        message = str(first.get("msg", "Invalid request"))
    return error_response(status.HTTP_400_BAD_REQUEST, BadRequestError.code, message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        code = InternalServerError.code
    else:
        code = _HTTP_STATUS_CODES.get(exc.status_code, BadRequestError.code)
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return error_response(exc.status_code, code, message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc!s}", exc_info=exc)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        InternalServerError.code,
        InternalServerError().message,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    configure_logging(settings.ENVIRONMENT)
    initialize_database(settings)
    if settings.CREATE_TABLES_ON_STARTUP:
        create_tables()
    logger.info(f"{settings.PROJECT_NAME} started ({settings.ENVIRONMENT})")
    yield
    dispose_engine()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application with routers, middleware and error handlers."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.state.identity_resolver = build_identity_resolver(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(LearnlogError, learnlog_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(DomainError, domain_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError,
        request_validation_error_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        StarletteHTTPException,
        http_exception_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(themes_router)
    app.include_router(logs_router)
    app.include_router(notes_router)

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    def health() -> HealthResponse:
        """Liveness probe."""
        return HealthResponse(status="healthy")

    return app


app = create_app()
