"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from src.books_api.api.http.app_data import ApplicationDependencies
from src.books_api.api.http.routers.health import router as health_router
from src.books_api.api.http.routers.service.book import router as book_router
from src.books_api.api.utils.app_startup import configure_logging
from src.books_api.core.errors import BooksApiError, InternalError
from src.books_api.core.services import DbManageService, DbSessionService
from src.books_api.core.validation import format_violation
from src.books_api.runtime.context import get_config

# Initialize logging
configure_logging()


# --- Security middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        # HSTS only in prod
        if get_config().app.environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        return response


# --- FastAPI app setup ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup()
    try:
        yield
    finally:
        await shutdown()


app = FastAPI(
    title=get_config().app.title,
    lifespan=lifespan,
    docs_url=None if get_config().app.environment == "production" else "/docs",
    redoc_url=None if get_config().app.environment == "production" else "/redoc",
)

# expose startup for tests
__all__ = ["app", "startup", "shutdown"]

# --- CORS configuration ---
if get_config().app.environment == "production" and (
    "*" in get_config().app.cors.origins
):
    raise RuntimeError(
        "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().app.cors.origins,
    allow_credentials=get_config().app.cors.allow_credentials,
    allow_methods=get_config().app.cors.allow_methods,
    allow_headers=get_config().app.cors.allow_headers,
)


# --- Central error responder ---
def error_response(request: Request, status_code: int, message: Any) -> JSONResponse:
    """Build the ``{"error": {"message", "status"}}`` body every failure ends in."""
    request_id = getattr(request.state, "request_id", "-")
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": message, "status": status_code}},
        headers={"X-Request-ID": request_id},
    )


@app.exception_handler(BooksApiError)
async def handle_books_api_error(request: Request, exc: BooksApiError) -> JSONResponse:
    log = logger.bind(status_code=exc.status_code, error_type=type(exc).__name__)
    if exc.status_code >= 500:
        log.opt(exception=exc).error("request.error")
    else:
        log.warning("request.rejected: {}", exc.message)
    return error_response(request, exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    logger.bind(status_code=exc.status_code).warning("request.rejected: {}", exc.detail)
    return error_response(request, exc.status_code, exc.detail)


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    violations = [
        # drop the leading "body"/"query" segment FastAPI adds to each location
        format_violation(err["loc"][1:], err["msg"])
        for err in exc.errors()
    ]
    logger.bind(status_code=400).warning("request.validation_error: {}", violations)
    return error_response(request, 400, violations)


# --- Request logging middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    # Correlation / tracing
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent", "unknown"),
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            # Anything the typed handlers did not answer becomes a 500
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return error_response(request, 500, InternalError().message)


# Must wrap log_requests
app.add_middleware(SecurityHeadersMiddleware)


# --- Router registration ---
app.include_router(health_router)
app.include_router(book_router)


# --- Lifecycle hooks ---
async def startup() -> None:
    config = get_config()
    logger.info("Starting up application in {} environment", config.app.environment)

    # Tests install their own dependencies before the app starts
    if getattr(app.state, "app_dependencies", None) is None:
        database_service = DbSessionService()
        DbManageService(database_service.engine).create_all()
        app.state.app_dependencies = ApplicationDependencies(
            database_service=database_service
        )


async def shutdown() -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if app_dependencies is not None:
        app_dependencies.database_service.dispose()
