"""FastAPI application entrypoint. No business logic; only wiring, middleware and error rendering."""

from dotenv import load_dotenv

load_dotenv()

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1 import router as v1_router
from app.core.config import APP_VERSION, settings
from app.core.database import SessionLocal, engine
from app.core.errors import AppError, AuthError
from app.core.logging import configure_logging
from app.services.seed import init_db

logger = logging.getLogger(__name__)

DEV_FRONTEND_ORIGIN = "http://localhost:8080"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
}


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    configure_logging(settings)
    if settings.DB_AUTO_INIT:
        db = SessionLocal()
        try:
            init_db(engine, db, settings)
        finally:
            db.close()
    logger.info("Proposal Builder API started (env=%s)", settings.APP_ENV)
    yield


app = FastAPI(
    title="Proposal Builder API",
    version=APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS if settings.is_prod else [DEV_FRONTEND_ORIGIN],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=86400,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method, path, status and duration. Headers and bodies are never logged."""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s -> %s (%.1f ms)",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    if settings.is_prod:
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
    return response


def _error_body(code: str, message: str, field: str | None = None) -> dict[str, Any]:
    body = {"detail": message, "code": code}
    if field:
        body["field"] = field
    return body


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render domain errors as JSON with their HTTP status."""
    if exc.status_code >= 500:
        logger.error(
            "%s on %s %s: %s",
            exc.code,
            request.method,
            request.url.path,
            exc.__cause__ or exc.message,
        )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.code, exc.message, exc.field),
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Missing or malformed request input is a 400 with per-field details."""
    errors = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    message = "Invalid request"
    if errors:
        message = f"Invalid request: {'.'.join(errors[0]['loc'])}: {errors[0]['msg']}"
    content = _error_body("ValidationError", message)
    content["errors"] = errors
    return JSONResponse(status_code=400, content=content)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, never leak it outside dev+DEBUG."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = "Internal server error"
    if not settings.is_prod and settings.DEBUG:
        message = f"{type(exc).__name__}: {exc}"
    return JSONResponse(status_code=500, content=_error_body("InternalError", message))


app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Proposal Builder API", "version": APP_VERSION}
