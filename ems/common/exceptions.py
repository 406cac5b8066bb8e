"""Custom exceptions and ``{"error": message}`` JSON error handlers."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


# ── Exception hierarchy ─────────────────────────────────────────────

class AppException(Exception):
    """Base for all application exceptions → ``{"error": message}``."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class NotFoundException(AppException):
    """404 — zero rows returned or affected for a scoped operation."""

    def __init__(self, entity_type: str) -> None:
        super().__init__(
            status_code=404,
            message=f"{entity_type} not found",
        )


class CreationFailedException(AppException):
    """400 — the insert reported no new row."""

    def __init__(self, entity_type: str) -> None:
        super().__init__(
            status_code=400,
            message=f"Failed to create {entity_type.lower()}",
        )


# ── Error body ──────────────────────────────────────────────────────

def error_body(message: str) -> dict[str, str]:
    return {"error": message}


def backend_error_message(exc: SQLAlchemyError) -> str:
    """Underlying driver message, without SQLAlchemy's statement dump."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


# ── FastAPI handlers ────────────────────────────────────────────────

async def _handle_app_exception(
    request: Request,
    exc: AppException,
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message),
    )


async def _handle_validation_error(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    messages: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        messages.append(f"{loc}: {err.get('msg', 'Invalid value')}")
    return JSONResponse(
        status_code=400,
        content=error_body("; ".join(messages) or "Invalid request."),
    )


async def _handle_backend_error(
    request: Request,
    exc: SQLAlchemyError,
) -> JSONResponse:
    logger.error(
        "Backend failure on %s %s", request.method, request.url.path, exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content=error_body(backend_error_message(exc)),
    )


async def _handle_rate_limit(
    request: Request,
    exc: RateLimitExceeded,
) -> JSONResponse:
    logger.warning("Rate limit exceeded for %s: %s", request.client, exc.detail)
    return JSONResponse(
        status_code=429,
        content=error_body(f"Rate limit exceeded: {exc.detail}"),
    )


# ── Registration helper (called from main.py) ──────────────────────

def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the FastAPI app."""
    app.add_exception_handler(AppException, _handle_app_exception)          # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _handle_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, _handle_backend_error)       # type: ignore[arg-type]
    app.add_exception_handler(RateLimitExceeded, _handle_rate_limit)        # type: ignore[arg-type]
