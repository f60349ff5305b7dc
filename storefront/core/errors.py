"""Typed error model and the handlers that map it onto HTTP responses.

Services and routers raise these errors; status codes are only decided here,
by the handlers registered in the application factory. Every error body has
the shape ``{"error": "<message>"}``.
"""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

from storefront.models.constants import UPLOADS_URL_PREFIX

logger = logging.getLogger("storefront.errors")


class StoreError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StoreError):
    """Caller supplied missing or unacceptable input."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(StoreError):
    """The addressed order or image does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class UnexpectedError(StoreError):
    """Any other failure; message is a fixed per-operation text safe to expose."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def store_error_handler(request: Request, exc: StoreError):  # type: ignore
    if isinstance(exc, UnexpectedError):
        logger.error(
            "%s %s failed: %s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc.__cause__ or exc,
        )
    return _error(exc.status_code, exc.message)


def http_exception_handler(request: Request, exc):  # type: ignore
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        if request.url.path.startswith(f"{UPLOADS_URL_PREFIX}/"):
            return _error(exc.status_code, "Image not found")
        return _error(exc.status_code, "Route not found")
    return _error(exc.status_code, str(exc.detail))


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc)
        parts.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return _error(status.HTTP_400_BAD_REQUEST, "; ".join(parts) or "invalid request")


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
