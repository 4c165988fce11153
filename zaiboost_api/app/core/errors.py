"""
Domain errors and the global exception handlers that turn them into
JSON responses.

Services raise subclasses of ``ZaiBoostError``; each carries the HTTP
status it maps to.  Request bodies that fail pydantic validation are
reported as 400 with the offending field names, and anything else that
escapes a handler becomes a logged 500.
"""

import logging
from typing import List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)


class ZaiBoostError(Exception):
    """Base class for errors that are reported to the client."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(ZaiBoostError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationFailed(ZaiBoostError):
    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDenied(ZaiBoostError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(ZaiBoostError):
    status_code = status.HTTP_404_NOT_FOUND


# Error types pydantic reports for absent or empty values.
_MISSING_TYPES = {"missing", "string_too_short"}


def _field_name(loc) -> str:
    # loc looks like ("body", "service_id"); drop the "body" part.
    parts = [str(p) for p in loc if p != "body"]
    return ".".join(parts) or "body"


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the app."""

    @app.exception_handler(ZaiBoostError)
    async def domain_error_handler(request: Request, exc: ZaiBoostError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        missing: List[str] = []
        invalid: List[str] = []
        for error in exc.errors():
            name = _field_name(error.get("loc", ()))
            if error.get("type") in _MISSING_TYPES:
                missing.append(name)
            else:
                invalid.append(f"{name} ({error.get('msg')})")
        parts = []
        if missing:
            parts.append(f"Missing: {', '.join(missing)}")
        if invalid:
            parts.append(f"Invalid: {', '.join(invalid)}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "; ".join(parts) or "Invalid request", "fields": missing},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )
