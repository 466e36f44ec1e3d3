"""
Exception hierarchy for the Daily Readiness service.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.

StorageError and CheckInDecodeError never reach a client through the
check-in store: the store catches them, logs them and degrades to an
empty (or unsaved) collection. They still carry a code so that any other
caller surfacing them gets the same envelope.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class ReadinessException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class StorageError(ReadinessException):
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "STORAGE_ERROR"

    def __init__(self, operation: str, key: str, reason: str):
        super().__init__(
            message=f"Blob store {operation} failed for key {key!r}: {reason}",
            details={"operation": operation, "key": key},
        )


class CheckInDecodeError(ReadinessException):
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "CHECKIN_DECODE_ERROR"

    def __init__(self, reason: str):
        super().__init__(message=f"Persisted check-ins could not be decoded: {reason}")


class NoCheckInTodayError(ReadinessException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "NO_CHECKIN_TODAY"

    def __init__(self, day: date):
        super().__init__(
            message=f"No check-in recorded for {day}.",
            details={"day": str(day)},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def readiness_exception_handler(request: Request, exc: ReadinessException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
