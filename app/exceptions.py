# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every failure leaves the API in the same envelope shape:
#   {"success": false, "error": "<message>"}
# so clients have a single failure-handling path.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.models.envelope import ApiResponse

logger = logging.getLogger(__name__)


class StarterApiException(Exception):
    """
    Base exception for the Starter API.

    All service-level exceptions inherit from this class. The message is
    what the client sees; `code` and `details` are only logged.
    """

    def __init__(
        self,
        message: str,
        code: str = "STARTER_API_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_envelope(self) -> dict[str, Any]:
        """Convert exception to the failure envelope."""
        return ApiResponse(success=False, error=self.message).model_dump(exclude_none=True)


# =============================================================================
# User Exceptions
# =============================================================================

class UserValidationError(StarterApiException):
    """Raised when a required field is missing or empty."""

    def __init__(self, message: str = "Name and email are required", fields: list[str] | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            details={"fields": fields or []},
        )


class UserNotFoundError(StarterApiException):
    """Raised when a user ID doesn't exist."""

    def __init__(self, user_id: str):
        super().__init__(
            message="User not found",
            code="USER_NOT_FOUND",
            status_code=404,
            details={"user_id": user_id},
        )


class EmailConflictError(StarterApiException):
    """Raised when another user already has the requested email."""

    def __init__(self, email: str):
        super().__init__(
            message="A user with this email already exists",
            code="EMAIL_CONFLICT",
            status_code=409,
            details={"email": email},
        )


class InternalServerError(StarterApiException):
    """Raised for storage failures that have no more specific meaning."""

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__(
            message="Internal server error",
            code="INTERNAL_ERROR",
            status_code=500,
            details=details,
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def starter_api_exception_handler(
    request: Request,
    exc: StarterApiException
) -> JSONResponse:
    """Convert StarterApiException to the failure envelope."""
    logger.info(
        f"{request.method} {request.url.path} -> {exc.status_code} [{exc.code}] {exc.details}"
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_envelope()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle malformed request bodies and query strings.

    FastAPI would answer 422 with its own shape; we answer 400 with the envelope.
    """
    errors = exc.errors()
    fields = [".".join(str(part) for part in err.get("loc", ())[1:]) for err in errors]
    logger.info(f"{request.method} {request.url.path} -> 400 invalid request: {fields}")

    # A json_invalid loc ends in the decode offset, not a field name
    unparseable = any(err.get("type") == "json_invalid" for err in errors)

    message = "Invalid request"
    if fields and all(fields) and not unparseable:
        message = f"Invalid request: {', '.join(fields)}"

    return JSONResponse(
        status_code=400,
        content=ApiResponse(success=False, error=message).model_dump(exclude_none=True)
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, return a generic 500 envelope."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content=ApiResponse(success=False, error="Internal server error").model_dump(exclude_none=True)
    )
