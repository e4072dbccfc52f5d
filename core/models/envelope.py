# =============================================================================
# core/models/envelope.py - Response Envelopes
# =============================================================================
# Every API exchange is wrapped in the same envelope:
# - ApiResponse[T]: {success, data?, error?, message?}
# - PaginatedResponse[T]: ApiResponse[list[T]] plus pagination metadata
#
# Envelopes are serialized with None fields omitted, so a successful
# response never carries an "error" key and a failed one never carries "data".
# =============================================================================

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, Field, model_validator

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """
    Uniform envelope returned by every endpoint.

    Example (success):
        {"success": true, "data": {...}, "message": "User created successfully"}

    Example (failure):
        {"success": false, "error": "User not found"}
    """

    success: bool = Field(..., description="Whether the call succeeded")
    data: T | None = Field(default=None, description="Payload (success only)")
    error: str | None = Field(default=None, description="Error message (failure only)")
    message: str | None = Field(default=None, description="Optional human-readable note")

    @model_validator(mode="after")
    def _check_outcome(self):
        if self.success and self.error is not None:
            raise ValueError("a successful response cannot carry an error")
        if not self.success:
            if self.error is None:
                raise ValueError("a failed response must carry an error")
            if self.data is not None:
                raise ValueError("a failed response cannot carry data")
        return self


class Pagination(BaseModel):
    """Pagination metadata for list responses."""

    page: int = Field(..., ge=1, description="Current page number (1-indexed)")
    limit: int = Field(..., ge=1, description="Items per page")
    total: int = Field(..., ge=0, description="Total items matching the query")
    pages: int = Field(..., ge=0, description="Total number of pages")

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        """Compute `pages` as ceil(total / limit)."""
        return cls(page=page, limit=limit, total=total, pages=math.ceil(total / limit))


class PaginatedResponse(ApiResponse[list[T]], Generic[T]):
    """
    Envelope for list endpoints.

    Example:
        {
            "success": true,
            "data": [...],
            "pagination": {"page": 1, "limit": 10, "total": 25, "pages": 3}
        }
    """

    pagination: Pagination
