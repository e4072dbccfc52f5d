# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: User entity and request payload
# - envelope.py: ApiResponse / PaginatedResponse envelopes
#
# These models define the "contract" between API and clients.
# =============================================================================

from .envelope import ApiResponse, PaginatedResponse, Pagination
from .user import User, UserPayload

__all__ = [
    "ApiResponse",
    "PaginatedResponse",
    "Pagination",
    "User",
    "UserPayload",
]
