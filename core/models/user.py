# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for the users resource:
# - User: A stored user as returned to clients (camelCase on the wire)
# - UserPayload: Body accepted by create and update
#
# id, createdAt and updatedAt are always assigned by the store, never by
# the caller.
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class User(BaseModel):
    """
    A stored user.

    Stores hand back rows in snake_case (created_at); clients see camelCase
    (createdAt). Both spellings are accepted on input.
    Instances are frozen: stores hand out the objects they hold, and changes
    go through UserStore.update().

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "email": "jane@example.com",
            "name": "Jane Smith",
            "avatar": "https://images.unsplash.com/photo-1494790108755-2616b612b786?w=150",
            "createdAt": "2024-01-02T00:00:00Z",
            "updatedAt": "2024-01-02T00:00:00Z"
        }
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
        frozen=True,
    )

    id: str = Field(..., description="Opaque unique identifier")
    email: str = Field(..., description="Unique email address")
    name: str = Field(..., min_length=1, description="Display name")
    avatar: str | None = Field(default=None, description="Profile image URL")
    created_at: datetime = Field(..., description="Set once at creation")
    updated_at: datetime = Field(..., description="Refreshed on every update")


class UserPayload(BaseModel):
    """
    Body for POST /api/users and PUT /api/users/{id}.

    All fields are optional at the schema level so that a missing name or
    email is reported by the service as a validation error (400) instead of
    a schema error. Unknown fields are ignored.

    Example:
        {"name": "Jane Smith", "email": "jane@example.com", "avatar": null}
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, examples=["Jane Smith"])
    email: str | None = Field(default=None, examples=["jane@example.com"])
    avatar: str | None = Field(default=None, examples=["https://example.com/jane.png"])
