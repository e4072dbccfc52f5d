# =============================================================================
# core/stores/base.py - User Store Interface
# =============================================================================
# A store is the only thing that touches user records. UserService receives
# one through its constructor, so the backend can be swapped (memory,
# Supabase) without changing the service or the routes.
#
# Stores report failures as StoreError carrying a backend error code. The
# service maps those codes onto API errors; stores never decide HTTP status.
# =============================================================================

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from core.models.user import User


# Backend error codes understood by UserService. They are Postgres/PostgREST
# codes so the Supabase store can pass them through untouched; the memory
# store raises the same codes.
UNIQUE_VIOLATION = "23505"
NOT_FOUND = "PGRST116"
INVALID_TEXT = "22P02"


class StoreError(Exception):
    """
    A storage operation failed.

    Attributes:
        message: What went wrong (for logs only)
        code: Backend error code, or None if the backend gave none
    """

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}" if self.code else self.message


class UserStore(ABC):
    """
    Storage for User records.

    Implementations assign `id`, `created_at` and `updated_at`; callers never
    pass them. Every method is a single round trip with no retries.
    """

    @abstractmethod
    def list(
        self,
        *,
        search: str | None = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[User], int]:
        """
        Return one page of users and the total number matching `search`.

        `search` matches name or email, case-insensitively. Order is the
        creation order.
        """

    @abstractmethod
    def create(self, *, name: str, email: str, avatar: str | None = None) -> User:
        """Insert a user. Raises StoreError(UNIQUE_VIOLATION) on duplicate email."""

    @abstractmethod
    def get(self, user_id: str) -> User | None:
        """Fetch a user by id, or None."""

    @abstractmethod
    def update(self, user_id: str, changes: dict[str, Any]) -> User:
        """
        Apply `changes` (name/email/avatar) and refresh `updated_at`.

        Raises StoreError(NOT_FOUND) if the user is missing and
        StoreError(UNIQUE_VIOLATION) if the new email belongs to someone else.
        """

    @abstractmethod
    def delete(self, user_id: str) -> None:
        """Hard-delete a user. Raises StoreError(NOT_FOUND) if missing."""

    @abstractmethod
    def ping(self) -> None:
        """Raise StoreError if the backend cannot be reached."""
