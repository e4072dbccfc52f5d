# =============================================================================
# core/services/user_service.py - User Business Logic
# =============================================================================
# Handles user CRUD operations and business logic.
# Separates HTTP concerns from storage:
# - Required fields are validated before the store is touched
# - Store failures are classified by error code into API exceptions
# - Raw backend errors are logged, never returned to the caller
# =============================================================================

import logging
from typing import NoReturn

from app.exceptions import (
    EmailConflictError,
    InternalServerError,
    UserNotFoundError,
    UserValidationError,
)
from core.models.envelope import Pagination
from core.models.user import User, UserPayload
from core.stores.base import INVALID_TEXT, NOT_FOUND, UNIQUE_VIOLATION, StoreError, UserStore

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


class UserService:
    """
    Service for user management operations.

    Provides a clean interface between API routes and the injected store.

    Example:
        service = UserService(InMemoryUserStore())
        user = service.create_user(UserPayload(name="Jane", email="jane@example.com"))
        users, pagination = service.list_users(search="jane")
    """

    def __init__(self, store: UserStore):
        self.store = store

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _require_identity(payload: UserPayload) -> tuple[str, str]:
        """
        Return (name, email) stripped, or raise UserValidationError.

        Whitespace-only values count as missing.
        """
        name = (payload.name or "").strip()
        email = (payload.email or "").strip()

        missing = [field for field, value in (("name", name), ("email", email)) if not value]
        if missing:
            raise UserValidationError(fields=missing)
        return name, email

    @staticmethod
    def _raise_classified(exc: StoreError, user_id: str | None = None, email: str | None = None) -> NoReturn:
        """
        Map a store failure onto an API exception.

        UNIQUE_VIOLATION -> 409, NOT_FOUND / INVALID_TEXT -> 404, anything else -> 500.
        """
        if exc.code == UNIQUE_VIOLATION:
            raise EmailConflictError(email or "") from exc
        if exc.code in (NOT_FOUND, INVALID_TEXT):
            raise UserNotFoundError(user_id or "") from exc

        logger.error(f"User store failure [{exc.code}]: {exc.message}")
        raise InternalServerError(details={"store_code": exc.code}) from exc

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def list_users(
        self,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
        search: str | None = None,
    ) -> tuple[list[User], Pagination]:
        """
        List users with optional search and pagination.

        Args:
            page: Page number (1-indexed)
            limit: Items per page
            search: Case-insensitive substring of name or email

        Returns:
            Tuple of (users on this page, pagination metadata). `total`
            counts every match, not just this page.
        """
        offset = (page - 1) * limit

        try:
            users, total = self.store.list(search=search or None, offset=offset, limit=limit)
        except StoreError as e:
            self._raise_classified(e)

        return users, Pagination.build(page=page, limit=limit, total=total)

    def create_user(self, payload: UserPayload) -> User:
        """
        Create a user.

        Raises:
            UserValidationError: If name or email is missing (store untouched)
            EmailConflictError: If the email is already taken
        """
        name, email = self._require_identity(payload)

        try:
            user = self.store.create(name=name, email=email, avatar=payload.avatar)
        except StoreError as e:
            self._raise_classified(e, email=email)

        logger.info(f"Created user: {user.id}")
        return user

    def get_user(self, user_id: str) -> User:
        """
        Get a user by ID.

        Raises:
            UserNotFoundError: If no user has this ID
        """
        try:
            user = self.store.get(user_id)
        except StoreError as e:
            self._raise_classified(e, user_id=user_id)

        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def update_user(self, user_id: str, payload: UserPayload) -> User:
        """
        Update a user.

        name and email are required (same rule as create). avatar is only
        changed when present in the body; an explicit null clears it.

        Raises:
            UserValidationError: If name or email is missing (store untouched)
            UserNotFoundError: If no user has this ID
            EmailConflictError: If the new email belongs to another user
        """
        name, email = self._require_identity(payload)

        changes: dict = {"name": name, "email": email}
        if "avatar" in payload.model_fields_set:
            changes["avatar"] = payload.avatar

        try:
            user = self.store.update(user_id, changes)
        except StoreError as e:
            self._raise_classified(e, user_id=user_id, email=email)

        logger.info(f"Updated user: {user_id}")
        return user

    def delete_user(self, user_id: str) -> None:
        """
        Permanently delete a user.

        Raises:
            UserNotFoundError: If no user has this ID
        """
        try:
            self.store.delete(user_id)
        except StoreError as e:
            self._raise_classified(e, user_id=user_id)

        logger.info(f"Deleted user: {user_id}")
