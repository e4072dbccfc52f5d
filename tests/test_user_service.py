# =============================================================================
# tests/test_user_service.py - UserService Tests
# =============================================================================
# Covers the users contract independent of HTTP:
# - Validation happens before the store is touched
# - Store error codes map to 400/404/409/500 exceptions
# - Pagination and search semantics
# =============================================================================

from unittest.mock import MagicMock

import pytest

from app.exceptions import (
    EmailConflictError,
    InternalServerError,
    UserNotFoundError,
    UserValidationError,
)
from core.models.user import UserPayload
from core.services.user_service import UserService
from core.stores import INVALID_TEXT, NOT_FOUND, UNIQUE_VIOLATION, StoreError, UserStore


# =============================================================================
# Create / Read
# =============================================================================

class TestCreateUser:
    """Tests for UserService.create_user."""

    def test_create_then_read(self, service):
        created = service.create_user(UserPayload(name="Jane Smith", email="jane@example.com"))

        fetched = service.get_user(created.id)

        assert fetched.name == "Jane Smith"
        assert fetched.email == "jane@example.com"
        assert fetched.id == created.id
        assert fetched.created_at == fetched.updated_at

    def test_strips_whitespace(self, service):
        user = service.create_user(UserPayload(name="  Jane  ", email=" jane@example.com "))

        assert user.name == "Jane"
        assert user.email == "jane@example.com"

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"name": "Jane"},
            {"email": "jane@example.com"},
            {"name": "", "email": "jane@example.com"},
            {"name": "Jane", "email": "   "},
        ],
    )
    def test_missing_fields_rejected_before_storage(self, payload):
        store = MagicMock(spec=UserStore)
        service = UserService(store)

        with pytest.raises(UserValidationError) as exc_info:
            service.create_user(UserPayload(**payload))

        assert exc_info.value.status_code == 400
        store.create.assert_not_called()

    def test_duplicate_email_conflicts(self, service):
        service.create_user(UserPayload(name="Jane", email="jane@example.com"))

        with pytest.raises(EmailConflictError) as exc_info:
            service.create_user(UserPayload(name="Jane Again", email="jane@example.com"))

        assert exc_info.value.status_code == 409
        users, pagination = service.list_users(search="jane@example.com")
        assert pagination.total == 1

    def test_get_missing_user(self, service):
        with pytest.raises(UserNotFoundError) as exc_info:
            service.get_user("does-not-exist")
        assert exc_info.value.status_code == 404


# =============================================================================
# Update
# =============================================================================

class TestUpdateUser:
    """Tests for UserService.update_user."""

    @pytest.fixture
    def jane(self, service):
        return service.create_user(
            UserPayload(name="Jane", email="jane@example.com", avatar="https://example.com/jane.png")
        )

    def test_new_name_keeps_email_and_avatar(self, service, jane):
        updated = service.update_user(jane.id, UserPayload(name="Jane Smith", email="jane@example.com"))

        assert updated.name == "Jane Smith"
        assert updated.email == jane.email
        assert updated.avatar == "https://example.com/jane.png"
        assert updated.updated_at > updated.created_at

    def test_explicit_null_avatar_clears_it(self, service, jane):
        payload = UserPayload.model_validate({"name": "Jane", "email": "jane@example.com", "avatar": None})

        updated = service.update_user(jane.id, payload)

        assert updated.avatar is None

    def test_requires_name_and_email(self, service, jane):
        with pytest.raises(UserValidationError):
            service.update_user(jane.id, UserPayload(name="Only Name"))

        assert service.get_user(jane.id).name == "Jane"

    def test_missing_user(self, service):
        with pytest.raises(UserNotFoundError):
            service.update_user("404", UserPayload(name="X", email="x@example.com"))

    def test_email_taken_by_other_user(self, service, jane):
        service.create_user(UserPayload(name="John", email="john@example.com"))

        with pytest.raises(EmailConflictError):
            service.update_user(jane.id, UserPayload(name="Jane", email="john@example.com"))

    def test_new_unique_email_succeeds(self, service, jane):
        updated = service.update_user(jane.id, UserPayload(name="Jane", email="jane.smith@example.com"))
        assert updated.email == "jane.smith@example.com"


# =============================================================================
# Delete
# =============================================================================

class TestDeleteUser:
    """Tests for UserService.delete_user."""

    def test_delete_then_read_is_not_found(self, service):
        user = service.create_user(UserPayload(name="Jane", email="jane@example.com"))

        service.delete_user(user.id)

        with pytest.raises(UserNotFoundError):
            service.get_user(user.id)

    def test_delete_missing_leaves_store_unchanged(self, service, make_users):
        make_users(3)

        with pytest.raises(UserNotFoundError):
            service.delete_user("nope")

        assert service.list_users()[1].total == 3


# =============================================================================
# List
# =============================================================================

class TestListUsers:
    """Tests for UserService.list_users."""

    def test_first_page_of_25(self, service, make_users):
        make_users(25)

        users, pagination = service.list_users(page=1, limit=10)

        assert len(users) == 10
        assert pagination.model_dump() == {"page": 1, "limit": 10, "total": 25, "pages": 3}

    def test_last_partial_page(self, service, make_users):
        make_users(25)

        users, pagination = service.list_users(page=3, limit=10)

        assert [u.name for u in users] == ["User 21", "User 22", "User 23", "User 24", "User 25"]
        assert pagination.page == 3

    def test_page_past_end_is_empty_not_error(self, service, make_users):
        make_users(3)

        users, pagination = service.list_users(page=5, limit=10)

        assert users == []
        assert pagination.total == 3
        assert pagination.pages == 1

    def test_search_matches_name_or_email(self, service):
        service.create_user(UserPayload(name="John Doe", email="john@example.com"))
        service.create_user(UserPayload(name="Jane Smith", email="jane@example.com"))
        service.create_user(UserPayload(name="Bob", email="bob.jane@example.com"))

        users, pagination = service.list_users(search="jane")

        assert [u.name for u in users] == ["Jane Smith", "Bob"]
        assert pagination.total == 2

    def test_empty_search_means_no_filter(self, service, make_users):
        make_users(4)
        assert service.list_users(search="")[1].total == 4


# =============================================================================
# Store Error Classification
# =============================================================================

class TestErrorClassification:
    """Store failures become API exceptions by code."""

    @pytest.fixture
    def failing_service(self):
        store = MagicMock(spec=UserStore)
        return UserService(store), store

    def test_unknown_code_is_internal_error(self, failing_service):
        service, store = failing_service
        store.list.side_effect = StoreError("connection refused", code="08006")

        with pytest.raises(InternalServerError) as exc_info:
            service.list_users()

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Internal server error"
        assert "connection refused" not in exc_info.value.message

    def test_missing_code_is_internal_error(self, failing_service):
        service, store = failing_service
        store.get.side_effect = StoreError("boom")

        with pytest.raises(InternalServerError):
            service.get_user("1")

    def test_unique_violation_is_conflict(self, failing_service):
        service, store = failing_service
        store.create.side_effect = StoreError("duplicate key", code=UNIQUE_VIOLATION)

        with pytest.raises(EmailConflictError):
            service.create_user(UserPayload(name="Jane", email="jane@example.com"))

    @pytest.mark.parametrize("code", [NOT_FOUND, INVALID_TEXT])
    def test_not_found_codes(self, failing_service, code):
        service, store = failing_service
        store.delete.side_effect = StoreError("no rows", code=code)

        with pytest.raises(UserNotFoundError):
            service.delete_user("not-a-uuid")
