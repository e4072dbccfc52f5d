# =============================================================================
# tests/test_supabase_store.py - Supabase Store Tests
# =============================================================================
# Tests use a mocked Supabase client to avoid network calls. The query
# builder is a single MagicMock whose chain methods return itself, so each
# test can inspect the calls that built the query.
# =============================================================================

from unittest.mock import MagicMock

import pytest
from postgrest.exceptions import APIError

from core.stores import INVALID_TEXT, NOT_FOUND, UNIQUE_VIOLATION, StoreError
from core.stores.supabase_store import SupabaseUserStore, _contains_pattern
from lib.supabase_client import SupabaseClient

CHAIN_METHODS = ("select", "insert", "update", "delete", "eq", "or_", "order", "range", "limit")


def make_row(**overrides):
    row = {
        "id": "11111111-1111-1111-1111-111111111111",
        "email": "john@example.com",
        "name": "John Doe",
        "avatar": None,
        "created_at": "2024-01-01T00:00:00+00:00",
        "updated_at": "2024-01-01T00:00:00+00:00",
    }
    row.update(overrides)
    return row


def api_error(code: str, message: str = "failed") -> APIError:
    return APIError({"message": message, "code": code, "details": None, "hint": None})


@pytest.fixture
def builder():
    query = MagicMock()
    for name in CHAIN_METHODS:
        getattr(query, name).return_value = query
    query.execute.return_value = MagicMock(data=[], count=0)
    return query


@pytest.fixture
def supabase_store(builder):
    client = MagicMock()
    client.table.return_value = builder
    return SupabaseUserStore(client=client, table="users")


# =============================================================================
# Error Code Extraction
# =============================================================================

class TestErrorCode:
    """Tests for SupabaseClient.error_code."""

    def test_reads_code_attribute(self):
        assert SupabaseClient.error_code(api_error("23505")) == "23505"

    def test_falls_back_to_message_text(self):
        exc = Exception("{'code': 'PGRST116', 'message': 'JSON object requested, multiple (or no) rows returned'}")
        assert SupabaseClient.error_code(exc) == "PGRST116"

    def test_no_code(self):
        assert SupabaseClient.error_code(ConnectionError("connection refused")) is None


# =============================================================================
# Queries
# =============================================================================

class TestList:
    """Tests for list()."""

    def test_builds_paginated_query(self, supabase_store, builder):
        builder.execute.return_value = MagicMock(data=[make_row()], count=25)

        users, total = supabase_store.list(offset=10, limit=10)

        assert total == 25
        assert users[0].name == "John Doe"
        builder.select.assert_called_with("*", count="exact")
        builder.order.assert_called_with("created_at")
        builder.range.assert_called_with(10, 19)
        builder.or_.assert_not_called()

    def test_search_matches_name_or_email(self, supabase_store, builder):
        supabase_store.list(search="jane")

        builder.or_.assert_called_once_with('name.imatch."jane",email.imatch."jane"')

    def test_page_past_end_returns_count(self, supabase_store, builder):
        builder.execute.side_effect = [
            api_error("PGRST103", "Requested range not satisfiable"),
            MagicMock(data=None, count=3),
        ]

        users, total = supabase_store.list(offset=50, limit=10)

        assert users == []
        assert total == 3

    def test_backend_failure_keeps_code(self, supabase_store, builder):
        builder.execute.side_effect = api_error("08006", "connection failure")

        with pytest.raises(StoreError) as exc_info:
            supabase_store.list()

        assert exc_info.value.code == "08006"


class TestCreate:
    """Tests for create()."""

    def test_insert_returns_user(self, supabase_store, builder):
        builder.execute.return_value = MagicMock(data=[make_row(name="Jane Smith", email="jane@example.com")])

        user = supabase_store.create(name="Jane Smith", email="jane@example.com")

        assert user.email == "jane@example.com"
        builder.insert.assert_called_once_with(
            {"name": "Jane Smith", "email": "jane@example.com", "avatar": None}
        )

    def test_duplicate_email(self, supabase_store, builder):
        builder.execute.side_effect = api_error(UNIQUE_VIOLATION, "duplicate key value violates unique constraint")

        with pytest.raises(StoreError) as exc_info:
            supabase_store.create(name="John", email="john@example.com")

        assert exc_info.value.code == UNIQUE_VIOLATION


class TestGet:
    """Tests for get()."""

    def test_found(self, supabase_store, builder):
        builder.execute.return_value = MagicMock(data=[make_row()])

        user = supabase_store.get("11111111-1111-1111-1111-111111111111")

        assert user.name == "John Doe"
        builder.eq.assert_called_with("id", "11111111-1111-1111-1111-111111111111")

    def test_missing(self, supabase_store, builder):
        assert supabase_store.get("11111111-1111-1111-1111-111111111111") is None

    def test_malformed_uuid_is_missing(self, supabase_store, builder):
        builder.execute.side_effect = api_error(INVALID_TEXT, "invalid input syntax for type uuid")

        assert supabase_store.get("not-a-uuid") is None


class TestUpdateDelete:
    """Tests for update() and delete()."""

    def test_update_writes_fields_and_timestamp(self, supabase_store, builder):
        builder.execute.return_value = MagicMock(data=[make_row(name="John Smith")])

        user = supabase_store.update("1111", {"name": "John Smith", "id": "hijack"})

        sent = builder.update.call_args.args[0]
        assert sent["name"] == "John Smith"
        assert "id" not in sent
        assert "updated_at" in sent
        assert user.name == "John Smith"

    def test_update_no_rows_is_not_found(self, supabase_store, builder):
        with pytest.raises(StoreError) as exc_info:
            supabase_store.update("1111", {"name": "X"})
        assert exc_info.value.code == NOT_FOUND

    def test_delete_no_rows_is_not_found(self, supabase_store, builder):
        with pytest.raises(StoreError) as exc_info:
            supabase_store.delete("1111")
        assert exc_info.value.code == NOT_FOUND

    def test_delete_existing(self, supabase_store, builder):
        builder.execute.return_value = MagicMock(data=[make_row()])

        supabase_store.delete("11111111-1111-1111-1111-111111111111")

        builder.delete.assert_called_once()


class TestPing:
    """Tests for ping()."""

    def test_unreachable_backend(self, supabase_store, builder):
        builder.execute.side_effect = ConnectionError("connection refused")

        with pytest.raises(StoreError):
            supabase_store.ping()


# =============================================================================
# Search Pattern
# =============================================================================

class TestContainsPattern:
    """Tests for _contains_pattern."""

    def test_plain_text(self):
        assert _contains_pattern("jane") == '"jane"'

    def test_like_wildcards_are_literal(self):
        assert _contains_pattern("50%_off") == '"50%_off"'

    def test_star_is_escaped(self):
        # a\*b in the regex; the backslash is doubled inside the quoted value
        assert _contains_pattern("a*b") == '"a\\\\*b"'

    def test_regex_metacharacters_are_escaped(self):
        assert _contains_pattern("j.doe+1") == '"j\\\\.doe\\\\+1"'

    def test_quotes_escaped(self):
        assert _contains_pattern('a"b') == '"a\\"b"'

    def test_star_search_sent_to_both_columns(self, supabase_store, builder):
        supabase_store.list(search="a*b")

        builder.or_.assert_called_once_with('name.imatch."a\\\\*b",email.imatch."a\\\\*b"')
