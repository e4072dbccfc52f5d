# =============================================================================
# core/stores/supabase_store.py - Supabase User Store
# =============================================================================
# UserStore backed by the hosted `users` table (see supabase/migrations/).
# The table assigns id (uuid) and created_at; updated_at is written here on
# every update.
#
# Every PostgREST failure is re-raised as StoreError with the backend code
# (e.g. 23505 for a duplicate email), so UserService can classify it without
# knowing anything about Supabase.
# =============================================================================

from __future__ import annotations

import logging
import re
from typing import Any

from supabase import Client

from app.config import settings
from core.models.user import User
from core.stores.base import INVALID_TEXT, NOT_FOUND, StoreError, UserStore
from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid, utc_now

logger = logging.getLogger(__name__)

# PostgREST: requested range not satisfiable (offset past the last row)
RANGE_NOT_SATISFIABLE = "PGRST103"

_MUTABLE_FIELDS = ("name", "email", "avatar")


def _contains_pattern(search: str) -> str:
    """
    Build a quoted PostgREST imatch value matching `search` anywhere.

    imatch is a case-insensitive regex match (~*), so regex metacharacters
    are escaped to match literally. PostgREST turns every `*` in an ilike
    value into `%`, so ilike cannot search for a literal `*`. The value is
    double-quoted so commas and parentheses don't break the or=(...)
    filter.
    """
    literal = re.escape(search)
    quoted = literal.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{quoted}"'


class SupabaseUserStore(UserStore):
    """
    UserStore on a Supabase (PostgREST) table.

    Example:
        store = SupabaseUserStore()
        user = store.create(name="Jane Smith", email="jane@example.com")
    """

    def __init__(self, client: Client | None = None, table: str | None = None):
        self._client = client
        self.table = table or settings.USERS_TABLE

    def _query(self):
        if self._client is None:
            try:
                self._client = SupabaseClient.get_client()
            except Exception as e:
                raise StoreError(str(e), code=getattr(e, "code", None)) from e
        return self._client.table(self.table)

    @staticmethod
    def _wrap(exc: Exception, action: str) -> StoreError:
        code = SupabaseClient.error_code(exc)
        logger.debug(f"Supabase {action} failed [{code}]: {exc}")
        return StoreError(f"Failed to {action}: {exc}", code=code)

    def _search_filter(self, query, search: str | None):
        if search:
            pattern = _contains_pattern(search)
            query = query.or_(f"name.imatch.{pattern},email.imatch.{pattern}")
        return query

    # -------------------------------------------------------------------------
    # UserStore
    # -------------------------------------------------------------------------

    def list(
        self,
        *,
        search: str | None = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[User], int]:
        query = self._search_filter(self._query().select("*", count="exact"), search)
        query = query.order("created_at").range(offset, offset + limit - 1)

        try:
            response = query.execute()
        except Exception as e:
            if SupabaseClient.error_code(e) == RANGE_NOT_SATISFIABLE:
                # Page past the end: empty page, but the total is still needed
                return [], self._count(search)
            raise self._wrap(e, "list users") from e

        rows = response.data or []
        total = response.count if response.count is not None else len(rows)
        return [User.model_validate(row) for row in rows], total

    def _count(self, search: str | None) -> int:
        query = self._search_filter(self._query().select("id", count="exact", head=True), search)
        try:
            response = query.execute()
        except Exception as e:
            raise self._wrap(e, "count users") from e
        return response.count or 0

    def create(self, *, name: str, email: str, avatar: str | None = None) -> User:
        try:
            response = (
                self._query()
                .insert({"name": name, "email": email, "avatar": avatar})
                .execute()
            )
        except StoreError:
            raise
        except Exception as e:
            raise self._wrap(e, "create user") from e

        if not response.data:
            raise StoreError("Insert returned no data")

        user = User.model_validate(response.data[0])
        logger.debug(f"Inserted user {user.id} into {self.table}")
        return user

    def get(self, user_id: str) -> User | None:
        try:
            response = (
                self._query()
                .select("*")
                .eq("id", normalize_uuid(user_id))
                .limit(1)
                .execute()
            )
        except StoreError:
            raise
        except Exception as e:
            # A malformed uuid cannot match any row
            if SupabaseClient.error_code(e) == INVALID_TEXT:
                return None
            raise self._wrap(e, "fetch user") from e

        rows = response.data or []
        return User.model_validate(rows[0]) if rows else None

    def update(self, user_id: str, changes: dict[str, Any]) -> User:
        data = {key: value for key, value in changes.items() if key in _MUTABLE_FIELDS}
        data["updated_at"] = utc_now().isoformat()

        try:
            response = (
                self._query()
                .update(data)
                .eq("id", normalize_uuid(user_id))
                .execute()
            )
        except StoreError:
            raise
        except Exception as e:
            raise self._wrap(e, "update user") from e

        if not response.data:
            raise StoreError(f"no user with id {user_id}", code=NOT_FOUND)
        return User.model_validate(response.data[0])

    def delete(self, user_id: str) -> None:
        try:
            response = (
                self._query()
                .delete()
                .eq("id", normalize_uuid(user_id))
                .execute()
            )
        except StoreError:
            raise
        except Exception as e:
            raise self._wrap(e, "delete user") from e

        if not response.data:
            raise StoreError(f"no user with id {user_id}", code=NOT_FOUND)

    def ping(self) -> None:
        try:
            self._query().select("id").limit(1).execute()
        except StoreError:
            raise
        except Exception as e:
            raise self._wrap(e, "reach Supabase") from e
