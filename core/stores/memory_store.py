# =============================================================================
# core/stores/memory_store.py - In-Memory User Store
# =============================================================================
# Process-local store used for development and tests. Records live in a list
# guarded by a lock; nothing survives a restart.
#
# Ids are numeric-looking strings ("1", "2", ...) from a counter that never
# reuses a value, even after deletes.
# =============================================================================

from __future__ import annotations

import itertools
import logging
import threading
from datetime import timedelta
from typing import Any, Iterable

from core.models.user import User
from core.stores.base import NOT_FOUND, UNIQUE_VIOLATION, StoreError, UserStore
from lib.utils import utc_now

logger = logging.getLogger(__name__)

_MUTABLE_FIELDS = ("name", "email", "avatar")


class InMemoryUserStore(UserStore):
    """
    UserStore backed by a Python list.

    Example:
        store = InMemoryUserStore(seed=MEMORY_STORE_SEED)
        users, total = store.list(search="jane")
    """

    def __init__(self, seed: Iterable[dict[str, Any]] | None = None):
        self._lock = threading.Lock()
        self._users: list[User] = []
        self._ids = itertools.count(1)

        for record in seed or ():
            created_at = record.get("created_at") or utc_now()
            self._users.append(
                User(
                    id=str(next(self._ids)),
                    name=record["name"],
                    email=record["email"],
                    avatar=record.get("avatar"),
                    created_at=created_at,
                    updated_at=record.get("updated_at") or created_at,
                )
            )

    # -------------------------------------------------------------------------
    # Helpers (call with the lock held)
    # -------------------------------------------------------------------------

    def _index_of(self, user_id: str) -> int:
        for index, user in enumerate(self._users):
            if user.id == user_id:
                return index
        return -1

    def _email_taken(self, email: str, exclude_id: str | None = None) -> bool:
        wanted = email.lower()
        return any(
            user.email.lower() == wanted and user.id != exclude_id
            for user in self._users
        )

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
        with self._lock:
            users = list(self._users)

        if search:
            needle = search.lower()
            users = [
                user for user in users
                if needle in user.name.lower() or needle in user.email.lower()
            ]

        return users[offset:offset + limit], len(users)

    def create(self, *, name: str, email: str, avatar: str | None = None) -> User:
        with self._lock:
            if self._email_taken(email):
                raise StoreError(f"duplicate email: {email}", code=UNIQUE_VIOLATION)

            now = utc_now()
            user = User(
                id=str(next(self._ids)),
                name=name,
                email=email,
                avatar=avatar,
                created_at=now,
                updated_at=now,
            )
            self._users.append(user)

        logger.debug(f"Stored user {user.id} in memory")
        return user

    def get(self, user_id: str) -> User | None:
        with self._lock:
            index = self._index_of(user_id)
            return self._users[index] if index >= 0 else None

    def update(self, user_id: str, changes: dict[str, Any]) -> User:
        fields = {key: value for key, value in changes.items() if key in _MUTABLE_FIELDS}

        with self._lock:
            index = self._index_of(user_id)
            if index < 0:
                raise StoreError(f"no user with id {user_id}", code=NOT_FOUND)

            current = self._users[index]
            if "email" in fields and self._email_taken(fields["email"], exclude_id=user_id):
                raise StoreError(f"duplicate email: {fields['email']}", code=UNIQUE_VIOLATION)

            # updated_at must move forward even if the clock has not ticked
            now = utc_now()
            if now <= current.updated_at:
                now = current.updated_at + timedelta(microseconds=1)

            updated = current.model_copy(update={**fields, "updated_at": now})
            self._users[index] = updated

        return updated

    def delete(self, user_id: str) -> None:
        with self._lock:
            index = self._index_of(user_id)
            if index < 0:
                raise StoreError(f"no user with id {user_id}", code=NOT_FOUND)
            del self._users[index]

    def ping(self) -> None:
        return None
