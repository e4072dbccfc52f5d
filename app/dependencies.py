# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Tests swap the backend with:
#   app.dependency_overrides[get_user_store] = lambda: InMemoryUserStore()
# =============================================================================

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from app.config import settings
from core.services.user_service import UserService
from core.stores import MEMORY_STORE_SEED, InMemoryUserStore, UserStore

logger = logging.getLogger(__name__)


@lru_cache
def get_user_store() -> UserStore:
    """
    Build the store selected by USER_STORE (once per process).

    The memory store starts with the demo users.
    """
    if settings.USER_STORE == "supabase":
        from core.stores.supabase_store import SupabaseUserStore

        logger.info(f"Using Supabase user store (table: {settings.USERS_TABLE})")
        return SupabaseUserStore(table=settings.USERS_TABLE)

    logger.info("Using in-memory user store")
    return InMemoryUserStore(seed=MEMORY_STORE_SEED)


def get_user_service(store: Annotated[UserStore, Depends(get_user_store)]) -> UserService:
    """Get a UserService bound to the configured store."""
    return UserService(store)


# Type aliases for dependency injection
UserStoreDep = Annotated[UserStore, Depends(get_user_store)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
