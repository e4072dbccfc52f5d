# =============================================================================
# core/stores/ - User Storage Backends
# =============================================================================
# - base.py: UserStore interface and StoreError codes
# - memory_store.py: Process-local store (development, tests)
# - supabase_store.py: Hosted Supabase table
# - seed_data.py: Demo users
#
# supabase_store is not imported here so the memory backend works without
# touching the Supabase client.
# =============================================================================

from .base import INVALID_TEXT, NOT_FOUND, UNIQUE_VIOLATION, StoreError, UserStore
from .memory_store import InMemoryUserStore
from .seed_data import DEMO_USERS, MEMORY_STORE_SEED

__all__ = [
    "UserStore",
    "StoreError",
    "UNIQUE_VIOLATION",
    "NOT_FOUND",
    "INVALID_TEXT",
    "InMemoryUserStore",
    "DEMO_USERS",
    "MEMORY_STORE_SEED",
]
