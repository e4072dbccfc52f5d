# =============================================================================
# core/stores/seed_data.py - Demo Users
# =============================================================================
# Sample users shared by the in-memory store (first two, loaded on startup)
# and scripts/seed_users.py (all five).
# =============================================================================

from datetime import datetime, timezone

DEMO_USERS: list[dict] = [
    {
        "email": "john@example.com",
        "name": "John Doe",
        "avatar": "https://images.unsplash.com/photo-1472099645785-5658abf4ff4e?w=150",
        "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
    },
    {
        "email": "jane@example.com",
        "name": "Jane Smith",
        "avatar": "https://images.unsplash.com/photo-1494790108755-2616b612b786?w=150",
        "created_at": datetime(2024, 1, 2, tzinfo=timezone.utc),
    },
    {
        "email": "bob@example.com",
        "name": "Bob Johnson",
        "avatar": "https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=150",
        "created_at": datetime(2024, 1, 3, tzinfo=timezone.utc),
    },
    {
        "email": "alice@example.com",
        "name": "Alice Brown",
        "avatar": "https://images.unsplash.com/photo-1438761681033-6461ffad8d80?w=150",
        "created_at": datetime(2024, 1, 4, tzinfo=timezone.utc),
    },
    {
        "email": "charlie@example.com",
        "name": "Charlie Wilson",
        "avatar": "https://images.unsplash.com/photo-1500648767791-00dcc994a43e?w=150",
        "created_at": datetime(2024, 1, 5, tzinfo=timezone.utc),
    },
]

# Users present in a fresh in-memory store
MEMORY_STORE_SEED = DEMO_USERS[:2]
