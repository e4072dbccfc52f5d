#!/usr/bin/env python3
# =============================================================================
# scripts/seed_users.py - Load Demo Users
# =============================================================================
# Deletes every existing user in the configured store and inserts the five
# demo users through UserService (so ids and timestamps come from the store).
#
# Usage:
#   USER_STORE=supabase python scripts/seed_users.py
#
# Prerequisites:
#   - Environment variables must be set (.env file)
#   - For Supabase: the users table from supabase/migrations/ must exist
# =============================================================================

import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from app.config import settings
from app.dependencies import get_user_store
from app.exceptions import StarterApiException
from core.models.user import UserPayload
from core.services.user_service import UserService
from core.stores import DEMO_USERS

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("seed_users")

PAGE_SIZE = 100


def delete_all(service: UserService) -> int:
    """Delete every user, one page at a time. Returns the number deleted."""
    deleted = 0
    while True:
        users, _ = service.list_users(page=1, limit=PAGE_SIZE)
        if not users:
            return deleted
        for user in users:
            service.delete_user(user.id)
            deleted += 1


def main() -> int:
    """Seed the store. Returns a process exit code."""
    logger.info(f"Seeding {settings.USER_STORE} user store...")
    service = UserService(get_user_store())

    try:
        removed = delete_all(service)
        logger.info(f"Removed {removed} existing users")

        created = [
            service.create_user(
                UserPayload(name=record["name"], email=record["email"], avatar=record["avatar"])
            )
            for record in DEMO_USERS
        ]
    except StarterApiException as e:
        logger.error(f"Seeding failed: {e.message} ({e.code}, {e.details})")
        return 1

    logger.info(f"Created {len(created)} users")
    for user in created:
        logger.info(f"  {user.id}  {user.name} <{user.email}>")
    return 0


if __name__ == "__main__":
    sys.exit(main())
