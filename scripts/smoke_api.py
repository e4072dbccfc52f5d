#!/usr/bin/env python3
# =============================================================================
# scripts/smoke_api.py - End-to-End Smoke Test Against a Running API
# =============================================================================
# Walks a throwaway user through create -> read -> update -> list -> delete
# using the same ApiClient a frontend would use.
#
# Usage:
#   uvicorn app.main:app &
#   python scripts/smoke_api.py            # uses APP_URL from .env
#   python scripts/smoke_api.py http://localhost:8000
# =============================================================================

import asyncio
import os
import sys
import uuid

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from lib.api_client import ApiClient, ApiError


async def run(base_url: str) -> int:
    client = ApiClient(base_url, timeout_ms=5_000)
    email = f"smoke-{uuid.uuid4().hex[:8]}@example.com"

    try:
        health = await client.get("/api/health")
        print(f"health:  {health['message']} (uptime {health['uptime']}s)")

        created = await client.post("/api/users", {"name": "Smoke Test", "email": email})
        user_id = created["data"]["id"]
        print(f"create:  {user_id} {created['data']['email']}")

        fetched = await client.get(f"/api/users/{user_id}")
        print(f"read:    {fetched['data']['name']}")

        updated = await client.put(
            f"/api/users/{user_id}",
            {"name": "Smoke Test (updated)", "email": email},
        )
        print(f"update:  {updated['data']['name']} at {updated['data']['updatedAt']}")

        listed = await client.get("/api/users", params={"search": "smoke"})
        print(f"list:    {listed['pagination']['total']} match(es) for 'smoke'")

        deleted = await client.delete(f"/api/users/{user_id}")
        print(f"delete:  {deleted['message']}")

    except ApiError as e:
        print(f"FAILED: {e}")
        return 1

    print("OK")
    return 0


def main() -> int:
    base_url = sys.argv[1] if len(sys.argv) > 1 else os.getenv("APP_URL", "http://localhost:8000")
    return asyncio.run(run(base_url))


if __name__ == "__main__":
    sys.exit(main())
