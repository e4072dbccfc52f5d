# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides stores, services and an API client wired to a fresh store
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("USER_STORE", "memory")
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_user_store
from app.main import app
from core.models.user import UserPayload
from core.services.user_service import UserService
from core.stores import MEMORY_STORE_SEED, InMemoryUserStore


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def store():
    """Empty in-memory store."""
    return InMemoryUserStore()


@pytest.fixture
def seeded_store():
    """In-memory store holding John Doe (id "1") and Jane Smith (id "2")."""
    return InMemoryUserStore(seed=MEMORY_STORE_SEED)


@pytest.fixture
def service(store):
    """UserService over the empty store."""
    return UserService(store)


@pytest.fixture
def make_users(service):
    """Create `count` users named "User 01", "User 02", ..."""
    def _make(count: int):
        return [
            service.create_user(
                UserPayload(name=f"User {i:02d}", email=f"user{i:02d}@example.com")
            )
            for i in range(1, count + 1)
        ]
    return _make


@pytest.fixture
def client(store):
    """TestClient whose routes use the `store` fixture."""
    app.dependency_overrides[get_user_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_user_payload():
    """Valid create body."""
    return {
        "name": "Jane Smith",
        "email": "jane@example.com",
        "avatar": "https://images.unsplash.com/photo-1494790108755-2616b612b786?w=150",
    }
