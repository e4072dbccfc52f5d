# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Starter API:
# - test_models.py: Envelope and User model validation
# - test_memory_store.py / test_supabase_store.py: Storage backends
# - test_user_service.py: Validation and error classification
# - test_users_api.py / test_health.py: HTTP endpoints
# - test_api_client.py: Typed HTTP client (timeouts, error mapping)
# - test_notifications.py: Notification timers
# - test_config.py: Settings validation
#
# Run tests with: pytest
# =============================================================================
