# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - api_client.py: Typed HTTP client (timeout, normalized errors)
# - notifications.py: Notification list with cancellable auto-dismissal
# - supabase_client.py: Singleton Supabase client + error code extraction
# - utils.py: Shared utilities (UUID normalization, UTC clock)
#
# supabase_client is not re-exported here: it loads app settings, and the
# HTTP client must stay importable without them.
# =============================================================================

from lib.api_client import (
    ApiClient,
    ApiError,
    HttpStatusError,
    MalformedResponseError,
    NetworkError,
    RequestTimeoutError,
    api,
)
from lib.notifications import Notification, NotificationCenter
from lib.utils import normalize_uuid, utc_now

__all__ = [
    # HTTP client
    "ApiClient",
    "ApiError",
    "HttpStatusError",
    "MalformedResponseError",
    "NetworkError",
    "RequestTimeoutError",
    "api",
    # Notifications
    "Notification",
    "NotificationCenter",
    # Utils
    "normalize_uuid",
    "utc_now",
]
