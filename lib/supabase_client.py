# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module owns the single Supabase client used by the application and
# knows how to read an error code out of a failed PostgREST call.
#
# Table-specific queries live in the stores (core/stores/supabase_store.py);
# this module only deals with the connection itself.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   client = SupabaseClient.get_client()
#   rows = client.table("users").select("*").execute().data
# =============================================================================

from __future__ import annotations

import logging
import re
from typing import Any

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# Postgres SQLSTATE (5 chars) or PostgREST code (PGRST + digits)
_CODE_PATTERN = re.compile(r"\b(PGRST\d{3}|\d{2}[0-9A-Z]{3})\b")


class SupabaseClientError(Exception):
    """
    Error during Supabase client setup.

    Provides actionable error messages:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Holder for the singleton Supabase client.

    One client instance is shared across the application. All methods are
    class methods for easy access without instantiation.

    Example:
        client = SupabaseClient.get_client()
        client.table("users").select("id").limit(1).execute()
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                ) from e
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached client (next get_client() builds a new one)."""
        cls._instance = None

    @staticmethod
    def error_code(exc: BaseException) -> str | None:
        """
        Extract the backend error code from a failed query.

        postgrest's APIError exposes `.code` (e.g. "23505" for a unique
        violation, "PGRST116" for "no rows"). Other exceptions only carry
        the code in their text, so fall back to scanning str(exc).

        Returns:
            The code, or None if the error carries none
        """
        code = getattr(exc, "code", None)
        if isinstance(code, str) and code:
            return code

        match = _CODE_PATTERN.search(str(exc))
        return match.group(1) if match else None
