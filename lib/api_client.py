# =============================================================================
# lib/api_client.py - Typed HTTP Client for the Starter API
# =============================================================================
# One call surface (get/post/put/delete) for anything that talks to the API.
# Every failure comes out as an ApiError with a status:
#   - 0    no response (DNS, connection refused, ...)   -> NetworkError
#   - 408  no response within the timeout                -> RequestTimeoutError
#   - 4xx/5xx HTTP error status                          -> HttpStatusError
#   - 2xx body that is not an envelope                   -> MalformedResponseError
#
# The client holds no state between calls: each call opens and closes its own
# httpx.AsyncClient.
#
# Usage:
#   from lib.api_client import api          # base URL from APP_URL
#   envelope = await api.get("/api/users", params={"search": "jane"})
#   envelope = await api.post("/api/users", {"name": "Jane", "email": "jane@example.com"})
# =============================================================================

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 10_000


# =============================================================================
# Errors
# =============================================================================

class ApiError(Exception):
    """
    A call through ApiClient failed.

    Attributes:
        message: Human-readable description
        status: HTTP status, 408 for a timeout, 0 when no response arrived
        response: The raw httpx.Response, or the underlying exception
    """

    def __init__(self, message: str, status: int, response: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.response = response

    def __str__(self) -> str:
        return f"{self.message} (status {self.status})"


class RequestTimeoutError(ApiError):
    """No response within the configured timeout. The request was aborted."""

    def __init__(self, response: Any = None):
        super().__init__("Request timeout", 408, response)


class NetworkError(ApiError):
    """No response at all (DNS, refused connection, reset, ...)."""

    def __init__(self, cause: BaseException):
        super().__init__("Network error", 0, cause)


class HttpStatusError(ApiError):
    """The server answered with a non-2xx status."""

    def __init__(self, response: httpx.Response):
        super().__init__(
            f"HTTP {response.status_code}: {response.reason_phrase}",
            response.status_code,
            response,
        )


class MalformedResponseError(ApiError):
    """A 2xx response whose body is not a {success: bool, ...} envelope."""

    def __init__(self, response: httpx.Response, reason: str):
        super().__init__(f"Malformed response: {reason}", response.status_code, response)


# =============================================================================
# Client
# =============================================================================

class ApiClient:
    """
    Async JSON client with a per-call timeout and normalized errors.

    Args:
        base_url: Prefix for relative URLs (absolute URLs are used as-is)
        timeout_ms: Default timeout in milliseconds
        headers: Headers sent on every call (per-call headers win)
        transport: Optional httpx transport (tests pass httpx.MockTransport)

    Example:
        client = ApiClient("http://localhost:8000", timeout_ms=5_000)
        envelope = await client.get("/api/users/1")
        if envelope["success"]:
            user = envelope["data"]
    """

    def __init__(
        self,
        base_url: str = "",
        *,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.timeout_ms = timeout_ms
        self.headers = dict(headers or {})
        self._transport = transport

    def _build_headers(self, headers: dict[str, str] | None) -> httpx.Headers:
        merged = httpx.Headers({"Content-Type": "application/json"})
        merged.update(self.headers)
        merged.update(headers or {})
        return merged

    async def request(
        self,
        method: str,
        url: str,
        *,
        body: Any = None,
        timeout_ms: int | None = None,
        headers: dict[str, str] | None = None,
        **options: Any,
    ) -> dict[str, Any]:
        """
        Send one request and return the server's envelope.

        Args:
            method: HTTP method
            url: Relative (joined to base_url) or absolute URL
            body: JSON-serializable body; None sends no body
            timeout_ms: Overrides the client timeout for this call
            headers: Extra headers; a key here replaces the default
            **options: Passed through to httpx (params, cookies, ...);
                redirects are followed unless follow_redirects=False

        Returns:
            The parsed JSON envelope, unchanged

        Raises:
            RequestTimeoutError, NetworkError, HttpStatusError, MalformedResponseError
        """
        timeout_s = (timeout_ms if timeout_ms is not None else self.timeout_ms) / 1000
        if body is not None:
            options["json"] = body
        options.setdefault("follow_redirects", True)

        async with httpx.AsyncClient(
            base_url=self.base_url,
            transport=self._transport,
            timeout=None,
        ) as client:
            try:
                # wait_for cancels the in-flight send when the deadline passes,
                # which aborts the underlying connection
                response = await asyncio.wait_for(
                    client.request(method, url, headers=self._build_headers(headers), **options),
                    timeout=timeout_s,
                )
            except asyncio.TimeoutError as e:
                logger.warning(f"{method} {url} timed out after {timeout_s:.3f}s")
                raise RequestTimeoutError() from e
            except httpx.TimeoutException as e:
                logger.warning(f"{method} {url} timed out in transport: {e}")
                raise RequestTimeoutError(e) from e
            except httpx.HTTPError as e:
                logger.warning(f"{method} {url} failed: {e!r}")
                raise NetworkError(e) from e

        if not response.is_success:
            raise HttpStatusError(response)

        try:
            envelope = response.json()
        except ValueError as e:
            raise MalformedResponseError(response, "body is not JSON") from e

        if not isinstance(envelope, dict) or not isinstance(envelope.get("success"), bool):
            raise MalformedResponseError(response, "missing boolean 'success'")

        logger.debug(f"{method} {url} -> {response.status_code}")
        return envelope

    async def get(self, url: str, **options: Any) -> dict[str, Any]:
        """GET `url`."""
        return await self.request("GET", url, **options)

    async def post(self, url: str, body: Any = None, **options: Any) -> dict[str, Any]:
        """POST `body` as JSON to `url`."""
        return await self.request("POST", url, body=body, **options)

    async def put(self, url: str, body: Any = None, **options: Any) -> dict[str, Any]:
        """PUT `body` as JSON to `url`."""
        return await self.request("PUT", url, body=body, **options)

    async def delete(self, url: str, **options: Any) -> dict[str, Any]:
        """DELETE `url`."""
        return await self.request("DELETE", url, **options)


# Default client for the local API; APP_URL points it elsewhere
api = ApiClient(os.getenv("APP_URL", "http://localhost:8000"))
