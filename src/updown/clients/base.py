"""Upstream service protocols and the shared async HTTP client."""

from __future__ import annotations

from typing import Any, Protocol

import httpx
from structlog import get_logger
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = get_logger(__name__)


class UpstreamError(RuntimeError):
    """Raised when a discovery, pricing or time service call fails.

    Covers transport errors, timeouts, 5xx and other unexpected statuses, and
    bodies that are not valid JSON. A 404 on an identifier lookup is not an
    error; the discovery client returns ``None`` instead.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DiscoveryService(Protocol):
    """Looks up raw market records."""

    async def get_by_identifier(self, identifier: str) -> dict | None:
        ...

    async def search_by_text(self, query: str) -> list[dict]:
        ...


class MarketDirectory(Protocol):
    """Lists live markets for browsing: text search and trending events."""

    async def search_by_text(self, query: str) -> list[dict]:
        ...

    async def list_trending_markets(self, limit: int = 10) -> list[dict]:
        ...


class PricingService(Protocol):
    """Returns current outcome-token prices."""

    async def get_batch_prices(self, token_ids: list[str]) -> dict[str, Any]:
        ...

    async def get_price(self, token_id: str) -> Any:
        ...


class TimeService(Protocol):
    """Reports the upstream server clock (seconds or milliseconds)."""

    async def get_server_time(self) -> float:
        ...


class _ServerError(Exception):
    """Internal marker for retryable 5xx responses."""

    def __init__(self, response: httpx.Response) -> None:
        super().__init__(f"HTTP {response.status_code}")
        self.response = response


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "http_request_retry",
        attempt=retry_state.attempt_number,
        error=str(exc),
    )


class HttpServiceClient:
    """Lazily created ``httpx.AsyncClient`` with per-request retries."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 12.0,
        max_attempts: int = 2,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Service base URL
            timeout_seconds: Default per-request timeout
            max_attempts: Attempts per request for transport errors and 5xx
            client: Pre-built client (tests inject one with a mock transport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.max_attempts = max(max_attempts, 1)
        self._client = client

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            headers = {"Accept": "application/json"}
            self._client = httpx.AsyncClient(headers=headers, timeout=self.timeout_seconds)
        return self._client

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        payload: Any = None,
        timeout: float | None = None,
        allow_not_found: bool = False,
    ) -> Any:
        """Send a request and decode the JSON body.

        Returns:
            Decoded JSON, or None for a 404 when ``allow_not_found`` is set

        Raises:
            UpstreamError: On transport failure, unexpected status or bad JSON
        """
        client = await self._ensure_client()
        url = f"{self.base_url}{path}"
        extra: dict[str, Any] = {}
        if timeout is not None:
            extra["timeout"] = timeout

        retrying = AsyncRetrying(
            retry=retry_if_exception_type((httpx.TransportError, _ServerError)),
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=0.25, min=0.25, max=2),
            before_sleep=_log_retry,
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    if method == "POST":
                        response = await client.post(url, params=params, json=payload, **extra)
                    else:
                        response = await client.get(url, params=params, **extra)
                    if response.status_code >= 500:
                        raise _ServerError(response)
        except _ServerError as exc:
            status = exc.response.status_code
            raise UpstreamError(f"{method} {path} returned {status}", status_code=status) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"{method} {path} failed: {exc}") from exc

        if response.status_code == 404 and allow_not_found:
            return None
        if response.status_code >= 400:
            raise UpstreamError(
                f"{method} {path} returned {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(f"{method} {path} returned invalid JSON") from exc

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpServiceClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


__all__ = [
    "DiscoveryService",
    "HttpServiceClient",
    "MarketDirectory",
    "PricingService",
    "TimeService",
    "UpstreamError",
]
