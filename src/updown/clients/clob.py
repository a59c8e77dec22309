"""Polymarket CLOB API client used for midpoint prices and server time."""

from __future__ import annotations

from typing import Any

import httpx
from structlog import get_logger

from updown.clients.base import HttpServiceClient, UpstreamError

logger = get_logger(__name__)


class ClobClient(HttpServiceClient):
    """Pricing and time service backed by the CLOB REST API."""

    DEFAULT_BASE_URL = "https://clob.polymarket.com"

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 12.0,
        time_timeout_seconds: float = 5.0,
        max_attempts: int = 2,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize CLOB client.

        Args:
            base_url: CLOB API base URL
            timeout_seconds: Timeout for price requests
            time_timeout_seconds: Shorter timeout for the server time request
            max_attempts: Attempts per request for transport errors and 5xx
            client: Optional pre-built httpx client
        """
        super().__init__(
            base_url=base_url,
            timeout_seconds=timeout_seconds,
            max_attempts=max_attempts,
            client=client,
        )
        self.time_timeout_seconds = time_timeout_seconds

    async def get_batch_prices(self, token_ids: list[str]) -> dict[str, Any]:
        """Fetch midpoints for several tokens in one call.

        Returns:
            Mapping of token id to raw midpoint (usually a decimal string)
        """
        body = [{"token_id": token_id} for token_id in token_ids]
        data = await self._request("POST", "/midpoints", payload=body)
        if not isinstance(data, dict):
            raise UpstreamError(f"Unexpected /midpoints payload: {type(data).__name__}")
        return data

    async def get_price(self, token_id: str) -> Any:
        """Fetch the midpoint for a single token."""
        data = await self._request("GET", "/midpoint", params={"token_id": token_id})
        if isinstance(data, dict):
            return data.get("mid")
        return data

    async def get_server_time(self) -> float:
        """Return the raw server time as reported by ``/time``."""
        data = await self._request("GET", "/time", timeout=self.time_timeout_seconds)
        if isinstance(data, dict):
            data = data.get("time", data.get("timestamp"))
        try:
            return float(data)
        except (TypeError, ValueError) as exc:
            raise UpstreamError(f"Unexpected /time payload: {data!r}") from exc


__all__ = ["ClobClient"]
