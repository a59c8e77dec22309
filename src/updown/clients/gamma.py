"""Polymarket Gamma API client used for market discovery."""

from __future__ import annotations

from typing import Any

import httpx
from structlog import get_logger

from updown.clients.base import HttpServiceClient

logger = get_logger(__name__)

# Event-level fields copied onto each flattened market.
_EVENT_FIELDS = {
    "title": "eventTitle",
    "slug": "eventSlug",
    "endDate": "eventEndDate",
    "active": "eventActive",
    "closed": "eventClosed",
    "archived": "eventArchived",
    "volume": "eventVolume",
    "liquidity": "eventLiquidity",
}

# The trending endpoint is asked for at least this many events.
MIN_TRENDING_EVENTS = 25


def flatten_events(events: Any) -> list[dict]:
    """Flatten ``events[].markets[]`` into market dicts carrying ``event*`` keys."""

    out: list[dict] = []
    for event in events if isinstance(events, list) else []:
        if not isinstance(event, dict):
            continue
        markets = event.get("markets")
        for market in markets if isinstance(markets, list) else []:
            if not isinstance(market, dict):
                continue
            merged = dict(market)
            for source, target in _EVENT_FIELDS.items():
                merged.setdefault(target, event.get(source))
            out.append(merged)
    return out


def flatten_search_payload(payload: Any) -> list[dict]:
    """Flatten a ``/public-search`` response into a list of market dicts.

    Markets nested under events inherit the event's title, slug, status flags
    and volume figures under ``event*`` keys; top-level markets are appended
    as-is.
    """
    if not isinstance(payload, dict):
        return []

    out = flatten_events(payload.get("events"))
    markets = payload.get("markets")
    for market in markets if isinstance(markets, list) else []:
        if isinstance(market, dict):
            out.append(market)

    return out


class GammaClient(HttpServiceClient):
    """Discovery service backed by the Gamma REST API."""

    DEFAULT_BASE_URL = "https://gamma-api.polymarket.com"

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 12.0,
        max_attempts: int = 2,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(
            base_url=base_url,
            timeout_seconds=timeout_seconds,
            max_attempts=max_attempts,
            client=client,
        )

    async def get_by_identifier(self, identifier: str) -> dict | None:
        """Get a market by its URL slug.

        Args:
            identifier: Market slug (e.g., "btc-updown-15m-1700000100")

        Returns:
            Market dict, or None if the slug is not indexed
        """
        data = await self._request("GET", f"/markets/slug/{identifier}", allow_not_found=True)
        if isinstance(data, list):
            # Some deployments answer with a one-element list.
            data = data[0] if data else None
        if data is None:
            logger.debug("gamma_slug_not_found", slug=identifier)
        return data

    async def search_by_text(self, query: str) -> list[dict]:
        """Run a full-text search and return the flattened markets.

        Args:
            query: Free-text query (e.g., "bitcoin up or down 15 minute")

        Returns:
            List of market dicts, possibly empty
        """
        payload = await self._request("GET", "/public-search", params={"q": query})
        markets = flatten_search_payload(payload)
        logger.debug("gamma_search_complete", query=query, markets=len(markets))
        return markets

    async def list_trending_markets(self, limit: int = 10) -> list[dict]:
        """List markets of active, open events ordered by 24h volume.

        Args:
            limit: Number of markets the caller intends to keep; at least
                ``MIN_TRENDING_EVENTS`` events are requested

        Returns:
            Flattened market dicts, possibly empty
        """
        params = {
            "active": "true",
            "closed": "false",
            "order": "volume_24hr",
            "ascending": "false",
            "limit": max(limit, MIN_TRENDING_EVENTS),
            "offset": 0,
        }
        payload = await self._request("GET", "/events", params=params)
        events = payload.get("events") if isinstance(payload, dict) else payload
        markets = flatten_events(events)
        logger.debug("gamma_trending_complete", markets=len(markets))
        return markets


__all__ = ["GammaClient", "MIN_TRENDING_EVENTS", "flatten_events", "flatten_search_payload"]
