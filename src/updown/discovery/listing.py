"""Browsing live markets: text search and trending lists ranked by activity."""

from __future__ import annotations

from typing import Any, Iterable

from structlog import get_logger

from updown.clients.base import MarketDirectory
from updown.config import Settings, get_settings
from updown.domain.assets import ConfigurationError
from updown.domain.markets import MalformedRecordError, MarketRecord
from updown.resolution.service import gamma_client

logger = get_logger(__name__)

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def rank_live_markets(payloads: Iterable[Any], limit: int) -> list[MarketRecord]:
    """Keep live markets, most traded first, and cut to ``limit``.

    Ordering is by volume, then liquidity, both descending; a missing figure
    counts as zero and equal markets keep their upstream order.
    """
    live: list[MarketRecord] = []
    for payload in payloads:
        try:
            record = MarketRecord.from_payload(payload)
        except MalformedRecordError as exc:
            logger.debug("listing_payload_skipped", error=str(exc))
            continue
        if record.is_live:
            live.append(record)

    live.sort(key=lambda r: (r.volume or 0.0, r.liquidity or 0.0), reverse=True)
    return live[:limit]


def _check_limit(limit: int) -> None:
    if not 1 <= limit <= MAX_LIMIT:
        raise ConfigurationError(f"limit must be between 1 and {MAX_LIMIT}, got {limit}")


class MarketLister:
    """Lists live markets from a market directory."""

    def __init__(self, directory: MarketDirectory) -> None:
        self.directory = directory

    async def search(self, query: str, limit: int = DEFAULT_LIMIT) -> list[MarketRecord]:
        """Live markets matching a free-text query.

        Raises:
            ConfigurationError: Empty query or limit out of range
        """
        if not query or not query.strip():
            raise ConfigurationError("Search query must not be empty")
        _check_limit(limit)

        payloads = await self.directory.search_by_text(query.strip())
        markets = rank_live_markets(payloads, limit)
        logger.info("markets_listed", source="search", query=query, returned=len(markets))
        return markets

    async def trending(self, limit: int = DEFAULT_LIMIT) -> list[MarketRecord]:
        """Live markets of the events with the highest 24h volume.

        Raises:
            ConfigurationError: Limit out of range
        """
        _check_limit(limit)

        payloads = await self.directory.list_trending_markets(limit)
        markets = rank_live_markets(payloads, limit)
        logger.info("markets_listed", source="trending", returned=len(markets))
        return markets


class SettingsMarketListings:
    """Market listings over a Gamma client opened per call from settings."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    async def search(self, query: str, limit: int = DEFAULT_LIMIT) -> list[MarketRecord]:
        async with gamma_client(self.settings) as gamma:
            return await MarketLister(gamma).search(query, limit)

    async def trending(self, limit: int = DEFAULT_LIMIT) -> list[MarketRecord]:
        async with gamma_client(self.settings) as gamma:
            return await MarketLister(gamma).trending(limit)


__all__ = [
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "MarketLister",
    "SettingsMarketListings",
    "rank_live_markets",
]
