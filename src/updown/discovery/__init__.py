"""Live market listings."""

from updown.discovery.listing import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    MarketLister,
    SettingsMarketListings,
    rank_live_markets,
)

__all__ = [
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "MarketLister",
    "SettingsMarketListings",
    "rank_live_markets",
]
