"""Clients for the discovery, pricing and time services."""

from updown.clients.base import (
    DiscoveryService,
    HttpServiceClient,
    MarketDirectory,
    PricingService,
    TimeService,
    UpstreamError,
)
from updown.clients.clob import ClobClient
from updown.clients.gamma import (
    MIN_TRENDING_EVENTS,
    GammaClient,
    flatten_events,
    flatten_search_payload,
)

__all__ = [
    "ClobClient",
    "DiscoveryService",
    "GammaClient",
    "HttpServiceClient",
    "MIN_TRENDING_EVENTS",
    "MarketDirectory",
    "PricingService",
    "TimeService",
    "UpstreamError",
    "flatten_events",
    "flatten_search_payload",
]
