"""Market resolution pipeline."""

from updown.resolution.diagnostics import Diagnostics, ResolutionState
from updown.resolution.locators import LocatedMarket, MarketLocator, SearchLocator, SlugLocator
from updown.resolution.orchestrator import ResolutionOrchestrator
from updown.resolution.pricing import PriceFetcher, PriceQuote
from updown.resolution.service import build_locator, build_orchestrator, resolve

__all__ = [
    "Diagnostics",
    "LocatedMarket",
    "MarketLocator",
    "PriceFetcher",
    "PriceQuote",
    "ResolutionOrchestrator",
    "ResolutionState",
    "SearchLocator",
    "SlugLocator",
    "build_locator",
    "build_orchestrator",
    "resolve",
]
