"""Wiring of clients, locator and clock from settings."""

from __future__ import annotations

from structlog import get_logger

from updown.clients.base import DiscoveryService, PricingService, TimeService
from updown.clients.clob import ClobClient
from updown.clients.gamma import GammaClient
from updown.config import Settings, get_settings
from updown.domain.assets import ConfigurationError
from updown.domain.results import ResolutionResult
from updown.resolution.locators import MarketLocator, SearchLocator, SlugLocator
from updown.resolution.orchestrator import ResolutionOrchestrator
from updown.resolution.pricing import PriceFetcher
from updown.timing.clock import ClockSource, LocalClock, ServerClock

logger = get_logger(__name__)

STRATEGIES = ("slug", "search")


def gamma_client(settings: Settings) -> GammaClient:
    return GammaClient(
        base_url=settings.gamma.base_url,
        timeout_seconds=settings.gamma.timeout_seconds,
        max_attempts=settings.resolver.max_attempts,
    )


def clob_client(settings: Settings) -> ClobClient:
    return ClobClient(
        base_url=settings.clob.base_url,
        timeout_seconds=settings.clob.timeout_seconds,
        time_timeout_seconds=settings.clob.time_timeout_seconds,
        max_attempts=settings.resolver.max_attempts,
    )


def build_locator(
    strategy: str,
    discovery: DiscoveryService,
    settings: Settings | None = None,
) -> MarketLocator:
    """Return the locator implementation configured for ``strategy``."""

    settings = settings or get_settings()
    if strategy == "slug":
        return SlugLocator(discovery)
    if strategy == "search":
        return SearchLocator(
            discovery,
            min_candidates=settings.resolver.min_search_candidates,
            min_score=settings.resolver.min_search_score,
        )
    raise ConfigurationError(f"Unknown strategy {strategy!r}; supported: {', '.join(STRATEGIES)}")


def build_orchestrator(
    discovery: DiscoveryService,
    pricing: PricingService,
    time_service: TimeService | None = None,
    settings: Settings | None = None,
    strategy: str | None = None,
) -> ResolutionOrchestrator:
    """Assemble an orchestrator over the given services.

    Args:
        discovery: Market discovery service
        pricing: Outcome-token pricing service
        time_service: Remote clock; the local clock is used when absent or disabled
        settings: Settings (defaults to the environment)
        strategy: Overrides the configured locator strategy
    """
    settings = settings or get_settings()
    locator = build_locator(strategy or settings.resolver.strategy, discovery, settings)

    clock: ClockSource
    if time_service is not None and settings.resolver.use_server_time:
        clock = ServerClock(time_service)
    else:
        clock = LocalClock()

    return ResolutionOrchestrator(
        locator=locator,
        price_fetcher=PriceFetcher(pricing),
        clock=clock,
    )


async def resolve(
    asset: str,
    interval: str,
    settings: Settings | None = None,
    strategy: str | None = None,
) -> ResolutionResult:
    """Resolve the current contract with clients built from settings.

    Clients are created for this call and closed afterwards; nothing is cached
    between calls.

    Raises:
        ConfigurationError: Unknown asset, interval or strategy
    """
    settings = settings or get_settings()
    async with gamma_client(settings) as gamma, clob_client(settings) as clob:
        orchestrator = build_orchestrator(
            discovery=gamma,
            pricing=clob,
            time_service=clob,
            settings=settings,
            strategy=strategy,
        )
        return await orchestrator.resolve(asset, interval)


__all__ = [
    "STRATEGIES",
    "build_locator",
    "build_orchestrator",
    "clob_client",
    "gamma_client",
    "resolve",
]
