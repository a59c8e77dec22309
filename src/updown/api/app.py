"""FastAPI application exposing the resolver over HTTP."""

from __future__ import annotations

from typing import Awaitable, Literal, Protocol

from fastapi import APIRouter, FastAPI, HTTPException, Query, Request
from structlog import get_logger

from updown.clients.base import UpstreamError
from updown.config import Settings, get_settings
from updown.discovery.listing import DEFAULT_LIMIT, MAX_LIMIT, SettingsMarketListings
from updown.domain.assets import ConfigurationError
from updown.domain.markets import MarketRecord
from updown.domain.results import ResolutionResult
from updown.resolution.service import resolve

logger = get_logger(__name__)

SERVICE_NAME = "updown"


class Resolver(Protocol):
    def __call__(
        self, asset: str, interval: str, strategy: str | None = None
    ) -> Awaitable[ResolutionResult]:
        ...


class Listings(Protocol):
    async def search(self, query: str, limit: int = DEFAULT_LIMIT) -> list[MarketRecord]:
        ...

    async def trending(self, limit: int = DEFAULT_LIMIT) -> list[MarketRecord]:
        ...


router = APIRouter(tags=["Resolution"])


@router.get("/health", tags=["Health"])
async def health() -> dict[str, str]:
    """Basic health endpoint."""

    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/resolve/{asset}/{interval}", response_model=ResolutionResult)
async def resolve_market(
    request: Request,
    asset: str,
    interval: str,
    strategy: Literal["slug", "search"] | None = None,
) -> ResolutionResult:
    """Resolve the current up/down market for an asset and interval.

    A market that cannot be found is a normal outcome and is returned with
    ``found=false`` and its diagnostic trail; only bad input yields a 400.
    """
    resolver: Resolver = request.app.state.resolver
    try:
        return await resolver(asset, interval, strategy=strategy)
    except ConfigurationError as exc:
        logger.info("resolve_rejected", asset=asset, interval=interval, error=str(exc))
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("/markets", response_model=list[MarketRecord], tags=["Markets"])
async def search_markets(
    request: Request,
    q: str = Query(..., min_length=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
) -> list[MarketRecord]:
    """Live markets matching a text query, most traded first."""

    listings: Listings = request.app.state.listings
    try:
        return await listings.search(q, limit)
    except ConfigurationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except UpstreamError as exc:
        logger.warning("listing_failed", source="search", error=str(exc))
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@router.get("/markets/trending", response_model=list[MarketRecord], tags=["Markets"])
async def trending_markets(
    request: Request,
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
) -> list[MarketRecord]:
    """Live markets from the events with the highest 24h volume."""

    listings: Listings = request.app.state.listings
    try:
        return await listings.trending(limit)
    except UpstreamError as exc:
        logger.warning("listing_failed", source="trending", error=str(exc))
        raise HTTPException(status_code=502, detail=str(exc)) from exc


def create_app(
    settings: Settings | None = None,
    resolver: Resolver | None = None,
    listings: Listings | None = None,
) -> FastAPI:
    """Create the FastAPI app.

    Args:
        settings: Settings used by the default resolver and listings
        resolver: Replacement resolver coroutine (tests inject a fake)
        listings: Replacement market listings (tests inject a fake)
    """
    resolved_settings = settings or get_settings()

    if resolver is None:

        async def _resolve_from_settings(
            asset: str, interval: str, strategy: str | None = None
        ) -> ResolutionResult:
            return await resolve(asset, interval, settings=resolved_settings, strategy=strategy)

        resolver = _resolve_from_settings

    if listings is None:
        listings = SettingsMarketListings(resolved_settings)

    app = FastAPI(
        title="Up/Down Resolver",
        description="Resolves the current recurring up/down contract and its implied probabilities.",
    )
    app.state.resolver = resolver
    app.state.listings = listings
    app.include_router(router)
    return app


__all__ = ["Listings", "Resolver", "create_app"]
