"""Outcome-token price fetching with batch-then-single fallback."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from structlog import get_logger

from updown.clients.base import PricingService, UpstreamError
from updown.domain.markets import to_probability
from updown.resolution.diagnostics import Diagnostics

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PriceQuote:
    """Prices for the up and down tokens; None when unavailable."""

    up: float | None
    down: float | None


class PriceFetcher:
    """Retrieves midpoints for a market's two outcome tokens.

    The batch call is tried first. Tokens still lacking a usable price are then
    requested individually. Failures degrade to a ``None`` price and never
    abort the resolution, since market discovery and price availability fail
    independently.
    """

    def __init__(self, pricing: PricingService) -> None:
        self.pricing = pricing

    async def fetch(
        self,
        up_token_id: str,
        down_token_id: str,
        diagnostics: Diagnostics | None = None,
    ) -> PriceQuote:
        diagnostics = diagnostics or Diagnostics()
        token_ids = [up_token_id, down_token_id]
        prices: dict[str, float | None] = {token_id: None for token_id in token_ids}

        try:
            batch = await self.pricing.get_batch_prices(token_ids)
        except UpstreamError as exc:
            logger.warning("batch_price_failed", error=str(exc))
            diagnostics.record_error("batch prices", exc)
        else:
            for token_id in token_ids:
                prices[token_id] = self._usable(batch.get(token_id), token_id, diagnostics)

        for token_id in token_ids:
            if prices[token_id] is not None:
                continue
            try:
                raw = await self.pricing.get_price(token_id)
            except UpstreamError as exc:
                logger.warning("token_price_failed", token_id=token_id, error=str(exc))
                diagnostics.record_error(f"price {token_id}", exc)
                continue
            prices[token_id] = self._usable(raw, token_id, diagnostics)

        return PriceQuote(up=prices[up_token_id], down=prices[down_token_id])

    @staticmethod
    def _usable(raw: Any, token_id: str, diagnostics: Diagnostics) -> float | None:
        price = to_probability(raw)
        if price is None and raw is not None:
            diagnostics.note(f"price {token_id}: unusable value {raw!r}")
        return price


__all__ = ["PriceFetcher", "PriceQuote"]
