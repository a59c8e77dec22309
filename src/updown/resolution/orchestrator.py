"""Resolution state machine sequencing window math, location and pricing."""

from __future__ import annotations

from dataclasses import dataclass

from structlog import get_logger

from updown.domain.assets import get_asset, get_interval
from updown.domain.results import ResolutionResult
from updown.matching.candidate import CandidateGenerator
from updown.resolution.diagnostics import Diagnostics, ResolutionState
from updown.resolution.locators import MarketLocator
from updown.resolution.pricing import PriceFetcher
from updown.timing.clock import ClockSource
from updown.timing.windows import window_start

logger = get_logger(__name__)


@dataclass(slots=True)
class ResolutionOrchestrator:
    """Resolves the current up/down contract for an asset and interval.

    States: INIT -> COMPUTE_WINDOW -> GENERATE_CANDIDATES -> LOCATE/VALIDATE
    (loop) -> [SCORE -> SELECT] -> FETCH_PRICES -> DONE, or NOT_FOUND once the
    candidates are exhausted. Upstream failures on individual candidates are
    recorded and skipped; only configuration errors propagate.
    """

    locator: MarketLocator
    price_fetcher: PriceFetcher
    clock: ClockSource

    async def resolve(self, asset: str, interval: str) -> ResolutionResult:
        """Resolve and price the market for the current window.

        Raises:
            ConfigurationError: Unknown asset or unsupported interval
        """
        asset_def = get_asset(asset)
        interval_def = get_interval(interval)
        strategy = self.locator.strategy
        log = logger.bind(asset=asset_def.symbol, interval=interval_def.label, strategy=strategy)

        diagnostics = Diagnostics()
        diagnostics.enter(ResolutionState.INIT)

        diagnostics.enter(ResolutionState.COMPUTE_WINDOW)
        reading = await self.clock.read()
        if reading.error:
            diagnostics.note(f"server time unavailable, using local clock ({reading.error})")
        start = window_start(reading.seconds, interval_def.duration_seconds)

        diagnostics.enter(ResolutionState.GENERATE_CANDIDATES)
        generator = CandidateGenerator(asset_def, interval_def)
        candidates = self.locator.candidates(generator, reading.seconds)
        log.debug("resolution_started", window_start=start, candidates=len(candidates))

        located = await self.locator.locate(generator, candidates, diagnostics)

        if located is None:
            diagnostics.enter(ResolutionState.NOT_FOUND)
            log.info(
                "market_not_found",
                window_start=start,
                tried=len(diagnostics.tried),
                last_error=diagnostics.last_error,
            )
            return ResolutionResult(
                found=False,
                asset=asset_def.symbol,
                interval=interval_def.label,
                strategy=strategy,
                window_start=start,
                tried_identifiers=list(diagnostics.tried),
                last_error=diagnostics.last_error,
                notes=list(diagnostics.notes),
                states=diagnostics.state_names,
            )

        validation = located.validation
        assert validation.up is not None and validation.down is not None
        if validation.positional:
            diagnostics.note(
                "outcome labels missing or unrecognised; "
                "up/down assigned by token order (first=up, second=down)"
            )

        diagnostics.enter(ResolutionState.FETCH_PRICES)
        quote = await self.price_fetcher.fetch(
            validation.up.token_id,
            validation.down.token_id,
            diagnostics,
        )

        diagnostics.enter(ResolutionState.DONE)
        record = located.record
        log.info(
            "market_resolved",
            identifier=record.identifier,
            up_price=quote.up,
            down_price=quote.down,
            tried=len(diagnostics.tried),
        )
        return ResolutionResult(
            found=True,
            asset=asset_def.symbol,
            interval=interval_def.label,
            strategy=strategy,
            window_start=start,
            market_title=record.title,
            identifier=record.identifier,
            up_token_id=validation.up.token_id,
            down_token_id=validation.down.token_id,
            up_price=quote.up,
            down_price=quote.down,
            positional_outcomes=validation.positional,
            tried_identifiers=list(diagnostics.tried),
            last_error=diagnostics.last_error,
            notes=list(diagnostics.notes),
            states=diagnostics.state_names,
        )


__all__ = ["ResolutionOrchestrator"]
