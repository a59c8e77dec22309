"""Market locator strategies: deterministic slug guessing and full-text search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Literal, Protocol

from structlog import get_logger

from updown.clients.base import DiscoveryService, UpstreamError
from updown.domain.markets import MalformedRecordError, MarketRecord
from updown.matching.candidate import CandidateGenerator
from updown.matching.scoring import CandidateScorer
from updown.matching.validators import MarketValidator, ValidationResult
from updown.resolution.diagnostics import Diagnostics, ResolutionState

logger = get_logger(__name__)


@dataclass
class LocatedMarket:
    """A validated market chosen for pricing."""

    record: MarketRecord
    validation: ValidationResult
    score: int | None = None


class MarketLocator(Protocol):
    """Finds the market for the current window of an (asset, interval) pair."""

    strategy: ClassVar[Literal["slug", "search"]]

    def candidates(self, generator: CandidateGenerator, now: float) -> list[str]:
        ...

    async def locate(
        self,
        generator: CandidateGenerator,
        candidates: list[str],
        diagnostics: Diagnostics,
    ) -> LocatedMarket | None:
        ...


class SlugLocator:
    """Fetches guessed slugs one by one; the first valid market wins."""

    strategy: ClassVar[Literal["slug", "search"]] = "slug"

    def __init__(self, discovery: DiscoveryService, validator: MarketValidator | None = None) -> None:
        self.discovery = discovery
        self.validator = validator or MarketValidator(truncate_extra_tokens=True)

    def candidates(self, generator: CandidateGenerator, now: float) -> list[str]:
        return generator.slugs(now)

    async def locate(
        self,
        generator: CandidateGenerator,
        candidates: list[str],
        diagnostics: Diagnostics,
    ) -> LocatedMarket | None:
        for slug in candidates:
            diagnostics.enter(ResolutionState.LOCATE)
            diagnostics.attempt(slug)

            try:
                payload = await self.discovery.get_by_identifier(slug)
                if payload is None:
                    logger.debug("candidate_not_found", slug=slug)
                    diagnostics.note(f"{slug}: not found")
                    continue
                record = MarketRecord.from_payload(payload)
            except (UpstreamError, MalformedRecordError) as exc:
                logger.warning("candidate_lookup_failed", slug=slug, error=str(exc))
                diagnostics.record_error(slug, exc)
                continue

            diagnostics.enter(ResolutionState.VALIDATE)
            result = self.validator.validate(record)
            if not result.passed:
                diagnostics.record_rejection(slug, result.reason or "invalid")
                continue

            logger.info("candidate_matched", slug=slug, title=record.title)
            return LocatedMarket(record=record, validation=result)

        return None


class SearchLocator:
    """Collects records from several text queries, then picks the best-scoring one."""

    strategy: ClassVar[Literal["slug", "search"]] = "search"

    def __init__(
        self,
        discovery: DiscoveryService,
        min_candidates: int = 25,
        min_score: int = 5,
        validator: MarketValidator | None = None,
    ) -> None:
        """Initialize search locator.

        Args:
            discovery: Discovery service with full-text search
            min_candidates: Stop querying once this many valid records were collected
            min_score: Minimum relevance score for the selected record
            validator: Record validator (keeps all tokens by default)
        """
        self.discovery = discovery
        self.min_candidates = min_candidates
        self.min_score = min_score
        self.validator = validator or MarketValidator(truncate_extra_tokens=False)

    def candidates(self, generator: CandidateGenerator, now: float) -> list[str]:
        return generator.search_phrases()

    async def locate(
        self,
        generator: CandidateGenerator,
        candidates: list[str],
        diagnostics: Diagnostics,
    ) -> LocatedMarket | None:
        working: list[tuple[MarketRecord, ValidationResult]] = []
        seen: set[str] = set()

        for query in candidates:
            diagnostics.enter(ResolutionState.LOCATE)
            diagnostics.attempt(query)

            try:
                payloads = await self.discovery.search_by_text(query)
            except UpstreamError as exc:
                logger.warning("search_query_failed", query=query, error=str(exc))
                diagnostics.record_error(query, exc)
                continue

            diagnostics.enter(ResolutionState.VALIDATE)
            accepted = 0
            for payload in payloads:
                try:
                    record = MarketRecord.from_payload(payload)
                except MalformedRecordError as exc:
                    diagnostics.record_error(query, exc)
                    continue

                key = record.identifier or record.condition_id
                if key:
                    if key in seen:
                        continue
                    seen.add(key)

                result = self.validator.validate(record)
                if result.passed:
                    working.append((record, result))
                    accepted += 1

            logger.debug(
                "search_query_complete",
                query=query,
                returned=len(payloads),
                accepted=accepted,
                total=len(working),
            )
            if len(working) >= self.min_candidates:
                diagnostics.note(f"collected {len(working)} candidates, stopping search early")
                break

        if not working:
            diagnostics.note("search returned no tradeable market")
            return None

        diagnostics.enter(ResolutionState.SCORE)
        scorer = CandidateScorer(generator.asset, generator.interval, min_score=self.min_score)
        selection = scorer.select([record for record, _ in working])

        diagnostics.enter(ResolutionState.SELECT)
        if selection is None:
            diagnostics.note(
                f"no searched market reached relevance score {self.min_score} "
                f"({len(working)} candidates)"
            )
            return None

        index, score = selection
        record, result = working[index]
        logger.info("candidate_selected", identifier=record.identifier, score=score)
        return LocatedMarket(record=record, validation=result, score=score)


__all__ = ["LocatedMarket", "MarketLocator", "SearchLocator", "SlugLocator"]
