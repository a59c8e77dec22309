"""Candidate identifier generation: guessed slugs and search phrases."""

from __future__ import annotations

from typing import Iterable

from structlog import get_logger

from updown.domain.assets import Asset, Interval
from updown.timing.windows import candidate_window_starts

logger = get_logger(__name__)

SLUG_MARKER = "updown"


def build_slug(alias: str, interval_label: str, window_start: int) -> str:
    """Join alias, marker, interval label and window start, e.g. btc-updown-5m-1700000100."""

    return "-".join([alias.lower(), SLUG_MARKER, interval_label.lower(), str(window_start)])


def _dedupe(items: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        out.append(item)
    return out


class CandidateGenerator:
    """Expands an (asset, interval) pair into ordered candidate identifiers.

    Order encodes priority: the current window before adjacent windows, and the
    primary alias before secondary aliases.
    """

    def __init__(self, asset: Asset, interval: Interval) -> None:
        self.asset = asset
        self.interval = interval

    def slugs(self, now: float) -> list[str]:
        """Deterministic slugs for every (window start x alias) pair.

        Outer loop over window starts (current, previous, next), inner loop
        over aliases.
        """
        starts = candidate_window_starts(now, self.interval.duration_seconds)
        slugs = _dedupe(
            build_slug(alias, self.interval.label, start)
            for start in starts
            for alias in self.asset.aliases
        )
        logger.debug(
            "slug_candidates_generated",
            asset=self.asset.symbol,
            interval=self.interval.label,
            count=len(slugs),
        )
        return slugs

    def search_phrases(self) -> list[str]:
        """Natural-language queries for full-text search, primary alias first."""

        phrase = self.interval.primary_phrase
        label = self.interval.label
        queries = []
        for alias in self.asset.aliases:
            queries.extend(
                [
                    f"{alias} up or down {phrase}",
                    f"{alias} up/down {label}",
                    f"{alias} {phrase} up",
                    f"{alias} {phrase} down",
                ]
            )
        return _dedupe(queries)


__all__ = ["CandidateGenerator", "SLUG_MARKER", "build_slug"]
