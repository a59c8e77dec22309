"""Relevance scoring of searched markets."""

from __future__ import annotations

import re
from typing import Sequence

from structlog import get_logger

from updown.domain.assets import Asset, Interval
from updown.domain.markets import MarketRecord

logger = get_logger(__name__)

ALIAS_POINTS = 5
DIRECTION_POINTS = 3
INTERVAL_POINTS = 2

_DIRECTION_PATTERN = re.compile(r"up or down|up/down|updown|\bup\b|\bdown\b")


def _interval_patterns(interval: Interval) -> list[re.Pattern[str]]:
    # A digit or letter may not precede a variant, so "5 minute" does not
    # match inside "15 minute". The bare label must also end on a boundary.
    patterns = [
        re.compile(rf"(?<![0-9a-z]){re.escape(phrase.lower())}") for phrase in interval.phrases
    ]
    patterns.append(re.compile(rf"(?<![0-9a-z]){re.escape(interval.label.lower())}(?![0-9a-z])"))
    return patterns


def score_text(text: str, asset: Asset, interval: Interval) -> int:
    """Score free text against an asset and interval.

    +5 per alias present, +3 for any directional marker and +2 for any
    interval phrase variant. Pure and deterministic.
    """
    lowered = text.lower()
    score = ALIAS_POINTS * sum(1 for alias in asset.aliases if alias.lower() in lowered)
    if _DIRECTION_PATTERN.search(lowered):
        score += DIRECTION_POINTS
    if any(pattern.search(lowered) for pattern in _interval_patterns(interval)):
        score += INTERVAL_POINTS
    return score


class CandidateScorer:
    """Greedy single-pass selection of the most relevant searched market."""

    def __init__(self, asset: Asset, interval: Interval, min_score: int = 0) -> None:
        self.asset = asset
        self.interval = interval
        self.min_score = min_score

    def score(self, record: MarketRecord) -> int:
        return score_text(record.search_text, self.asset, self.interval)

    def select(self, records: Sequence[MarketRecord]) -> tuple[int, int] | None:
        """Return ``(index, score)`` of the highest-scoring record.

        Ties go to the earliest record; nothing is returned when the best
        score is below ``min_score``.
        """
        best: tuple[int, int] | None = None
        for idx, record in enumerate(records):
            value = self.score(record)
            if best is None or value > best[1]:
                best = (idx, value)

        if best is None or best[1] < self.min_score:
            logger.debug(
                "no_candidate_above_threshold",
                best_score=best[1] if best else None,
                min_score=self.min_score,
            )
            return None
        return best


__all__ = ["CandidateScorer", "score_text"]
