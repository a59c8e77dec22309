"""Candidate generation, validation and relevance scoring."""

from updown.matching.candidate import SLUG_MARKER, CandidateGenerator, build_slug
from updown.matching.scoring import CandidateScorer, score_text
from updown.matching.validators import MarketValidator, ValidationResult

__all__ = [
    "CandidateGenerator",
    "CandidateScorer",
    "MarketValidator",
    "SLUG_MARKER",
    "ValidationResult",
    "build_slug",
    "score_text",
]
