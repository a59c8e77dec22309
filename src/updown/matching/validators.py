"""Tradeability and outcome-token checks for discovery records."""

from __future__ import annotations

from dataclasses import dataclass

from structlog import get_logger

from updown.domain.markets import MarketRecord, OutcomeToken

logger = get_logger(__name__)

UP_LABELS = frozenset({"up", "yes", "higher"})
DOWN_LABELS = frozenset({"down", "no", "lower"})


@dataclass
class ValidationResult:
    """Result of a validation check.

    On success ``up`` and ``down`` hold the selected tokens; ``positional`` is
    set when they were assigned by token order because labels were missing or
    unrecognised.
    """

    passed: bool
    reason: str | None = None
    up: OutcomeToken | None = None
    down: OutcomeToken | None = None
    positional: bool = False


class MarketValidator:
    """Accepts a record only if it is tradeable and exposes two outcome tokens.

    Rules enforced:
    1. Not explicitly closed or archived
    2. Not explicitly inactive or order-book-disabled
    3. At least two distinct outcome-token ids
    """

    def __init__(self, truncate_extra_tokens: bool = True) -> None:
        """Initialize validator.

        Args:
            truncate_extra_tokens: Keep only the first two tokens of a record
                (single-market assumption of the slug strategy). When False,
                every token is considered while matching up/down labels.
        """
        self.truncate_extra_tokens = truncate_extra_tokens

    @staticmethod
    def _check_flags(record: MarketRecord) -> str | None:
        if record.closed is True:
            return "closed"
        if record.archived is True:
            return "archived"
        if record.active is False:
            return "inactive"
        if record.enable_order_book is False:
            return "order book disabled"
        return None

    def _select_tokens(
        self, tokens: list[OutcomeToken]
    ) -> tuple[OutcomeToken, OutcomeToken, bool]:
        pool = tokens[:2] if self.truncate_extra_tokens else tokens
        up = next((t for t in pool if t.label in UP_LABELS), None)
        down = next((t for t in pool if t.label in DOWN_LABELS), None)
        if up is not None and down is not None and up.token_id != down.token_id:
            return up, down, False
        return pool[0], pool[1], True

    def validate(self, record: MarketRecord) -> ValidationResult:
        """Run all checks on a record.

        Args:
            record: Normalised discovery record

        Returns:
            ValidationResult with the up/down tokens when it passed
        """
        flag_failure = self._check_flags(record)
        if flag_failure:
            logger.debug("market_rejected", identifier=record.identifier, reason=flag_failure)
            return ValidationResult(passed=False, reason=flag_failure)

        distinct: list[OutcomeToken] = []
        seen: set[str] = set()
        for token in record.tokens:
            if token.token_id and token.token_id not in seen:
                seen.add(token.token_id)
                distinct.append(token)

        if len(distinct) < 2:
            reason = f"expected 2 outcome tokens, found {len(distinct)}"
            logger.debug("market_rejected", identifier=record.identifier, reason=reason)
            return ValidationResult(passed=False, reason=reason)

        up, down, positional = self._select_tokens(distinct)
        return ValidationResult(passed=True, up=up, down=down, positional=positional)


__all__ = ["DOWN_LABELS", "MarketValidator", "UP_LABELS", "ValidationResult"]
