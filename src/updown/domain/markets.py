"""Discovery records and outcome tokens."""

from __future__ import annotations

import json
import math
from typing import Any

from pydantic import BaseModel, Field, computed_field

MARKET_URL_BASE = "https://polymarket.com/market"


class MalformedRecordError(ValueError):
    """Raised when a discovery payload is not a usable market object."""


class OutcomeToken(BaseModel):
    """One tradeable side of a binary contract."""

    token_id: str
    label: str | None = Field(
        default=None,
        description="Lower-cased outcome label (e.g. up/down); None when only positional.",
    )
    snapshot_price: float | None = Field(
        default=None,
        description="Price embedded in the discovery record, if any. Informational only.",
    )


class MarketRecord(BaseModel):
    """Market as returned by the discovery service, normalised."""

    title: str = ""
    identifier: str = ""
    condition_id: str | None = None
    tokens: list[OutcomeToken] = Field(default_factory=list)
    active: bool | None = None
    closed: bool | None = None
    archived: bool | None = None
    enable_order_book: bool | None = None
    restricted: bool | None = None
    slug: str | None = None
    volume: float | None = Field(
        default=None,
        description="Market volume, falling back to the event volume.",
    )
    liquidity: float | None = Field(
        default=None,
        description="Market liquidity, falling back to the event liquidity.",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def url(self) -> str | None:
        return f"{MARKET_URL_BASE}/{self.slug}" if self.slug else None

    @property
    def is_live(self) -> bool:
        """Explicitly active and open, and neither archived nor restricted."""

        return (
            self.active is True
            and self.closed is False
            and self.archived is not True
            and self.restricted is not True
        )

    @property
    def token_ids(self) -> list[str]:
        return [token.token_id for token in self.tokens]

    @property
    def search_text(self) -> str:
        """Lower-cased title and identifier used for relevance scoring."""

        return f"{self.title} {self.identifier}".lower()

    @classmethod
    def from_payload(cls, payload: Any) -> MarketRecord:
        """Normalise a raw Gamma market (optionally flattened out of an event).

        Token ids, outcome labels and outcome prices may arrive either as native
        lists or as JSON-encoded strings; both are accepted. Markets exposing the
        older ``tokens`` list of objects are handled too. Event-level values
        (``eventTitle``, ``eventActive``...) fill gaps in the market's own fields.

        Raises:
            MalformedRecordError: If the payload is not a JSON object
        """
        if not isinstance(payload, dict):
            raise MalformedRecordError(
                f"Expected market object, got {type(payload).__name__}",
            )

        token_ids = [str(t) for t in _parse_list(payload.get("clobTokenIds")) if t not in (None, "")]
        labels = _parse_list(payload.get("outcomes"))
        prices = _parse_list(payload.get("outcomePrices"))

        if not token_ids:
            for entry in _parse_list(payload.get("tokens")):
                if not isinstance(entry, dict):
                    continue
                token_id = entry.get("token_id") or entry.get("tokenId")
                if not token_id:
                    continue
                token_ids.append(str(token_id))
                labels.append(entry.get("outcome"))
                prices.append(entry.get("price"))

        tokens = []
        for idx, token_id in enumerate(token_ids):
            label = labels[idx] if idx < len(labels) else None
            price = prices[idx] if idx < len(prices) else None
            tokens.append(
                OutcomeToken(
                    token_id=token_id,
                    label=str(label).strip().lower() if label else None,
                    snapshot_price=to_probability(price),
                )
            )

        condition_id = payload.get("conditionId") or payload.get("condition_id")
        slug = payload.get("slug") or payload.get("eventSlug")
        identifier = (
            slug
            or condition_id
            or payload.get("id")
            or ""
        )

        return cls(
            title=str(payload.get("question") or payload.get("title") or payload.get("eventTitle") or ""),
            identifier=str(identifier),
            condition_id=str(condition_id) if condition_id else None,
            tokens=tokens,
            active=_first_flag(payload, "active", "eventActive"),
            closed=_first_flag(payload, "closed", "eventClosed"),
            archived=_first_flag(payload, "archived", "eventArchived"),
            enable_order_book=_flag(payload.get("enableOrderBook")),
            restricted=_flag(payload.get("restricted")),
            slug=str(slug) if slug else None,
            volume=_first_number(payload, "volume", "eventVolume"),
            liquidity=_first_number(payload, "liquidity", "eventLiquidity"),
        )


def _parse_list(raw: Any) -> list[Any]:
    """Accept a native list or a JSON-encoded list; anything else is empty."""
    if raw is None:
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            return []
    if isinstance(raw, (list, tuple)):
        return list(raw)
    return []


def _flag(value: Any) -> bool | None:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "1"}:
            return True
        if lowered in {"false", "0"}:
            return False
    return None


def _first_flag(payload: dict, *keys: str) -> bool | None:
    for key in keys:
        value = _flag(payload.get(key))
        if value is not None:
            return value
    return None


def _first_number(payload: dict, *keys: str) -> float | None:
    for key in keys:
        value = payload.get(key)
        if value is None or isinstance(value, bool):
            continue
        try:
            number = float(value)
        except (TypeError, ValueError):
            continue
        if math.isfinite(number):
            return number
    return None


def to_probability(value: Any) -> float | None:
    """Coerce a decimal string or number into [0, 1], or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    if price != price or not 0.0 <= price <= 1.0:
        return None
    return price


__all__ = ["MalformedRecordError", "MarketRecord", "OutcomeToken", "to_probability"]
