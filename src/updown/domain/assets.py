"""Static catalogue of assets and intervals with recurring up/down contracts."""

from __future__ import annotations

from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field

SECONDS_PER_DAY = 86_400


class ConfigurationError(ValueError):
    """Raised for unsupported assets, intervals or strategies before any network call."""


class Asset(BaseModel):
    """Tradeable underlying referred to by symbol or full name."""

    model_config = ConfigDict(frozen=True)

    symbol: str = Field(..., description="Canonical lower-case short code, e.g. btc.")
    aliases: tuple[str, ...] = Field(..., description="Symbol first, then common full names.")


class Interval(BaseModel):
    """Recurring window length of a contract series."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Short code used in slugs, e.g. 15m.")
    duration_seconds: int = Field(..., gt=0)
    phrases: tuple[str, ...] = Field(
        ...,
        description="Written-out forms used in search queries and relevance scoring.",
    )

    @property
    def primary_phrase(self) -> str:
        return self.phrases[0]


ASSETS: dict[str, Asset] = {
    asset.symbol: asset
    for asset in (
        Asset(symbol="btc", aliases=("btc", "bitcoin")),
        Asset(symbol="eth", aliases=("eth", "ethereum")),
        Asset(symbol="sol", aliases=("sol", "solana")),
        Asset(symbol="xrp", aliases=("xrp", "ripple")),
    )
}

INTERVALS: dict[str, Interval] = {
    interval.label: interval
    for interval in (
        Interval(label="5m", duration_seconds=300, phrases=("5 minute", "5-minute", "5 min")),
        Interval(label="15m", duration_seconds=900, phrases=("15 minute", "15-minute", "15 min")),
        Interval(
            label="1h",
            duration_seconds=3600,
            phrases=("1 hour", "hourly", "60 minute", "one hour"),
        ),
        Interval(label="4h", duration_seconds=14_400, phrases=("4 hour", "4-hour")),
    )
}

# Labels users commonly type that map onto a catalogue entry.
INTERVAL_ALIASES: dict[str, str] = {"60m": "1h", "240m": "4h"}


def validate_intervals(intervals: Mapping[str, Interval]) -> None:
    """Check that every window length divides a day evenly.

    Window starts are floored to multiples of the duration from the epoch, so
    a length that does not divide a day would not line up with UTC midnight.

    Raises:
        ConfigurationError: If any duration does not divide 86400 seconds
    """
    for label, interval in intervals.items():
        if SECONDS_PER_DAY % interval.duration_seconds != 0:
            raise ConfigurationError(
                f"Interval {label!r} lasts {interval.duration_seconds}s, which does not divide a day",
            )


validate_intervals(INTERVALS)


def get_asset(name: str) -> Asset:
    """Look up an asset by symbol or any alias, case-insensitively."""

    key = (name or "").strip().lower()
    if key in ASSETS:
        return ASSETS[key]
    for asset in ASSETS.values():
        if key in asset.aliases:
            return asset
    raise ConfigurationError(
        f"Unknown asset {name!r}; supported: {', '.join(sorted(ASSETS))}",
    )


def get_interval(label: str) -> Interval:
    """Look up an interval by label, case-insensitively."""

    key = (label or "").strip().lower()
    key = INTERVAL_ALIASES.get(key, key)
    try:
        return INTERVALS[key]
    except KeyError:
        raise ConfigurationError(
            f"Unsupported interval {label!r}; supported: {', '.join(INTERVALS)}",
        ) from None


__all__ = [
    "ASSETS",
    "Asset",
    "ConfigurationError",
    "INTERVALS",
    "Interval",
    "get_asset",
    "get_interval",
    "validate_intervals",
]
