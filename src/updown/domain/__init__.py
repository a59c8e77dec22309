"""Domain models shared across the resolver."""

from .assets import (
    ASSETS,
    INTERVALS,
    Asset,
    ConfigurationError,
    Interval,
    get_asset,
    get_interval,
)
from .markets import MalformedRecordError, MarketRecord, OutcomeToken, to_probability
from .results import ResolutionResult

__all__ = [
    "ASSETS",
    "INTERVALS",
    "Asset",
    "ConfigurationError",
    "Interval",
    "MalformedRecordError",
    "MarketRecord",
    "OutcomeToken",
    "ResolutionResult",
    "get_asset",
    "get_interval",
    "to_probability",
]
