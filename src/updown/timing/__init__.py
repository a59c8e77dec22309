"""Clock sources and window math."""

from updown.timing.clock import (
    ClockReading,
    ClockSource,
    FixedClock,
    LocalClock,
    ServerClock,
    normalize_epoch_seconds,
)
from updown.timing.windows import WINDOW_OFFSETS, candidate_window_starts, window_start

__all__ = [
    "ClockReading",
    "ClockSource",
    "FixedClock",
    "LocalClock",
    "ServerClock",
    "WINDOW_OFFSETS",
    "candidate_window_starts",
    "normalize_epoch_seconds",
    "window_start",
]
