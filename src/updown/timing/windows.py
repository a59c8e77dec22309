"""Epoch-aligned window math."""

from __future__ import annotations

import math

from updown.domain.assets import ConfigurationError

# Current window first, then the preceding one (discovery lags real time),
# then the following one (boundary races).
WINDOW_OFFSETS: tuple[int, ...] = (0, -1, 1)


def window_start(now: float, duration_seconds: int) -> int:
    """Return ``floor(now / duration) * duration``."""

    if duration_seconds <= 0:
        raise ConfigurationError(f"Window duration must be positive, got {duration_seconds}")
    return int(math.floor(now / duration_seconds)) * duration_seconds


def candidate_window_starts(now: float, duration_seconds: int) -> list[int]:
    """Window starts to try, in priority order: current, previous, next."""

    current = window_start(now, duration_seconds)
    return [current + offset * duration_seconds for offset in WINDOW_OFFSETS]


__all__ = ["WINDOW_OFFSETS", "candidate_window_starts", "window_start"]
