"""Clock sources supplying the canonical "now" for window math."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Literal, Protocol

from structlog import get_logger

from updown.clients.base import TimeService, UpstreamError

logger = get_logger(__name__)

# Epoch values above this are milliseconds (1e12 s is ~33,000 years out).
MILLISECONDS_THRESHOLD = 1e12


@dataclass(frozen=True, slots=True)
class ClockReading:
    """A single "now" sample and where it came from."""

    seconds: float
    source: Literal["server", "local"]
    error: str | None = None


class ClockSource(Protocol):
    async def read(self) -> ClockReading:
        ...


def normalize_epoch_seconds(value: float) -> float:
    """Convert an epoch timestamp reported in seconds or milliseconds to seconds."""

    if value > MILLISECONDS_THRESHOLD:
        return value / 1000.0
    return float(value)


class LocalClock:
    """Wall clock of the local host."""

    async def read(self) -> ClockReading:
        return ClockReading(seconds=time.time(), source="local")


class ServerClock:
    """Remote server clock with a local fallback.

    A failing time service never blocks resolution: the local clock is used
    instead and the failure is reported on the reading.
    """

    def __init__(self, time_service: TimeService, fallback: ClockSource | None = None) -> None:
        self._time_service = time_service
        self._fallback = fallback or LocalClock()

    async def read(self) -> ClockReading:
        try:
            raw = await self._time_service.get_server_time()
        except UpstreamError as exc:
            logger.warning("server_time_unavailable", error=str(exc))
            local = await self._fallback.read()
            return ClockReading(
                seconds=local.seconds,
                source="local",
                error=f"{type(exc).__name__}: {exc}",
            )
        return ClockReading(seconds=normalize_epoch_seconds(raw), source="server")


class FixedClock:
    """Clock pinned to a given instant; used for replays and tests."""

    def __init__(self, seconds: float) -> None:
        self.seconds = seconds

    async def read(self) -> ClockReading:
        return ClockReading(seconds=normalize_epoch_seconds(self.seconds), source="local")


__all__ = [
    "ClockReading",
    "ClockSource",
    "FixedClock",
    "LocalClock",
    "MILLISECONDS_THRESHOLD",
    "ServerClock",
    "normalize_epoch_seconds",
]
