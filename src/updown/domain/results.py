"""Resolution result returned to callers."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class ResolutionResult(BaseModel):
    """Outcome of one resolution, including the diagnostic trail.

    The trail (``tried_identifiers``, ``last_error``, ``notes``) is populated on
    both success and failure so callers can explain why a market was or was not
    found, e.g. because the current window is not indexed yet.
    """

    found: bool
    asset: str
    interval: str
    strategy: Literal["slug", "search"]
    window_start: int | None = None

    market_title: str | None = None
    identifier: str | None = None
    up_token_id: str | None = None
    down_token_id: str | None = None
    up_price: float | None = Field(default=None, ge=0.0, le=1.0)
    down_price: float | None = Field(default=None, ge=0.0, le=1.0)
    positional_outcomes: bool = Field(
        default=False,
        description="True when up/down were assigned by token order because labels were missing.",
    )

    tried_identifiers: list[str] = Field(default_factory=list)
    last_error: str | None = None
    notes: list[str] = Field(default_factory=list)
    states: list[str] = Field(default_factory=list)


__all__ = ["ResolutionResult"]
