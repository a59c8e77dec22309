"""Per-resolution diagnostic trail."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class ResolutionState(Enum):
    INIT = auto()
    COMPUTE_WINDOW = auto()
    GENERATE_CANDIDATES = auto()
    LOCATE = auto()
    VALIDATE = auto()
    SCORE = auto()
    SELECT = auto()
    FETCH_PRICES = auto()
    DONE = auto()
    NOT_FOUND = auto()


@dataclass(slots=True)
class Diagnostics:
    """Mutable trail for a single resolution attempt.

    Created fresh for every call and copied into the result, so upstream lag
    ("window not indexed yet") can be explained to the user.
    """

    tried: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    states: list[ResolutionState] = field(default_factory=list)
    last_error: str | None = None

    def enter(self, state: ResolutionState) -> None:
        # A not-found slug re-enters LOCATE directly; record it once.
        if not self.states or self.states[-1] is not state:
            self.states.append(state)

    def attempt(self, identifier: str) -> None:
        self.tried.append(identifier)

    def note(self, message: str) -> None:
        self.notes.append(message)

    def record_error(self, identifier: str, exc: BaseException) -> None:
        self.last_error = f"{type(exc).__name__}: {exc}"
        self.notes.append(f"{identifier}: {self.last_error}")

    def record_rejection(self, identifier: str, reason: str) -> None:
        self.last_error = f"rejected {identifier}: {reason}"
        self.notes.append(self.last_error)

    @property
    def state_names(self) -> list[str]:
        return [state.name for state in self.states]


__all__ = ["Diagnostics", "ResolutionState"]
