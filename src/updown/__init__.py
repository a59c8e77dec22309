"""Resolver for recurring up/down prediction-market contracts."""

from updown.domain import ConfigurationError, ResolutionResult
from updown.resolution import ResolutionOrchestrator, build_orchestrator, resolve

__all__ = [
    "ConfigurationError",
    "ResolutionOrchestrator",
    "ResolutionResult",
    "build_orchestrator",
    "resolve",
]
