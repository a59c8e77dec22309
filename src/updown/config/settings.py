"""Configuration models and loading utilities for the up/down resolver."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

import structlog
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger(__name__)


class GammaSettings(BaseSettings):
    """Polymarket Gamma API used for market discovery."""

    model_config = SettingsConfigDict(env_prefix="UPDOWN_GAMMA_", env_file=".env", extra="ignore")

    base_url: str = Field(
        "https://gamma-api.polymarket.com",
        description="Gamma API base URL.",
    )
    timeout_seconds: float = Field(12.0, description="Per-request timeout for discovery calls.")


class ClobSettings(BaseSettings):
    """Polymarket CLOB API used for prices and server time."""

    model_config = SettingsConfigDict(env_prefix="UPDOWN_CLOB_", env_file=".env", extra="ignore")

    base_url: str = Field(
        "https://clob.polymarket.com",
        description="CLOB API base URL.",
    )
    timeout_seconds: float = Field(12.0, description="Per-request timeout for price calls.")
    time_timeout_seconds: float = Field(
        5.0,
        description="Timeout for the server time endpoint; kept short since it only syncs the clock.",
    )


class ResolverSettings(BaseSettings):
    """Behaviour of the market resolution pipeline."""

    model_config = SettingsConfigDict(env_prefix="UPDOWN_", env_file=".env", extra="ignore")

    strategy: Literal["slug", "search"] = Field(
        "slug",
        description="Market locator strategy: deterministic slug guessing or full-text search.",
    )
    min_search_candidates: int = Field(
        25,
        ge=1,
        description="Stop issuing search queries once this many valid records were collected.",
    )
    min_search_score: int = Field(
        5,
        ge=0,
        description="Minimum relevance score for a searched record to be selectable.",
    )
    use_server_time: bool = Field(
        True,
        description="Use the CLOB server clock for window math instead of the local clock.",
    )
    max_attempts: int = Field(
        2,
        ge=1,
        description="Attempts per HTTP request for transport errors and 5xx responses.",
    )


@dataclass(slots=True)
class Settings:
    """Aggregated application settings loaded from environment variables."""

    gamma: GammaSettings
    clob: ClobSettings
    resolver: ResolverSettings
    log_level: str = "INFO"
    log_json: bool = True

    @classmethod
    def from_env(cls) -> Settings:
        """Hydrate the composed settings model from environment variables."""

        log_json_flag = os.getenv("LOG_JSON", "true").lower()
        log_json = log_json_flag in {"1", "true", "yes", "on"}

        log_level = os.getenv("LOG_LEVEL", "INFO")

        settings = cls(
            gamma=GammaSettings(),
            clob=ClobSettings(),
            resolver=ResolverSettings(),
            log_level=log_level,
            log_json=log_json,
        )
        logger.debug(
            "settings_loaded",
            strategy=settings.resolver.strategy,
            use_server_time=settings.resolver.use_server_time,
        )
        return settings


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create singleton settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


__all__ = [
    "ClobSettings",
    "GammaSettings",
    "ResolverSettings",
    "Settings",
    "get_settings",
]
