"""Tests for settings loading and service wiring."""

import pytest

from updown.config import ClobSettings, GammaSettings, ResolverSettings, Settings
from updown.domain import ConfigurationError
from updown.resolution import SearchLocator, SlugLocator, build_locator, build_orchestrator
from updown.timing import LocalClock, ServerClock


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Environment without resolver overrides or a stray .env file."""
    for name in (
        "UPDOWN_STRATEGY",
        "UPDOWN_MIN_SEARCH_CANDIDATES",
        "UPDOWN_MIN_SEARCH_SCORE",
        "UPDOWN_USE_SERVER_TIME",
        "UPDOWN_MAX_ATTEMPTS",
        "UPDOWN_GAMMA_BASE_URL",
        "UPDOWN_CLOB_TIME_TIMEOUT_SECONDS",
        "LOG_JSON",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def _settings(**resolver_overrides) -> Settings:
    return Settings(
        gamma=GammaSettings(),
        clob=ClobSettings(),
        resolver=ResolverSettings(**resolver_overrides),
    )


def test_defaults(clean_env):
    settings = Settings.from_env()

    assert settings.gamma.base_url == "https://gamma-api.polymarket.com"
    assert settings.clob.time_timeout_seconds == 5.0
    assert settings.resolver.strategy == "slug"
    assert settings.resolver.min_search_candidates == 25
    assert settings.resolver.min_search_score == 5
    assert settings.resolver.use_server_time is True
    assert settings.log_json is True


def test_environment_overrides(clean_env):
    clean_env.setenv("UPDOWN_STRATEGY", "search")
    clean_env.setenv("UPDOWN_MIN_SEARCH_CANDIDATES", "10")
    clean_env.setenv("UPDOWN_GAMMA_BASE_URL", "https://gamma.example")
    clean_env.setenv("UPDOWN_CLOB_TIME_TIMEOUT_SECONDS", "2.5")
    clean_env.setenv("LOG_JSON", "false")

    settings = Settings.from_env()

    assert settings.resolver.strategy == "search"
    assert settings.resolver.min_search_candidates == 10
    assert settings.gamma.base_url == "https://gamma.example"
    assert settings.clob.time_timeout_seconds == 2.5
    assert settings.log_json is False


def test_build_locator(clean_env, discovery_factory):
    settings = _settings(min_search_candidates=7, min_search_score=3)

    assert isinstance(build_locator("slug", discovery_factory(), settings), SlugLocator)
    search = build_locator("search", discovery_factory(), settings)
    assert isinstance(search, SearchLocator)
    assert (search.min_candidates, search.min_score) == (7, 3)


def test_unknown_strategy(clean_env, discovery_factory):
    with pytest.raises(ConfigurationError, match="Unknown strategy"):
        build_locator("guess", discovery_factory(), _settings())


def test_orchestrator_clock_selection(clean_env, discovery_factory, pricing_factory):
    time_service = object()

    with_server = build_orchestrator(
        discovery_factory(), pricing_factory(), time_service, settings=_settings()
    )
    local_only = build_orchestrator(
        discovery_factory(),
        pricing_factory(),
        time_service,
        settings=_settings(use_server_time=False),
    )
    no_service = build_orchestrator(discovery_factory(), pricing_factory(), settings=_settings())

    assert isinstance(with_server.clock, ServerClock)
    assert isinstance(local_only.clock, LocalClock)
    assert isinstance(no_service.clock, LocalClock)


def test_strategy_override(clean_env, discovery_factory, pricing_factory):
    orchestrator = build_orchestrator(
        discovery_factory(), pricing_factory(), settings=_settings(), strategy="search"
    )

    assert orchestrator.locator.strategy == "search"
