"""Test configuration and fixtures."""

import json
import sys
from pathlib import Path
from typing import Any

import pytest

# Ensure the src/ directory is on sys.path so `import updown` works without installation.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if SRC_PATH.exists():
    sys.path.insert(0, str(SRC_PATH))


class FakeDiscovery:
    """In-memory discovery service keyed by slug and by query."""

    def __init__(
        self,
        records: dict[str, Any] | None = None,
        search_results: dict[str, list[Any]] | None = None,
        errors: dict[str, Exception] | None = None,
    ) -> None:
        self.records = records or {}
        self.search_results = search_results or {}
        self.errors = errors or {}
        self.lookups: list[str] = []
        self.queries: list[str] = []

    async def get_by_identifier(self, identifier: str) -> Any:
        self.lookups.append(identifier)
        if identifier in self.errors:
            raise self.errors[identifier]
        return self.records.get(identifier)

    async def search_by_text(self, query: str) -> list[Any]:
        self.queries.append(query)
        if query in self.errors:
            raise self.errors[query]
        return list(self.search_results.get(query, []))


class FakePricing:
    """In-memory pricing service with optional failures."""

    def __init__(
        self,
        batch: dict[str, Any] | None = None,
        single: dict[str, Any] | None = None,
        batch_error: Exception | None = None,
        single_errors: dict[str, Exception] | None = None,
    ) -> None:
        self.batch = batch or {}
        self.single = single or {}
        self.batch_error = batch_error
        self.single_errors = single_errors or {}
        self.batch_calls: list[list[str]] = []
        self.single_calls: list[str] = []

    async def get_batch_prices(self, token_ids: list[str]) -> dict[str, Any]:
        self.batch_calls.append(list(token_ids))
        if self.batch_error is not None:
            raise self.batch_error
        return {k: v for k, v in self.batch.items() if k in token_ids}

    async def get_price(self, token_id: str) -> Any:
        self.single_calls.append(token_id)
        if token_id in self.single_errors:
            raise self.single_errors[token_id]
        return self.single.get(token_id)


def make_market(
    slug: str,
    question: str | None = None,
    token_ids: tuple[str, ...] = ("tok-up", "tok-down"),
    outcomes: tuple[str, ...] | None = ("Up", "Down"),
    encoded: bool = True,
    **overrides: Any,
) -> dict[str, Any]:
    """Gamma-shaped market payload; list fields JSON-encoded like the live API."""

    market: dict[str, Any] = {
        "id": slug,
        "slug": slug,
        "question": question or slug.replace("-", " "),
        "conditionId": f"0x{slug}",
        "active": True,
        "closed": False,
        "archived": False,
        "enableOrderBook": True,
        "clobTokenIds": json.dumps(list(token_ids)) if encoded else list(token_ids),
    }
    if outcomes is not None:
        market["outcomes"] = json.dumps(list(outcomes)) if encoded else list(outcomes)
    market.update(overrides)
    return market


@pytest.fixture
def discovery_factory():
    return FakeDiscovery


@pytest.fixture
def pricing_factory():
    return FakePricing


@pytest.fixture
def market_factory():
    return make_market
