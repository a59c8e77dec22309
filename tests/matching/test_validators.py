"""Tests for market validation."""

import pytest

from updown.domain import MarketRecord
from updown.matching import MarketValidator


@pytest.fixture
def validator():
    return MarketValidator()


def test_valid_market_passes(validator, market_factory):
    record = MarketRecord.from_payload(market_factory("btc-updown-5m-1700000100"))

    result = validator.validate(record)

    assert result.passed
    assert result.up.token_id == "tok-up"
    assert result.down.token_id == "tok-down"
    assert result.positional is False


@pytest.mark.parametrize(
    "overrides,reason",
    [
        ({"closed": True}, "closed"),
        ({"archived": True}, "archived"),
        ({"active": False}, "inactive"),
        ({"enableOrderBook": False}, "order book disabled"),
    ],
)
def test_flagged_market_rejected(validator, market_factory, overrides, reason):
    record = MarketRecord.from_payload(market_factory("btc-updown-5m-1", **overrides))

    result = validator.validate(record)

    assert not result.passed
    assert result.reason == reason


def test_missing_flags_do_not_reject(validator):
    record = MarketRecord.from_payload({"slug": "x", "clobTokenIds": ["a", "b"]})

    assert validator.validate(record).passed


@pytest.mark.parametrize("encoded", [True, False])
def test_single_token_rejected(validator, market_factory, encoded):
    """Fewer than two ids fails whether ids arrive as a list or a JSON string."""
    payload = market_factory("btc-updown-5m-1", token_ids=("only",), encoded=encoded)

    result = validator.validate(MarketRecord.from_payload(payload))

    assert not result.passed
    assert result.reason == "expected 2 outcome tokens, found 1"


@pytest.mark.parametrize("raw_ids", ["[]", [], "not json"])
def test_no_tokens_rejected(validator, market_factory, raw_ids):
    """Empty or undecodable id lists leave the record with no tokens."""
    payload = market_factory("btc-updown-5m-1", clobTokenIds=raw_ids)

    result = validator.validate(MarketRecord.from_payload(payload))

    assert not result.passed
    assert result.reason == "expected 2 outcome tokens, found 0"


def test_duplicate_token_ids_count_once(validator, market_factory):
    payload = market_factory("btc-updown-5m-1", token_ids=("same", "same"))

    result = validator.validate(MarketRecord.from_payload(payload))

    assert not result.passed
    assert result.reason == "expected 2 outcome tokens, found 1"


def test_labels_select_tokens_regardless_of_order(validator, market_factory):
    payload = market_factory("btc-updown-5m-1", token_ids=("d", "u"), outcomes=("Down", "Up"))

    result = validator.validate(MarketRecord.from_payload(payload))

    assert result.up.token_id == "u"
    assert result.down.token_id == "d"
    assert result.positional is False


def test_yes_no_labels_accepted(validator, market_factory):
    payload = market_factory("btc-updown-5m-1", token_ids=("y", "n"), outcomes=("Yes", "No"))

    result = validator.validate(MarketRecord.from_payload(payload))

    assert (result.up.token_id, result.down.token_id) == ("y", "n")
    assert result.positional is False


def test_unlabelled_tokens_assigned_by_position(validator, market_factory):
    payload = market_factory("btc-updown-5m-1", token_ids=("first", "second"), outcomes=None)

    result = validator.validate(MarketRecord.from_payload(payload))

    assert result.passed
    assert (result.up.token_id, result.down.token_id) == ("first", "second")
    assert result.positional is True


def test_extra_tokens_truncated_by_default(validator, market_factory):
    payload = market_factory(
        "btc-updown-5m-1",
        token_ids=("a", "b", "c"),
        outcomes=("Other", "Another", "Up"),
    )

    result = validator.validate(MarketRecord.from_payload(payload))

    assert (result.up.token_id, result.down.token_id) == ("a", "b")
    assert result.positional is True


def test_extra_tokens_considered_without_truncation(market_factory):
    payload = market_factory(
        "btc-updown-5m-1",
        token_ids=("a", "b", "c"),
        outcomes=("Other", "Down", "Up"),
    )

    result = MarketValidator(truncate_extra_tokens=False).validate(
        MarketRecord.from_payload(payload)
    )

    assert (result.up.token_id, result.down.token_id) == ("c", "b")
    assert result.positional is False
