"""Tests for relevance scoring."""

from updown.domain import MarketRecord, get_asset, get_interval
from updown.matching import CandidateScorer, score_text

BTC = get_asset("btc")
FIVE_MIN = get_interval("5m")


def _record(title: str, slug: str = "") -> MarketRecord:
    return MarketRecord(title=title, identifier=slug)


def test_full_match_scores_alias_direction_interval():
    assert score_text("Bitcoin Up or Down - 5 minute", BTC, FIVE_MIN) == 5 + 3 + 2


def test_both_aliases_count():
    assert score_text("BTC (Bitcoin) up or down 5m", BTC, FIVE_MIN) == 5 + 5 + 3 + 2


def test_longer_interval_does_not_match_shorter_phrase():
    assert score_text("Bitcoin up or down 15 minute", BTC, FIVE_MIN) == 5 + 3
    assert score_text("btc-updown-15m-1700000100", BTC, FIVE_MIN) == 5 + 3


def test_unrelated_text_scores_zero():
    assert score_text("Will the election be decided by March?", BTC, FIVE_MIN) == 0


def test_scoring_is_deterministic():
    text = "Bitcoin Up or Down 5 minute"
    assert score_text(text, BTC, FIVE_MIN) == score_text(text, BTC, FIVE_MIN)


def test_select_highest_score():
    scorer = CandidateScorer(BTC, FIVE_MIN)
    records = [
        _record("Ethereum up or down 5 minute"),
        _record("Bitcoin up or down 5 minute"),
        _record("Bitcoin price on Friday"),
    ]

    assert scorer.select(records) == (1, 10)


def test_tie_goes_to_earliest():
    scorer = CandidateScorer(BTC, FIVE_MIN)
    records = [
        _record("Bitcoin up or down 5 minute", "first"),
        _record("Bitcoin up or down 5 minute", "second"),
    ]

    assert scorer.select(records) == (0, 10)


def test_below_min_score_selects_nothing():
    scorer = CandidateScorer(BTC, FIVE_MIN, min_score=5)

    assert scorer.select([_record("Up or down today")]) is None
    assert scorer.select([]) is None
