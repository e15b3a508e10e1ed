"""Tests for buy screening and ranking."""
from __future__ import annotations

import pytest

from engine.buy_engine import exclusion_reason, rank_by_yield, screen_candidates
from policy.buy_policy import BuyPolicy
from policy.sell_policy import SellPolicy
from policy.types import ExclusionReason
from portfolio.holding import HoldingRecord

POLICY = BuyPolicy({})
BUDGET = 437.21


def make_record(**kw) -> HoldingRecord:
    """A record that passes every buy rule."""
    base = dict(
        symbol="O",
        dividend_per_share=3.08,
        last_price=20.0,
        dividend_yield_percent=5.5,
        exchange="NYSE",
    )
    base.update(kw)
    return HoldingRecord(**base)


def reason(**kw):
    return exclusion_reason(make_record(**kw), POLICY, BUDGET)


class TestExclusionRules:
    """Each rule on its own."""

    def test_passing_record(self):
        assert reason() is None

    @pytest.mark.parametrize("kw, expected", [
        ({"dividend_per_share": 0.0}, ExclusionReason.ZERO_DIVIDEND),
        ({"last_price": 0.0}, ExclusionReason.ZERO_PRICE),
        ({"dividend_yield_percent": 4.7}, ExclusionReason.DIVIDEND_YIELD),
        ({"dividend_yield_percent": 6.6}, ExclusionReason.DIVIDEND_YIELD),
        ({"exchange": "OTC"}, ExclusionReason.EXCHANGE),
        ({"sold_within_cooldown_window": True}, ExclusionReason.COOLDOWN),
        ({"company_name": "Brookfield Partners LP"}, ExclusionReason.LIMITED_PARTNERSHIP),
        ({"last_price": 3.50}, ExclusionReason.MIN_STOCK_PRICE),
        ({"current_value": 80.0}, ExclusionReason.MAX_AMOUNT_INVESTED),
        ({"last_price": 95.0}, ExclusionReason.MAX_AMOUNT_INVESTED),
        ({"symbol": "PFE"}, ExclusionReason.PROHIBITED_LIST),
    ])
    def test_rule(self, kw, expected):
        assert reason(**kw) is expected

    @pytest.mark.parametrize("y", [4.8, 6.5])
    def test_yield_bounds_inclusive(self, y):
        assert reason(dividend_yield_percent=y) is None

    def test_budget_rule(self):
        r = make_record(last_price=20.0)
        assert exclusion_reason(r, POLICY, 21.0) is ExclusionReason.AVAILABLE_TO_INVEST
        assert exclusion_reason(r, POLICY, 22.01) is None


class TestRuleOrder:
    """First failing rule wins."""

    def test_zero_dividend_before_price(self):
        assert reason(dividend_per_share=0.0, last_price=0.0) is ExclusionReason.ZERO_DIVIDEND

    def test_yield_before_exchange(self):
        assert reason(dividend_yield_percent=9.0, exchange="OTC") is ExclusionReason.DIVIDEND_YIELD

    def test_cooldown_before_prohibited(self):
        assert reason(symbol="PFE", sold_within_cooldown_window=True) is ExclusionReason.COOLDOWN


class TestScreenCandidates:
    """Tests for the whole screen."""

    def test_exclusions_recorded_for_audit(self):
        records = [
            make_record(symbol="A"),
            make_record(symbol="B", exchange="OTC", current_value=12.5, last_price=7.0),
        ]
        screen = screen_candidates(records, POLICY, BUDGET)

        assert [c.symbol for c in screen.candidates] == ["A"]
        e = screen.exclusions[0]
        assert (e.symbol, e.reason, e.dividend, e.price, e.current_value) == (
            "B", ExclusionReason.EXCHANGE, 3.08, 7.0, 12.5)

    def test_ranked_by_yield_descending(self):
        records = [
            make_record(symbol="LOW", dividend_yield_percent=4.9),
            make_record(symbol="HIGH", dividend_yield_percent=6.4),
            make_record(symbol="MID", dividend_yield_percent=5.5),
        ]
        screen = screen_candidates(records, POLICY, BUDGET)
        assert [c.symbol for c in screen.candidates] == ["HIGH", "MID", "LOW"]

    def test_ties_keep_incoming_order(self):
        records = [make_record(symbol=s, dividend_yield_percent=5.0) for s in ("C", "A", "B")]
        assert [r.symbol for r in rank_by_yield(records)] == ["C", "A", "B"]

    def test_default_budget_from_policy(self):
        pol = BuyPolicy({"buy": {"available_to_invest": 10.0}})
        screen = screen_candidates([make_record()], pol)
        assert screen.exclusions[0].reason is ExclusionReason.AVAILABLE_TO_INVEST

    def test_configured_prohibited_list(self):
        pol = BuyPolicy({"buy": {"prohibited": ["O"]}})
        screen = screen_candidates([make_record(symbol="O"), make_record(symbol="PFE")], pol, BUDGET)
        assert [c.symbol for c in screen.candidates] == ["PFE"]


class TestPartnershipMarker:
    """One configured marker drives both buying and selling."""

    def test_marker_from_dividend_section(self):
        raw = {"dividend": {"limited_partnership_token": " L.P."}}
        r = make_record(company_name="Brookfield Partners L.P.")

        assert exclusion_reason(r, BuyPolicy(raw), BUDGET) is ExclusionReason.LIMITED_PARTNERSHIP
        assert exclusion_reason(r, POLICY, BUDGET) is None
        assert SellPolicy(raw).limited_partnership_token == " L.P."
