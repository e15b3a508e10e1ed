"""Tests for sell decisions and sell execution."""
from __future__ import annotations

from datetime import date, timedelta

import pytest

from common.tabular import read_rows
from engine.sell_engine import determine_sells, execute_sells, is_sell_candidate
from policy.sell_policy import SellPolicy, ex_date_allows_sell
from policy.tax_policy import TaxPolicy
from portfolio.cooldown import CooldownEntry, CooldownTracker
from portfolio.fields import CanonicalField as F
from portfolio.holding import HoldingRecord
from portfolio.record_store import RecordStore

TODAY = date(2026, 10, 18)
POLICY = SellPolicy({})


def make_record(**kw) -> HoldingRecord:
    """A held record with a 5% cost-basis yield and a 10% gain."""
    base = dict(
        symbol="O",
        current_value=500.0,
        cost_basis_dividend_yield_percent=5.0,
        total_gain_loss_percent=10.0,
    )
    base.update(kw)
    return HoldingRecord(**base)


def make_store(rows) -> RecordStore:
    store = RecordStore()
    for symbol, values in rows:
        store.upsert_row(symbol, values)
    store.compute_cost_basis_yields()
    return store


class TestSellPredicate:
    """Tests for sell eligibility."""

    def test_gain_past_sell_point_sells(self):
        """10% gain >= 5% * 1.30 with no ex-date."""
        assert is_sell_candidate(make_record(), POLICY, TODAY)

    def test_ex_date_inside_window_holds(self):
        r = make_record(ex_dividend_date=TODAY + timedelta(days=2))
        assert not is_sell_candidate(r, POLICY, TODAY)

    @pytest.mark.parametrize("days", [0, 5])
    def test_ex_date_window_bounds_inclusive(self, days):
        r = make_record(ex_dividend_date=TODAY + timedelta(days=days))
        assert not is_sell_candidate(r, POLICY, TODAY)

    @pytest.mark.parametrize("days", [-1, 6, 40])
    def test_ex_date_outside_window_sells(self, days):
        r = make_record(ex_dividend_date=TODAY + timedelta(days=days))
        assert is_sell_candidate(r, POLICY, TODAY)

    def test_gain_below_sell_point_keeps(self):
        assert not is_sell_candidate(make_record(total_gain_loss_percent=6.4), POLICY, TODAY)

    def test_gain_exactly_at_sell_point_sells(self):
        pol = SellPolicy({"sell": {"dividend_sell_multiplier": 2.0}})
        r = make_record(cost_basis_dividend_yield_percent=5.0, total_gain_loss_percent=10.0)
        assert is_sell_candidate(r, pol, TODAY)

    def test_low_cost_basis_yield_sells(self):
        r = make_record(cost_basis_dividend_yield_percent=3.0, total_gain_loss_percent=-5.0)
        assert is_sell_candidate(r, POLICY, TODAY)

    def test_zero_cost_basis_yield_keeps(self):
        r = make_record(cost_basis_dividend_yield_percent=0.0, total_gain_loss_percent=50.0)
        assert not is_sell_candidate(r, POLICY, TODAY)

    def test_limited_partnership_sells(self):
        r = make_record(company_name="Enterprise Products Partners LP",
                        cost_basis_dividend_yield_percent=7.0, total_gain_loss_percent=0.0)
        assert is_sell_candidate(r, POLICY, TODAY)

    def test_limited_partnership_case_insensitive(self):
        r = make_record(description="MAGELLAN MIDSTREAM PARTNERS lp", cost_basis_dividend_yield_percent=0.0)
        assert is_sell_candidate(r, POLICY, TODAY)

    def test_not_held_never_sold(self):
        assert not is_sell_candidate(make_record(current_value=0.0), POLICY, TODAY)
        lp = make_record(current_value=0.0, company_name="Some Partners LP")
        assert not is_sell_candidate(lp, POLICY, TODAY)

    def test_configured_multiplier(self):
        pol = SellPolicy({"sell": {"dividend_sell_multiplier": 3.0}})
        assert not is_sell_candidate(make_record(), pol, TODAY)


class TestExDateRule:
    def test_missing_ex_date_allows(self):
        assert ex_date_allows_sell(None, TODAY, 5)


class TestDetermineSells:
    """Tests for the sell decision over a store."""

    def test_candidates_and_summaries(self):
        store = make_store([
            ("O", [(F.CURRENT_VALUE, "500"), (F.AVERAGE_COST_BASIS, "40"), (F.COST_BASIS_TOTAL, "400"),
                   (F.ESTIMATED_ANNUAL_INCOME, "20"), (F.TOTAL_GAIN_LOSS_PERCENT, "+25%"),
                   (F.TOTAL_GAIN_LOSS_DOLLAR, "$100"), (F.DIVIDEND_YIELD, "4%")]),
            ("KO", [(F.CURRENT_VALUE, "500"), (F.AVERAGE_COST_BASIS, "40"), (F.COST_BASIS_TOTAL, "400"),
                    (F.ESTIMATED_ANNUAL_INCOME, "24"), (F.TOTAL_GAIN_LOSS_PERCENT, "1%")]),
        ])

        decision = determine_sells(store, POLICY, TODAY)

        assert [r.symbol for r in decision.candidates] == ["O"]
        s = decision.summaries[0]
        assert s.cost_basis_yield == 5.0
        assert s.sell_point == pytest.approx(6.5)
        assert s.gain_dollar == 100.0
        assert s.cost_basis == 400.0
        assert s.estimated_income == 20.0

    def test_cost_basis_yield_rounded(self):
        store = make_store([
            ("O", [(F.CURRENT_VALUE, "500"), (F.AVERAGE_COST_BASIS, "30"), (F.COST_BASIS_TOTAL, "300"),
                   (F.ESTIMATED_ANNUAL_INCOME, "10"), (F.TOTAL_GAIN_LOSS_PERCENT, "50%")]),
        ])
        s = determine_sells(store, POLICY, TODAY).summaries[0]
        assert s.cost_basis_yield == 3.33


class TestExecuteSells:
    """Tests for applying confirmed sales."""

    def make_store(self) -> RecordStore:
        return make_store([
            ("A", [(F.CURRENT_VALUE, "100"), (F.TOTAL_GAIN_LOSS_PERCENT, "-4%"), (F.TOTAL_GAIN_LOSS_DOLLAR, "-$4")]),
            ("B", [(F.CURRENT_VALUE, "100"), (F.TOTAL_GAIN_LOSS_PERCENT, "12%"), (F.TOTAL_GAIN_LOSS_DOLLAR, "$12")]),
            ("C", [(F.CURRENT_VALUE, "100")]),
        ])

    def test_loss_sale_creates_cooldown_entry(self, tmp_path):
        store = self.make_store()
        tracker = CooldownTracker()
        path = tmp_path / "cooldown.csv"

        entries = execute_sells(store, tracker, [store.find("A"), store.find("B")],
                                TaxPolicy({}), TODAY, cooldown_file=path)

        assert [e.symbol for e in entries] == ["A"]
        assert entries[0].buying_allowed_date == TODAY
        assert read_rows(path) == [["A", TODAY.isoformat()]]

    def test_sold_records_zeroed_and_flagged(self):
        store = self.make_store()
        execute_sells(store, CooldownTracker(), [store.find("A"), store.find("B")], TaxPolicy({}), TODAY)

        for symbol in ("A", "B"):
            r = store.find(symbol)
            assert r.sold_within_cooldown_window
            assert r.current_value == 0
            assert r.total_gain_loss_percent == 0
            assert r.total_gain_loss_dollar == 0
        assert not store.find("C").sold_within_cooldown_window
        assert store.symbols() == ["C", "A", "B"]

    def test_gain_only_sales_write_nothing(self, tmp_path):
        store = self.make_store()
        path = tmp_path / "cooldown.csv"
        execute_sells(store, CooldownTracker(), [store.find("B")], TaxPolicy({}), TODAY, cooldown_file=path)
        assert not path.exists()

    def test_existing_entries_persisted_with_new(self, tmp_path):
        store = self.make_store()
        tracker = CooldownTracker([CooldownEntry("OLD", date(2026, 1, 2))])
        path = tmp_path / "cooldown.csv"
        execute_sells(store, tracker, [store.find("A")], TaxPolicy({}), TODAY, cooldown_file=path)
        assert [r[0] for r in read_rows(path)] == ["OLD", "A"]

    def test_unknown_symbol_ignored(self):
        store = self.make_store()
        entries = execute_sells(store, CooldownTracker(), [HoldingRecord(symbol="ZZZ", total_gain_loss_percent=-1)],
                                TaxPolicy({}), TODAY)
        assert entries == []
        assert len(store) == 3
