"""Sell decisions for holdings that have outgrown their dividend.

A held position is sold when it is a limited partnership, or when its gain
has run well past its cost-basis yield (or that yield is too low) and no
ex-dividend date is about to pay out.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional

from policy.sell_policy import SellPolicy, ex_date_allows_sell
from policy.tax_policy import TaxPolicy
from portfolio.cooldown import CooldownEntry, CooldownTracker
from portfolio.holding import HoldingRecord
from portfolio.record_store import RecordStore


@dataclass(frozen=True)
class SellSummary:
    """One line of the sell report."""

    symbol: str
    description: str
    company_name: str
    gain_percent: float
    dividend_yield: float
    cost_basis_yield: float  # rounded to 2 places
    sell_point: float
    gain_dollar: float
    cost_basis: float
    estimated_income: float


@dataclass
class SellDecision:
    candidates: List[HoldingRecord]
    summaries: List[SellSummary] = field(default_factory=list)


def is_sell_candidate(record: HoldingRecord, pol: SellPolicy, today: date) -> bool:
    if not record.is_held:
        return False

    # partnerships mean a tax filing in every state they operate in
    if record.is_limited_partnership(pol.limited_partnership_token):
        return True

    cb_yield = record.cost_basis_dividend_yield_percent
    if cb_yield <= 0:
        return False
    outgrown = record.total_gain_loss_percent >= pol.sell_point(cb_yield)
    if not (outgrown or cb_yield < pol.min_dividend_yield):
        return False
    return ex_date_allows_sell(record.ex_dividend_date, today, pol.min_days_from_ex_date)


def summarize(record: HoldingRecord, pol: SellPolicy) -> SellSummary:
    return SellSummary(
        symbol=record.symbol,
        description=record.description,
        company_name=record.company_name,
        gain_percent=record.total_gain_loss_percent,
        dividend_yield=record.dividend_yield_percent,
        cost_basis_yield=round(record.cost_basis_dividend_yield_percent, 2),
        sell_point=pol.sell_point(record.cost_basis_dividend_yield_percent),
        gain_dollar=record.total_gain_loss_dollar,
        cost_basis=record.cost_basis_total,
        estimated_income=record.estimated_annual_income,
    )


def determine_sells(
    store: RecordStore,
    pol: SellPolicy,
    today: Optional[date] = None,
) -> SellDecision:
    today = today or date.today()
    candidates = [r for r in store if is_sell_candidate(r, pol, today)]
    return SellDecision(candidates=candidates, summaries=[summarize(r, pol) for r in candidates])


def execute_sells(
    store: RecordStore,
    tracker: CooldownTracker,
    sold: Iterable[HoldingRecord],
    tax: TaxPolicy,
    today: Optional[date] = None,
    cooldown_file: Optional[Path] = None,
) -> List[CooldownEntry]:
    """Record confirmed sales in the store and the cooldown tracker.

    Loss sales get a cooldown entry. Every sold record is flagged and has its
    value and gain zeroed so it is neither bought back nor sold again this
    run. When ``cooldown_file`` is given the full tracker list is written to
    it. Returns the new cooldown entries.
    """
    today = today or date.today()
    updated: List[HoldingRecord] = []
    entries: List[CooldownEntry] = []
    for item in sold:
        live = store.find(item.symbol)
        if live is None:
            continue
        if live.total_gain_loss_percent < 0:
            entries.append(CooldownEntry(live.symbol, tax.buying_allowed_date(today)))
        live.sold_within_cooldown_window = True
        live.total_gain_loss_percent = 0.0
        live.total_gain_loss_dollar = 0.0
        live.current_value = 0.0
        updated.append(live)

    store.upsert_many(updated)
    tracker.add(entries)
    if cooldown_file is not None:
        tracker.save(cooldown_file)
    return entries
