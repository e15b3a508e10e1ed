"""Output files written after each decision step, overwritten every run."""
from __future__ import annotations

from pathlib import Path
from typing import List

from common.tabular import Row, format_value, write_rows
from engine.allocation_engine import AllocationPlan
from engine.sell_engine import SellSummary
from policy.types import BuyExclusion
from portfolio.holding import HoldingRecord

SELL_FILE = "sellItems.csv"
EXCLUSIONS_FILE = "RemovedScreenerResults.csv"
FILTERED_FILE = "FilteredScreenerResults.csv"
BUY_FILE = "BuyItems.csv"

SELL_HEADER = ["Symbol", "Description", "Company Name", "Percent Gain", "Dividend Yield",
               "CostBasisYield", "Dividend SellPoint", "Amount Gained", "CostBasis", "Est Yearly Income"]
EXCLUSIONS_HEADER = ["Symbol", "Reason", "Dividend", "Last Price", "Already Invested"]
FILTERED_HEADER = ["Symbol", "Yield"]
BUY_HEADER = ["Symbol", "Shares To Buy", "Amount Spent", "Running Total", "Yield", "Already Owned"]


def _cells(*values: object) -> Row:
    return [format_value(v) for v in values]


def sell_rows(summaries: List[SellSummary]) -> List[Row]:
    rows = [list(SELL_HEADER)]
    for s in summaries:
        rows.append(_cells(s.symbol, s.description, s.company_name, s.gain_percent, s.dividend_yield,
                           s.cost_basis_yield, s.sell_point, s.gain_dollar, s.cost_basis, s.estimated_income))
    return rows


def exclusion_rows(exclusions: List[BuyExclusion]) -> List[Row]:
    rows = [list(EXCLUSIONS_HEADER)]
    for e in exclusions:
        rows.append(_cells(e.symbol, e.reason.value, e.dividend, e.price, e.current_value))
    return rows


def filtered_rows(candidates: List[HoldingRecord]) -> List[Row]:
    return [list(FILTERED_HEADER)] + [_cells(c.symbol, c.dividend_yield_percent) for c in candidates]


def purchase_rows(plan: AllocationPlan) -> List[Row]:
    rows = [list(BUY_HEADER)]
    for p in plan.purchases:
        rows.append(_cells(p.symbol, p.shares, p.padded_cost, p.running_total, p.dividend_yield, p.already_held))
    return rows


def export_sells(output_dir: Path, summaries: List[SellSummary]) -> Path:
    path = output_dir / SELL_FILE
    write_rows(path, sell_rows(summaries))
    return path


def export_exclusions(output_dir: Path, exclusions: List[BuyExclusion]) -> Path:
    path = output_dir / EXCLUSIONS_FILE
    write_rows(path, exclusion_rows(exclusions))
    return path


def export_filtered(output_dir: Path, candidates: List[HoldingRecord]) -> Path:
    path = output_dir / FILTERED_FILE
    write_rows(path, filtered_rows(candidates))
    return path


def export_purchases(output_dir: Path, plan: AllocationPlan) -> Path:
    path = output_dir / BUY_FILE
    write_rows(path, purchase_rows(plan))
    return path
