from __future__ import annotations
from typing import List
from engine.allocation_engine import Purchase
from engine.sell_engine import SellSummary
from policy.types import BuyExclusion

def explain_sells(summaries: List[SellSummary]) -> List[str]:
    return [
        f"SELL {s.symbol}  |  gain {s.gain_percent:.2f}% vs sell point {s.sell_point:.2f}%"
        f" (cost-basis yield {s.cost_basis_yield:.2f}%)"
        for s in summaries
    ]

def explain_purchases(purchases: List[Purchase]) -> List[str]:
    return [
        f"{p}  |  yield {p.dividend_yield:.2f}%{' (adds to position)' if p.already_held else ''}"
        f"  running ${p.running_total:,.2f}"
        for p in purchases
    ]

def explain_exclusions(exclusions: List[BuyExclusion]) -> List[str]:
    return [f"{e.symbol}: {e.reason.value}" for e in exclusions]
