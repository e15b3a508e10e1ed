"""Budget allocation.

Turns a ranked candidate list into whole-share purchases. Prices are padded
by the safety margin so a price move between planning and placing the order
does not overspend the budget.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, List

from policy.buy_policy import BuyPolicy
from portfolio.holding import HoldingRecord


@dataclass(frozen=True)
class Purchase:
    """A recommended share purchase."""

    symbol: str
    shares: int
    padded_cost: float
    running_total: float
    dividend_yield: float
    already_held: bool

    def __str__(self) -> str:
        """Format purchase for display."""
        return f"BUY {self.shares} {self.symbol} ${self.padded_cost:,.2f}"


@dataclass
class AllocationPlan:
    budget: float
    purchases: List[Purchase] = field(default_factory=list)
    actual_spent: float = 0.0
    padded_spent: float = 0.0

    @property
    def leftover(self) -> float:
        return self.budget - self.padded_spent


def shares_affordable(ceiling: float, padded_price: float) -> int:
    if ceiling <= 0 or padded_price <= 0:
        return 0
    return int(math.floor(ceiling / padded_price))


def allocate(
    candidates: Iterable[HoldingRecord],
    pol: BuyPolicy,
    budget: float | None = None,
) -> AllocationPlan:
    """Greedy single pass over ``candidates`` in the given order.

    A candidate that cannot afford a share is skipped without reducing the
    remaining budget, so cheaper candidates further down can still be bought.
    """
    budget = pol.available_to_invest if budget is None else budget
    plan = AllocationPlan(budget=budget)
    remaining = budget

    for r in candidates:
        ceiling = min(remaining, pol.max_position_value - r.current_value)
        padded_price = pol.padded_price(r.last_price)
        shares = shares_affordable(ceiling, padded_price)
        if shares == 0:
            continue

        padded_cost = shares * padded_price
        remaining -= padded_cost
        plan.actual_spent += shares * r.last_price
        plan.padded_spent += padded_cost
        plan.purchases.append(Purchase(
            symbol=r.symbol,
            shares=shares,
            padded_cost=padded_cost,
            running_total=plan.padded_spent,
            dividend_yield=r.dividend_yield_percent,
            already_held=r.is_held,
        ))

    return plan
