from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

LP_TOKEN = " LP"

@dataclass
class HoldingRecord:
    """One ticker symbol merged from every export that mentions it."""

    symbol: str = ""
    company_name: str = ""
    security_type: str = ""
    exchange: str = ""
    account_name: str = ""
    description: str = ""

    average_cost_basis: float = 0.0
    cost_basis_total: float = 0.0
    current_value: float = 0.0
    last_price: float = 0.0
    dividend_per_share: float = 0.0
    dividend_yield_percent: float = 0.0
    cost_basis_dividend_yield_percent: float = 0.0  # derived after ingest
    estimated_annual_income: float = 0.0
    total_gain_loss_dollar: float = 0.0
    total_gain_loss_percent: float = 0.0

    # not every source reports these
    dividend_growth_5yr: Optional[float] = None
    dividend_growth_yoy: Optional[float] = None
    dividend_coverage_eps_next_year: Optional[float] = None
    dividend_coverage_eps_ttm: Optional[float] = None
    dividend_payout_last_quarter: Optional[float] = None

    ex_dividend_date: Optional[date] = None
    sold_within_cooldown_window: bool = False

    def copy(self) -> "HoldingRecord":
        return replace(self)

    @property
    def is_held(self) -> bool:
        return self.current_value > 0

    def is_limited_partnership(self, token: str = LP_TOKEN) -> bool:
        t = token.lower()
        return t in self.description.lower() or t in self.company_name.lower()

    def compute_cost_basis_yield(self) -> float:
        if self.average_cost_basis > 0 and self.cost_basis_total:
            self.cost_basis_dividend_yield_percent = (
                self.estimated_annual_income / self.cost_basis_total * 100
            )
        return self.cost_basis_dividend_yield_percent

    def __str__(self) -> str:
        return (
            f"{self.symbol} Price:{self.last_price} Amount:{self.current_value} "
            f"Change:{self.total_gain_loss_percent}% ${self.total_gain_loss_dollar} "
            f"Yield:{self.dividend_yield_percent}%"
        )
