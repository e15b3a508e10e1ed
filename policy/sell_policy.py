from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Dict, Any, Optional
from portfolio.holding import LP_TOKEN

DEFAULT_SELL_MULTIPLIER = 1.30
DEFAULT_MIN_DAYS_FROM_EX_DATE = 5
DEFAULT_MIN_YIELD = 4.8

@dataclass(frozen=True)
class SellPolicy:
    raw: Dict[str, Any]

    @property
    def dividend_sell_multiplier(self) -> float:
        """Sell once total gain % reaches cost-basis yield times this."""
        return float(self.raw.get("sell", {}).get("dividend_sell_multiplier", DEFAULT_SELL_MULTIPLIER))

    @property
    def min_days_from_ex_date(self) -> int:
        return int(self.raw.get("sell", {}).get("min_days_from_ex_date", DEFAULT_MIN_DAYS_FROM_EX_DATE))

    @property
    def min_dividend_yield(self) -> float:
        return float(self.raw.get("dividend", {}).get("min_yield", DEFAULT_MIN_YIELD))

    @property
    def limited_partnership_token(self) -> str:
        return str(self.raw.get("dividend", {}).get("limited_partnership_token", LP_TOKEN))

    def sell_point(self, cost_basis_yield: float) -> float:
        return cost_basis_yield * self.dividend_sell_multiplier

def ex_date_allows_sell(ex_date: Optional[date], today: date, min_days: int) -> bool:
    """Only an ex-date between today and ``min_days`` out holds a sale back."""
    if ex_date is None:
        return True
    days = (ex_date - today).days
    return days < 0 or days > min_days
