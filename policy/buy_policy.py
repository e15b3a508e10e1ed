from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Any, FrozenSet
from portfolio.holding import LP_TOKEN

DEFAULT_MIN_YIELD = 4.8
DEFAULT_MAX_YIELD = 6.5
DEFAULT_MIN_STOCK_PRICE = 3.62
DEFAULT_MAX_POSITION_VALUE = 100.0
DEFAULT_SAFETY_MARGIN = 0.10
DEFAULT_AVAILABLE_TO_INVEST = 437.21
DEFAULT_EXCLUDED_EXCHANGES = ("OTC",)
DEFAULT_PROHIBITED = (
    "ABEV", "ARKR", "AUBN", "BBVA", "BEP", "GLP", "HSQVY", "LRFC", "LX",
    "ORAN", "PFE", "PM", "SSRM", "STRW", "UBCP", "UNB", "UVV",
)

@dataclass(frozen=True)
class BuyPolicy:
    raw: Dict[str, Any]

    @property
    def min_dividend_yield(self) -> float:
        return float(self.raw.get("dividend", {}).get("min_yield", DEFAULT_MIN_YIELD))

    @property
    def max_dividend_yield(self) -> float:
        return float(self.raw.get("dividend", {}).get("max_yield", DEFAULT_MAX_YIELD))

    @property
    def min_stock_price(self) -> float:
        return float(self.raw.get("buy", {}).get("min_stock_price", DEFAULT_MIN_STOCK_PRICE))

    @property
    def max_position_value(self) -> float:
        """Most dollars to hold in any one symbol after buying."""
        return float(self.raw.get("buy", {}).get("max_position_value", DEFAULT_MAX_POSITION_VALUE))

    @property
    def safety_margin(self) -> float:
        return float(self.raw.get("buy", {}).get("safety_margin", DEFAULT_SAFETY_MARGIN))

    @property
    def available_to_invest(self) -> float:
        return float(self.raw.get("buy", {}).get("available_to_invest", DEFAULT_AVAILABLE_TO_INVEST))

    @property
    def excluded_exchanges(self) -> FrozenSet[str]:
        return frozenset(self.raw.get("buy", {}).get("excluded_exchanges", DEFAULT_EXCLUDED_EXCHANGES))

    @property
    def prohibited_symbols(self) -> FrozenSet[str]:
        return frozenset(self.raw.get("buy", {}).get("prohibited", DEFAULT_PROHIBITED))

    @property
    def limited_partnership_token(self) -> str:
        """Marker in a name or description that identifies a partnership; shared with selling."""
        return str(self.raw.get("dividend", {}).get("limited_partnership_token", LP_TOKEN))

    def padded_price(self, price: float) -> float:
        return price * (1 + self.safety_margin)
