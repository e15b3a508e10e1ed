from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

class ExclusionReason(Enum):
    """Why a record was dropped from buy consideration, in check order."""

    ZERO_DIVIDEND = "Zero Dividend"
    ZERO_PRICE = "Zero Price"
    DIVIDEND_YIELD = "Dividend Yield"
    EXCHANGE = "Exchange"
    COOLDOWN = "Sold In Last 30 Days"
    LIMITED_PARTNERSHIP = "Limited Partnership"
    MIN_STOCK_PRICE = "Min Stock Price"
    MAX_AMOUNT_INVESTED = "Max Amount Invested"
    AVAILABLE_TO_INVEST = "Available To Invest"
    PROHIBITED_LIST = "Prohibited List"

@dataclass(frozen=True)
class BuyExclusion:
    symbol: str
    reason: ExclusionReason
    dividend: float
    price: float
    current_value: float
