"""Buy screening: drop records that fail a rule, rank the rest by yield."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from policy.buy_policy import BuyPolicy
from policy.types import BuyExclusion, ExclusionReason
from portfolio.holding import HoldingRecord

logger = logging.getLogger(__name__)


@dataclass
class BuyScreen:
    candidates: List[HoldingRecord]  # ranked, highest yield first
    exclusions: List[BuyExclusion] = field(default_factory=list)


def exclusion_reason(
    record: HoldingRecord,
    pol: BuyPolicy,
    budget: float,
) -> Optional[ExclusionReason]:
    """First rule the record fails, checked in a fixed order; None if it passes."""
    padded = pol.padded_price(record.last_price)

    if record.dividend_per_share == 0:
        return ExclusionReason.ZERO_DIVIDEND
    if record.last_price == 0:
        return ExclusionReason.ZERO_PRICE
    if not pol.min_dividend_yield <= record.dividend_yield_percent <= pol.max_dividend_yield:
        return ExclusionReason.DIVIDEND_YIELD
    if record.exchange in pol.excluded_exchanges:
        return ExclusionReason.EXCHANGE
    if record.sold_within_cooldown_window:
        return ExclusionReason.COOLDOWN
    if record.is_limited_partnership(pol.limited_partnership_token):
        return ExclusionReason.LIMITED_PARTNERSHIP
    if record.last_price < pol.min_stock_price:
        return ExclusionReason.MIN_STOCK_PRICE
    if padded > pol.max_position_value - record.current_value:
        return ExclusionReason.MAX_AMOUNT_INVESTED
    if padded > budget:
        return ExclusionReason.AVAILABLE_TO_INVEST
    if record.symbol in pol.prohibited_symbols:
        return ExclusionReason.PROHIBITED_LIST
    return None


def rank_by_yield(records: Iterable[HoldingRecord]) -> List[HoldingRecord]:
    # stable: equal yields keep their incoming order
    return sorted(records, key=lambda r: r.dividend_yield_percent, reverse=True)


def screen_candidates(
    records: Iterable[HoldingRecord],
    pol: BuyPolicy,
    budget: Optional[float] = None,
) -> BuyScreen:
    budget = pol.available_to_invest if budget is None else budget

    passed: List[HoldingRecord] = []
    exclusions: List[BuyExclusion] = []
    for r in records:
        reason = exclusion_reason(r, pol, budget)
        if reason is None:
            passed.append(r)
            continue
        logger.debug("Excluding %s: %s", r.symbol, reason.value)
        exclusions.append(BuyExclusion(r.symbol, reason, r.dividend_per_share, r.last_price, r.current_value))

    return BuyScreen(candidates=rank_by_yield(passed), exclusions=exclusions)
