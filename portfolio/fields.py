"""Canonical holding fields and the header text that maps onto them.

Export files from different sources name the same column differently, so a
header row is translated once per file into a list of canonical fields and
data rows are then read positionally against that list.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, List, Sequence

logger = logging.getLogger(__name__)


class CanonicalField(Enum):
    ACCOUNT_NAME = "account_name"
    ACCOUNT_NUMBER = "account_number"
    AVERAGE_COST_BASIS = "average_cost_basis"
    COST_BASIS_TOTAL = "cost_basis_total"
    COMPANY_NAME = "company_name"
    CURRENT_VALUE = "current_value"
    DESCRIPTION = "description"
    DIVIDEND_COVERAGE_EPS_NEXT_YEAR = "dividend_coverage_eps_next_year"
    DIVIDEND_COVERAGE_EPS_TTM = "dividend_coverage_eps_ttm"
    DIVIDEND_GROWTH_5YR = "dividend_growth_5yr"
    DIVIDEND_GROWTH_YOY = "dividend_growth_yoy"
    DIVIDEND_PAYOUT_LAST_QUARTER = "dividend_payout_last_quarter"
    DIVIDEND_PAY_DATE = "dividend_pay_date"
    DIVIDEND_PER_SHARE = "dividend_per_share"
    DIVIDEND_YIELD = "dividend_yield"
    ESTIMATED_ANNUAL_INCOME = "estimated_annual_income"
    EXCHANGE = "exchange"
    EX_DATE = "ex_date"
    LAST_PRICE = "last_price"
    LAST_PRICE_CHANGE = "last_price_change"
    PERCENT_OF_ACCOUNT = "percent_of_account"
    QUANTITY = "quantity"
    SECURITY_TYPE = "security_type"
    SYMBOL = "symbol"
    TODAYS_GAIN_LOSS_DOLLAR = "todays_gain_loss_dollar"
    TODAYS_GAIN_LOSS_PERCENT = "todays_gain_loss_percent"
    TOTAL_GAIN_LOSS_DOLLAR = "total_gain_loss_dollar"
    TOTAL_GAIN_LOSS_PERCENT = "total_gain_loss_percent"
    TYPE = "type"
    UNKNOWN = "unknown"


HEADER_MAP: Dict[str, CanonicalField] = {
    "Account Number": CanonicalField.ACCOUNT_NUMBER,
    "Account Name": CanonicalField.ACCOUNT_NAME,
    "Amount Per Share": CanonicalField.DIVIDEND_PER_SHARE,
    "Average Cost Basis": CanonicalField.AVERAGE_COST_BASIS,
    "Company Name": CanonicalField.COMPANY_NAME,
    "Cost Basis Total": CanonicalField.COST_BASIS_TOTAL,
    "Current Value": CanonicalField.CURRENT_VALUE,
    "Description": CanonicalField.DESCRIPTION,
    "Dividend": CanonicalField.DIVIDEND_PER_SHARE,
    "Dividend Coverage (EPS Next Yr/IAD)": CanonicalField.DIVIDEND_COVERAGE_EPS_NEXT_YEAR,
    "Dividend Coverage (EPS TTM/IAD)": CanonicalField.DIVIDEND_COVERAGE_EPS_TTM,
    "Dividend Growth Rate (5 Year Avg)": CanonicalField.DIVIDEND_GROWTH_5YR,
    "Dividend Growth Rate (IAD to Prior Yr)": CanonicalField.DIVIDEND_GROWTH_YOY,
    "Dividend Payout % (Last Quarter)": CanonicalField.DIVIDEND_PAYOUT_LAST_QUARTER,
    "Dividend Yield": CanonicalField.DIVIDEND_YIELD,
    "Est. Annual Income": CanonicalField.ESTIMATED_ANNUAL_INCOME,
    "Ex-Date": CanonicalField.EX_DATE,
    "Ex. Dividend Date (Upcoming)": CanonicalField.EX_DATE,
    "Exchange": CanonicalField.EXCHANGE,
    "Last Price": CanonicalField.LAST_PRICE,
    "Last Price Change": CanonicalField.LAST_PRICE_CHANGE,
    "Pay Date": CanonicalField.DIVIDEND_PAY_DATE,
    "Percent Of Account": CanonicalField.PERCENT_OF_ACCOUNT,
    "Quantity": CanonicalField.QUANTITY,
    "Security Price": CanonicalField.LAST_PRICE,
    "Security Type": CanonicalField.SECURITY_TYPE,
    "Symbol": CanonicalField.SYMBOL,
    "Today's Gain/Loss Dollar": CanonicalField.TODAYS_GAIN_LOSS_DOLLAR,
    "Today's Gain/Loss Percent": CanonicalField.TODAYS_GAIN_LOSS_PERCENT,
    "Total Gain/Loss Dollar": CanonicalField.TOTAL_GAIN_LOSS_DOLLAR,
    "Total Gain/Loss Percent": CanonicalField.TOTAL_GAIN_LOSS_PERCENT,
    "Type": CanonicalField.TYPE,
    "Yield": CanonicalField.DIVIDEND_YIELD,
}


def map_header(header: str) -> CanonicalField:
    """Exact-match lookup; unknown headers are logged and map to UNKNOWN."""
    field = HEADER_MAP.get(header, CanonicalField.UNKNOWN)
    if field is CanonicalField.UNKNOWN:
        logger.warning("Field: %s is unknown", header)
    return field


def map_row(header_row: Sequence[str]) -> List[CanonicalField]:
    return [map_header(h) for h in header_row]


def symbol_index(fields: Sequence[CanonicalField]) -> int | None:
    """Position of the first symbol column, or None when the file has none."""
    for i, f in enumerate(fields):
        if f is CanonicalField.SYMBOL:
            return i
    return None
