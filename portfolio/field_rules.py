"""Per-field parsing rules applied while merging export rows into records.

Each canonical field maps to the record attribute it fills and a pure
transform from the raw cell text. A transform returns ``ABSENT`` when the
cell carries no value and the attribute must be left alone. Fields that are
recognized but not kept map to ``None``.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Dict, Optional

from dateutil import parser as date_parser

from portfolio.fields import CanonicalField

PLACEHOLDERS = ("", "--")


class _Absent:
    def __repr__(self) -> str:
        return "ABSENT"


ABSENT: Any = _Absent()


class FieldParseError(ValueError):
    """A cell value could not be converted for its canonical field."""

    def __init__(self, field: CanonicalField, raw: str, symbol: str = ""):
        self.field = field
        self.raw = raw
        self.symbol = symbol
        where = f" for {symbol}" if symbol else ""
        super().__init__(f"Cannot parse {field.value} value {raw!r}{where}")


def _strip(raw: str, chars: str) -> str:
    return "".join(c for c in raw if c not in chars)


def _to_float(text: str) -> float:
    # exports group thousands with commas
    return float(text.replace(",", ""))


def text(raw: str) -> str:
    return raw


def currency(raw: str) -> float:
    value = _strip(raw, "$")
    if value in PLACEHOLDERS:
        return 0.0
    return _to_float(value)


def percent(raw: str) -> float:
    value = _strip(raw, "%+")
    if value in PLACEHOLDERS:
        return 0.0
    return _to_float(value)


def optional_number(raw: str) -> Any:
    value = _strip(raw, "%$")
    if value in PLACEHOLDERS:
        return ABSENT
    return _to_float(value)


def price(raw: str) -> Any:
    value = _strip(raw, "$")
    if value in PLACEHOLDERS:
        return ABSENT
    return _to_float(value)


def calendar_date(raw: str) -> Any:
    if raw.strip() in PLACEHOLDERS:
        return ABSENT
    return parse_date(raw)


# two unrelated defaults: a part the text leaves out shows up as a difference
_FILL_A = datetime(2001, 1, 1)
_FILL_B = datetime(2002, 2, 2)


def parse_date(raw: str) -> date:
    """Parse a full calendar date; a value missing its year, month or day is rejected."""
    first = date_parser.parse(raw, default=_FILL_A).date()
    if first != date_parser.parse(raw, default=_FILL_B).date():
        raise ValueError(f"incomplete date {raw!r}")
    return first


@dataclass(frozen=True)
class FieldRule:
    attribute: str
    transform: Callable[[str], Any]


FIELD_RULES: Dict[CanonicalField, Optional[FieldRule]] = {
    CanonicalField.ACCOUNT_NAME: FieldRule("account_name", text),
    CanonicalField.AVERAGE_COST_BASIS: FieldRule("average_cost_basis", currency),
    CanonicalField.COMPANY_NAME: FieldRule("company_name", text),
    CanonicalField.COST_BASIS_TOTAL: FieldRule("cost_basis_total", currency),
    CanonicalField.CURRENT_VALUE: FieldRule("current_value", currency),
    CanonicalField.DESCRIPTION: FieldRule("description", text),
    CanonicalField.DIVIDEND_COVERAGE_EPS_NEXT_YEAR: FieldRule("dividend_coverage_eps_next_year", optional_number),
    CanonicalField.DIVIDEND_COVERAGE_EPS_TTM: FieldRule("dividend_coverage_eps_ttm", optional_number),
    CanonicalField.DIVIDEND_GROWTH_5YR: FieldRule("dividend_growth_5yr", optional_number),
    CanonicalField.DIVIDEND_GROWTH_YOY: FieldRule("dividend_growth_yoy", optional_number),
    CanonicalField.DIVIDEND_PAYOUT_LAST_QUARTER: FieldRule("dividend_payout_last_quarter", optional_number),
    CanonicalField.DIVIDEND_PER_SHARE: FieldRule("dividend_per_share", currency),
    CanonicalField.DIVIDEND_YIELD: FieldRule("dividend_yield_percent", percent),
    CanonicalField.ESTIMATED_ANNUAL_INCOME: FieldRule("estimated_annual_income", currency),
    CanonicalField.EXCHANGE: FieldRule("exchange", text),
    CanonicalField.EX_DATE: FieldRule("ex_dividend_date", calendar_date),
    CanonicalField.LAST_PRICE: FieldRule("last_price", price),
    CanonicalField.SECURITY_TYPE: FieldRule("security_type", text),
    CanonicalField.TOTAL_GAIN_LOSS_DOLLAR: FieldRule("total_gain_loss_dollar", currency),
    CanonicalField.TOTAL_GAIN_LOSS_PERCENT: FieldRule("total_gain_loss_percent", percent),
    # symbol is set when the record is created, already normalized
    CanonicalField.SYMBOL: None,
    # recognized, not kept
    CanonicalField.ACCOUNT_NUMBER: None,
    CanonicalField.DIVIDEND_PAY_DATE: None,
    CanonicalField.LAST_PRICE_CHANGE: None,
    CanonicalField.PERCENT_OF_ACCOUNT: None,
    CanonicalField.QUANTITY: None,
    CanonicalField.TODAYS_GAIN_LOSS_DOLLAR: None,
    CanonicalField.TODAYS_GAIN_LOSS_PERCENT: None,
    CanonicalField.TYPE: None,
    CanonicalField.UNKNOWN: None,
}


def convert(field: CanonicalField, raw: str, symbol: str = "") -> Any:
    """Run the rule for ``field``; ABSENT when there is nothing to assign."""
    rule = FIELD_RULES.get(field)
    if rule is None:
        return ABSENT
    try:
        return rule.transform(raw)
    except (ValueError, OverflowError) as e:
        raise FieldParseError(field, raw, symbol) from e
