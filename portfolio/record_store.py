"""In-memory set of holding records keyed by symbol.

Callers only ever receive copies; live records change through the store's
own operations.
"""
from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from portfolio.field_rules import ABSENT, FIELD_RULES, convert
from portfolio.fields import CanonicalField
from portfolio.holding import HoldingRecord


class RecordStore:
    def __init__(self) -> None:
        self._records: List[HoldingRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[HoldingRecord]:
        for r in self._records:
            yield r.copy()

    def __contains__(self, symbol: object) -> bool:
        return self._index_of(str(symbol)) is not None

    def _index_of(self, symbol: str) -> Optional[int]:
        for i, r in enumerate(self._records):
            if r.symbol == symbol:
                return i
        return None

    def _live(self, symbol: str) -> Optional[HoldingRecord]:
        i = self._index_of(symbol)
        return None if i is None else self._records[i]

    def records(self) -> List[HoldingRecord]:
        return list(self)

    def symbols(self) -> List[str]:
        return [r.symbol for r in self._records]

    def find(self, symbol: str) -> Optional[HoldingRecord]:
        r = self._live(symbol)
        return None if r is None else r.copy()

    def upsert_row(
        self,
        symbol: str,
        values: Iterable[Tuple[CanonicalField, str]],
    ) -> HoldingRecord:
        """Merge one export row into the record for ``symbol``.

        Every value is converted before anything is assigned, so a
        FieldParseError leaves the store exactly as it was.
        """
        updates: Dict[str, object] = {}
        for field, raw in values:
            value = convert(field, raw, symbol)
            if value is ABSENT:
                continue
            rule = FIELD_RULES[field]  # convert only returns a value for kept fields
            updates[rule.attribute] = value

        record = self._live(symbol)
        if record is None:
            record = HoldingRecord(symbol=symbol)
            self._records.append(record)
        for attr, value in updates.items():
            setattr(record, attr, value)
        return record.copy()

    def upsert_many(self, records: Iterable[HoldingRecord]) -> int:
        """Replace existing records by symbol; the replacement moves to the end.

        Records whose symbol is not in the store are ignored. Returns the
        number of records replaced.
        """
        replaced = 0
        for incoming in records:
            i = self._index_of(incoming.symbol)
            if i is None:
                continue
            del self._records[i]
            self._records.append(incoming.copy())
            replaced += 1
        return replaced

    def sort_by_symbol(self) -> None:
        self._records.sort(key=lambda r: r.symbol)

    def compute_cost_basis_yields(self) -> None:
        for r in self._records:
            r.compute_cost_basis_yield()

    def mark_cooldown(self, symbol: str) -> bool:
        r = self._live(symbol)
        if r is None:
            return False
        r.sold_within_cooldown_window = True
        return True
