"""Symbols sold at a loss, kept off the buy list to avoid wash sales.

Entries live in a two-column tabular file (symbol, buying-allowed date) that
is rewritten in full after every batch of sales.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Iterable, List

from common.tabular import read_rows, write_rows
from portfolio.field_rules import parse_date
from portfolio.record_store import RecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CooldownEntry:
    symbol: str
    buying_allowed_date: date

    def is_active(self, today: date) -> bool:
        return today < self.buying_allowed_date

    def to_row(self) -> List[str]:
        return [self.symbol, self.buying_allowed_date.isoformat()]


@dataclass
class CooldownTracker:
    entries: List[CooldownEntry] = field(default_factory=list)

    @classmethod
    def load(cls, path: str | Path) -> "CooldownTracker":
        p = Path(path)
        if not p.exists():
            return cls()
        entries: List[CooldownEntry] = []
        for row in read_rows(p) or []:
            if len(row) < 2:
                logger.warning("Skipping malformed cooldown row %r in %s", row, p.name)
                continue
            try:
                allowed = parse_date(row[1])
            except (ValueError, OverflowError):
                logger.warning("Skipping cooldown row %r in %s: bad date", row, p.name)
                continue
            entries.append(CooldownEntry(row[0], allowed))
        return cls(entries)

    def apply_to_store(self, store: RecordStore, today: date, retain_active: bool = False) -> List[str]:
        """Flag store records that are under cooldown and narrow the tracked list.

        By default an entry is kept, and its record flagged, only when its
        buying-allowed date is already in the past. With ``retain_active``
        the entries still in their window are the ones kept and flagged.
        Entries without a matching record are dropped either way.
        Returns the flagged symbols.
        """
        kept: List[CooldownEntry] = []
        for entry in self.entries:
            tracked = entry.is_active(today) if retain_active else entry.buying_allowed_date < today
            if tracked and store.mark_cooldown(entry.symbol):
                kept.append(entry)
        self.entries = kept
        return [e.symbol for e in kept]

    def add(self, entries: Iterable[CooldownEntry]) -> None:
        self.entries.extend(entries)

    def save(self, path: str | Path) -> bool:
        """Rewrite the whole file; nothing is written for an empty list."""
        if not self.entries:
            return False
        write_rows(path, [e.to_row() for e in self.entries])
        return True

    def symbols(self) -> List[str]:
        return [e.symbol for e in self.entries]
