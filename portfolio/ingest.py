"""Build the record store from the export files in the input folder.

Each file's first row is its header; it is mapped to canonical fields once
and every following row is merged into the record for its symbol.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from common.config_loader import AdvisorPaths
from common.spreadsheet import convert_xls_files
from common.tabular import Row, read_rows
from policy.ingest_policy import IngestPolicy
from policy.tax_policy import TaxPolicy
from portfolio.cooldown import CooldownTracker
from portfolio.field_rules import FieldParseError
from portfolio.fields import map_row, symbol_index
from portfolio.record_store import RecordStore

logger = logging.getLogger(__name__)


class IngestError(Exception):
    """Nothing usable could be ingested; the run cannot continue."""


@dataclass
class RowError:
    file: str
    line: int
    message: str

    def __str__(self) -> str:
        return f"{self.file}:{self.line}: {self.message}"


@dataclass
class IngestResult:
    store: RecordStore
    tracker: CooldownTracker
    files: List[Path] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    errors: List[RowError] = field(default_factory=list)


def normalize_symbol(symbol: str, pol: IngestPolicy, warnings: Optional[List[str]] = None) -> str:
    if "/" not in symbol:
        return symbol
    aliases = pol.symbol_aliases
    if symbol in aliases:
        return aliases[symbol]
    msg = f"Need to convert symbol {symbol}"
    logger.warning(msg)
    if warnings is not None:
        warnings.append(msg)
    return symbol


def ingest_rows(
    store: RecordStore,
    rows: Sequence[Row],
    pol: IngestPolicy,
    source: str = "<rows>",
    warnings: Optional[List[str]] = None,
    errors: Optional[List[RowError]] = None,
) -> int:
    """Merge one file's rows (header first) into ``store``.

    Returns the number of data rows merged. A row with an unparseable value
    is rejected and reported through ``errors``; under a strict policy the
    FieldParseError propagates instead.
    """
    if not rows:
        return 0
    fields = map_row(rows[0])
    sym_idx = symbol_index(fields)
    if sym_idx is None:
        msg = f"{source}: no symbol column, skipping {len(rows) - 1} rows"
        logger.warning(msg)
        if warnings is not None:
            warnings.append(msg)
        return 0

    sentinels = pol.sentinel_symbols
    merged = 0
    for line_no, row in enumerate(rows[1:], start=2):
        if sym_idx >= len(row):
            logger.warning("%s:%d: row has no symbol cell", source, line_no)
            continue
        raw_symbol = row[sym_idx]
        if raw_symbol in sentinels:
            continue
        symbol = normalize_symbol(raw_symbol, pol, warnings)
        try:
            store.upsert_row(symbol, zip(fields, row))
        except FieldParseError as e:
            if pol.strict:
                raise
            logger.warning("%s:%d: %s; row skipped", source, line_no, e)
            if errors is not None:
                errors.append(RowError(source, line_no, str(e)))
            continue
        merged += 1
    return merged


def list_input_files(input_dir: Path) -> List[Path]:
    return sorted(p for p in input_dir.iterdir() if p.is_file() and p.name.endswith(".csv"))


def ingest_folder(
    paths: AdvisorPaths,
    raw_policy: dict,
    today: Optional[date] = None,
    converter: Callable[[Path], object] = convert_xls_files,
) -> IngestResult:
    """Run the full ingest: convert, parse, merge, sort, derive, apply cooldowns.

    Raises IngestError when there are no input files or no records.
    """
    today = today or date.today()
    ingest_pol = IngestPolicy(raw_policy)
    tax_pol = TaxPolicy(raw_policy)

    if not paths.input_dir.is_dir():
        raise IngestError(f"Input folder {paths.input_dir} does not exist")
    converter(paths.input_dir)
    files = list_input_files(paths.input_dir)
    if not files:
        raise IngestError("Failed to find any investment data files")

    result = IngestResult(store=RecordStore(), tracker=CooldownTracker(), files=files)
    for f in files:
        rows = read_rows(f)
        if rows is None:
            msg = f"{f.name}: no data, skipped"
            logger.warning(msg)
            result.warnings.append(msg)
            continue
        n = ingest_rows(result.store, rows, ingest_pol, f.name, result.warnings, result.errors)
        logger.info("Merged %d rows from %s", n, f.name)

    if len(result.store) == 0:
        raise IngestError("Failed to parse any data from investment info files")

    result.store.sort_by_symbol()
    result.store.compute_cost_basis_yields()

    result.tracker = CooldownTracker.load(paths.cooldown_file)
    flagged = result.tracker.apply_to_store(
        result.store, today, retain_active=tax_pol.retain_active_entries
    )
    if flagged:
        logger.info("Cooldown applies to %s", ", ".join(flagged))
    return result
