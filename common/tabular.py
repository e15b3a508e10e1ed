"""Minimal delimited-text reader and writer for brokerage exports.

Quoting is deliberately narrow: a double quote toggles a quoted span and is
dropped from the field, a separator inside a quoted span is literal text, and
there is no way to escape a quote character inside a quoted span.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

logger = logging.getLogger(__name__)

SEPARATOR = ","
QUOTE = '"'

Row = List[str]

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def parse_line(line: Optional[str], separator: str = SEPARATOR) -> Optional[Row]:
    """Split one line into fields.

    Returns None for an empty line or a line made of nothing but separators.
    """
    if not line or not line.strip(separator):
        return None

    fields: Row = []
    current: List[str] = []
    quoted = False
    for ch in line:
        if ch == QUOTE:
            quoted = not quoted
        elif ch == separator and not quoted:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
    fields.append("".join(current))
    return fields


def _split_lines(text: str) -> List[str]:
    lines = _LINE_BREAK.split(text)
    # a trailing line break does not start another line
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def parse_rows(text: Optional[str], separator: str = SEPARATOR) -> Optional[List[Row]]:
    """Parse delimited text into rows of string fields.

    Parsing stops at the first line that cannot be parsed; rows after it are
    discarded. Returns None when the text is absent or yields no rows.
    """
    if not text:
        return None

    rows: List[Row] = []
    for line in _split_lines(text):
        fields = parse_line(line, separator)
        if fields is None:
            break
        rows.append(fields)

    return rows or None


def serialize_rows(rows: Iterable[Sequence[str]], separator: str = SEPARATOR) -> str:
    """Serialize rows, quoting any field that contains the separator."""
    out: List[str] = []
    for row in rows:
        cells = [f"{QUOTE}{f}{QUOTE}" if separator in f else f for f in row]
        out.append(separator.join(cells) + "\n")
    return "".join(out)


def read_rows(path: str | Path, separator: str = SEPARATOR) -> Optional[List[Row]]:
    """Read and parse a whole file; None when it is missing, unreadable or empty.

    Bytes that are not valid UTF-8 become U+FFFD instead of failing the file.
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8-sig", errors="replace")
    except (FileNotFoundError, IsADirectoryError, PermissionError) as e:
        logger.warning("Could not read %s: %s", p, e)
        return None
    return parse_rows(text, separator)


def write_rows(path: str | Path, rows: Iterable[Sequence[str]], separator: str = SEPARATOR) -> None:
    Path(path).write_text(serialize_rows(rows, separator), encoding="utf-8")


def format_value(value: object) -> str:
    """Render a cell value: integral floats without a decimal point, others round-trip."""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if value is None:
        return ""
    return str(value)
