"""Conversion of legacy spreadsheet exports into comma-separated text.

Some brokerages only offer ``.xls`` downloads. Each workbook found in the
input folder is converted to a ``.csv`` file with the same stem, and the
workbook is removed once the conversion succeeded.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import pandas as pd

logger = logging.getLogger(__name__)


def csv_path_for(xls_path: Path) -> Path:
    return xls_path.with_suffix(".csv")


def xls_to_csv(xls_path: str | Path) -> Path:
    """Convert one workbook (first sheet) and delete the original.

    Raises whatever pandas raises when the workbook cannot be read; the
    original file is left in place in that case.
    """
    src = Path(xls_path)
    dest = csv_path_for(src)
    df = pd.read_excel(src, dtype=str, keep_default_na=False)
    df.to_csv(dest, index=False)
    src.unlink()
    logger.info("Converted %s -> %s", src.name, dest.name)
    return dest


def convert_xls_files(directory: str | Path) -> List[Path]:
    """Convert every ``.xls`` file (any case) in a directory."""
    converted: List[Path] = []
    for f in sorted(Path(directory).iterdir()):
        if f.is_file() and f.suffix.lower() == ".xls":
            converted.append(xls_to_csv(f))
    return converted
