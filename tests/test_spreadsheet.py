"""Tests for .xls to .csv conversion (pandas reader stubbed out)."""
from __future__ import annotations

import pandas as pd
import pytest

from common import spreadsheet
from common.tabular import read_rows


@pytest.fixture
def fake_reader(monkeypatch):
    calls = []

    def read_excel(path, **kwargs):
        calls.append((path, kwargs))
        return pd.DataFrame({"Symbol": ["O", "KO"], "Yield": ["5.5%", "3.1%"]})

    monkeypatch.setattr(spreadsheet.pd, "read_excel", read_excel)
    return calls


def test_xls_converted_and_removed(tmp_path, fake_reader):
    src = tmp_path / "screener.xls"
    src.write_bytes(b"\xd0\xcf\x11\xe0")

    dest = spreadsheet.xls_to_csv(src)

    assert dest == tmp_path / "screener.csv"
    assert not src.exists()
    assert read_rows(dest) == [["Symbol", "Yield"], ["O", "5.5%"], ["KO", "3.1%"]]
    assert fake_reader[0][1]["dtype"] is str


def test_unreadable_workbook_left_in_place(tmp_path, monkeypatch):
    src = tmp_path / "bad.xls"
    src.write_bytes(b"junk")

    def read_excel(path, **kwargs):
        raise ValueError("not a workbook")

    monkeypatch.setattr(spreadsheet.pd, "read_excel", read_excel)
    with pytest.raises(ValueError):
        spreadsheet.xls_to_csv(src)
    assert src.exists()


def test_convert_folder_only_xls(tmp_path, fake_reader):
    (tmp_path / "a.XLS").write_bytes(b"x")
    (tmp_path / "b.xls").write_bytes(b"x")
    (tmp_path / "c.csv").write_text("Symbol\nO\n")

    converted = spreadsheet.convert_xls_files(tmp_path)

    assert [p.name for p in converted] == ["a.csv", "b.csv"]
    assert len(fake_reader) == 2
    assert sorted(p.name for p in tmp_path.iterdir()) == ["a.csv", "b.csv", "c.csv"]
