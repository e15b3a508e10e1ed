"""Shared fixtures: a throwaway advisor folder with export files."""
from __future__ import annotations

from pathlib import Path

import pytest

from common.config_loader import AdvisorPaths, LoadedConfig
from common.tabular import write_rows


@pytest.fixture
def paths(tmp_path: Path) -> AdvisorPaths:
    p = AdvisorPaths(base_dir=tmp_path / "advisor")
    p.ensure()
    return p


@pytest.fixture
def write_export(paths: AdvisorPaths):
    def _write(name: str, rows) -> Path:
        f = paths.input_dir / name
        write_rows(f, rows)
        return f
    return _write


@pytest.fixture
def config(paths: AdvisorPaths) -> LoadedConfig:
    return LoadedConfig(policy={}, paths=paths)
