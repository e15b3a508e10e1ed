from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict
import yaml

DEFAULT_CONFIG_PATH = "config/advisor_policy.yaml"

def load_yaml(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}

@dataclass(frozen=True)
class AdvisorPaths:
    """Directory layout: a base folder holding input/, data/ and output/."""

    base_dir: Path
    cooldown_file_name: str = "RecentlySoldItems.csv"

    @property
    def input_dir(self) -> Path:
        return self.base_dir / "input"

    @property
    def data_dir(self) -> Path:
        return self.base_dir / "data"

    @property
    def output_dir(self) -> Path:
        return self.base_dir / "output"

    @property
    def cooldown_file(self) -> Path:
        return self.data_dir / self.cooldown_file_name

    def ensure(self) -> None:
        for d in (self.base_dir, self.input_dir, self.data_dir, self.output_dir):
            d.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> "AdvisorPaths":
        section = raw.get("paths") or {}
        base = Path(str(section.get("base_dir", "~/DividendAdvisor"))).expanduser()
        return cls(
            base_dir=base,
            cooldown_file_name=str(section.get("cooldown_file", "RecentlySoldItems.csv")),
        )

@dataclass(frozen=True)
class LoadedConfig:
    policy: Dict[str, Any]
    paths: AdvisorPaths

def load_all(policy_path: str | Path = DEFAULT_CONFIG_PATH) -> LoadedConfig:
    raw = load_yaml(policy_path)
    return LoadedConfig(policy=raw, paths=AdvisorPaths.from_raw(raw))
