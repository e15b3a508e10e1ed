from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Any, FrozenSet

# non-tradable ledger lines: cash sweep and pending activity
DEFAULT_SENTINEL_SYMBOLS = ("FCASH**", "Pending Activity")

# class-share symbols some reports write with a slash
DEFAULT_SYMBOL_ALIASES = {
    "GTLS/PB": "GTLSPRB",
    "GEF/B": "GEFB",
    "GTN/A": "GTNA",
    "GRP/U": "GRPU",
}

@dataclass(frozen=True)
class IngestPolicy:
    raw: Dict[str, Any]

    @property
    def sentinel_symbols(self) -> FrozenSet[str]:
        return frozenset(self.raw.get("ingest", {}).get("sentinel_symbols", DEFAULT_SENTINEL_SYMBOLS))

    @property
    def symbol_aliases(self) -> Dict[str, str]:
        aliases = self.raw.get("ingest", {}).get("symbol_aliases")
        if aliases is None:
            return dict(DEFAULT_SYMBOL_ALIASES)
        return {str(k): str(v) for k, v in aliases.items()}

    @property
    def strict(self) -> bool:
        """Let a bad numeric or date cell abort the whole run."""
        return bool(self.raw.get("ingest", {}).get("strict", False))
