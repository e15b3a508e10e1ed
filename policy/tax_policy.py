from __future__ import annotations
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Any

DEFAULT_WASH_SALE_DAYS = 32

@dataclass(frozen=True)
class TaxPolicy:
    raw: Dict[str, Any]

    @property
    def wash_sale_days(self) -> int:
        return int(self.raw.get("cooldown", {}).get("wash_sale_days", DEFAULT_WASH_SALE_DAYS))

    @property
    def apply_window_offset(self) -> bool:
        """Off: a loss sale is recorded with today's date as the buy-again date."""
        return bool(self.raw.get("cooldown", {}).get("apply_window_offset", False))

    @property
    def retain_active_entries(self) -> bool:
        """Off: only already-matured cooldown entries are tracked at load time."""
        return bool(self.raw.get("cooldown", {}).get("retain_active_entries", False))

    def buying_allowed_date(self, today: date) -> date:
        if self.apply_window_offset:
            return today + timedelta(days=self.wash_sale_days)
        return today
