"""One advisor run: ingest the exports, decide sells, then decide buys.

Sells have to be confirmed before they are applied; buying is planned
against the store as it stands after any confirmed sells.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from common.config_loader import LoadedConfig
from engine.allocation_engine import AllocationPlan, allocate
from engine.buy_engine import BuyScreen, screen_candidates
from engine.sell_engine import SellDecision, determine_sells, execute_sells
from policy.buy_policy import BuyPolicy
from policy.sell_policy import SellPolicy
from policy.tax_policy import TaxPolicy
from portfolio.cooldown import CooldownEntry
from portfolio.ingest import IngestResult, ingest_folder
from reporting import exports
from reporting.summary import allocation_summary


@dataclass
class BuyRecommendation:
    """Screening outcome plus the share purchases that fit the budget."""

    screen: BuyScreen
    plan: AllocationPlan
    summary: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Advisor:
    config: LoadedConfig
    ingest: IngestResult
    today: date
    pending_sells: Optional[SellDecision] = None

    @classmethod
    def load(cls, config: LoadedConfig, today: Optional[date] = None, **ingest_kwargs: Any) -> "Advisor":
        """Create the folder layout and ingest every export. Raises IngestError."""
        today = today or date.today()
        config.paths.ensure()
        result = ingest_folder(config.paths, config.policy, today, **ingest_kwargs)
        return cls(config=config, ingest=result, today=today)

    @property
    def store(self):
        return self.ingest.store

    @property
    def warnings(self) -> List[str]:
        return self.ingest.warnings + [str(e) for e in self.ingest.errors]

    def determine_sells(self) -> SellDecision:
        decision = determine_sells(self.store, SellPolicy(self.config.policy), self.today)
        exports.export_sells(self.config.paths.output_dir, decision.summaries)
        self.pending_sells = decision
        return decision

    def sell(self) -> List[CooldownEntry]:
        """Apply the pending sell decision; call only once the sales happened."""
        if not self.pending_sells or not self.pending_sells.candidates:
            return []
        entries = execute_sells(
            self.store,
            self.ingest.tracker,
            self.pending_sells.candidates,
            TaxPolicy(self.config.policy),
            self.today,
            cooldown_file=self.config.paths.cooldown_file,
        )
        self.pending_sells = None
        return entries

    def determine_buys(self, budget: Optional[float] = None) -> BuyRecommendation:
        pol = BuyPolicy(self.config.policy)
        budget = pol.available_to_invest if budget is None else budget
        out = self.config.paths.output_dir

        screen = screen_candidates(self.store, pol, budget)
        exports.export_exclusions(out, screen.exclusions)
        exports.export_filtered(out, screen.candidates)

        plan = allocate(screen.candidates, pol, budget)
        exports.export_purchases(out, plan)

        summary = allocation_summary(plan)
        summary["candidates"] = len(screen.candidates)
        summary["excluded"] = len(screen.exclusions)
        return BuyRecommendation(screen=screen, plan=plan, summary=summary)
