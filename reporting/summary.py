from __future__ import annotations
from typing import Dict, Any
from engine.allocation_engine import AllocationPlan
from portfolio.record_store import RecordStore

def store_summary(store: RecordStore) -> Dict[str, Any]:
    records = store.records()
    return {
        "records": len(records),
        "held": sum(1 for r in records if r.is_held),
        "total_value": sum(r.current_value for r in records),
        "estimated_annual_income": sum(r.estimated_annual_income for r in records if r.is_held),
        "cooldown": [r.symbol for r in records if r.sold_within_cooldown_window],
    }

def allocation_summary(plan: AllocationPlan) -> Dict[str, Any]:
    return {
        "budget": plan.budget,
        "actual_spent": plan.actual_spent,
        "padded_spent": plan.padded_spent,
        "leftover": plan.leftover,
        "num_purchases": len(plan.purchases),
    }
