"""
modules/planning/budget_alternatives.py
-----------------------------------------
Over-budget remediation strategies.

Each strategy works on its own deep copy of the base plan (never chained):

  remove_expensive: walk the days; while a day pushes the running total
                    over its cumulative share of the budget, drop its most
                    expensive entry.  Then, while the trip is still over
                    budget, drop the most expensive entry of any day.  A
                    day never loses its last entry.
  replace_cheaper:  flat CHEAPER_DISCOUNT off every non-zero-cost entry.
  reduce_duration:  drop the final day (skipped for one-day trips).

savings = base total − alternative total.  A strategy that saves nothing
is still returned; its zero savings marks it as ineffective.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import replace
from typing import Optional

from goaguide import config
from goaguide.modules.planning.day_scheduler import DayScheduler
from goaguide.schemas.itinerary import Alternative, AlternativeStrategy, DayPlan, total_cost

logger = logging.getLogger(__name__)

_DESCRIPTIONS: dict[AlternativeStrategy, str] = {
    AlternativeStrategy.REMOVE_EXPENSIVE: "Remove most expensive activities to fit budget",
    AlternativeStrategy.REPLACE_CHEAPER:  "Replace activities with budget-friendly alternatives",
    AlternativeStrategy.REDUCE_DURATION:  "Reduce trip duration by one day",
}


class BudgetAlternativeGenerator:

    def __init__(
        self,
        day_scheduler: Optional[DayScheduler] = None,
        discount: float = config.CHEAPER_DISCOUNT,
    ) -> None:
        self.day_scheduler = day_scheduler or DayScheduler()
        self.discount      = discount

    def generate(self, days: list[DayPlan], budget_limit: float) -> list[Alternative]:
        """Up to three alternatives; empty when the plan already fits."""
        base_total = total_cost(days)
        if base_total <= budget_limit:
            return []

        alternatives = [
            self._build(AlternativeStrategy.REMOVE_EXPENSIVE,
                        self.remove_expensive(copy.deepcopy(days), budget_limit), base_total),
            self._build(AlternativeStrategy.REPLACE_CHEAPER,
                        self.replace_cheaper(copy.deepcopy(days)), base_total),
        ]
        if len(days) > 1:
            alternatives.append(self._build(
                AlternativeStrategy.REDUCE_DURATION, copy.deepcopy(days[:-1]), base_total,
            ))
        return alternatives

    # ── Strategies (mutate and return the copy they are given) ───────────────

    def remove_expensive(self, days: list[DayPlan], budget_limit: float) -> list[DayPlan]:
        if not days:
            return days
        day_share = budget_limit / len(days)

        running = 0.0
        for i, day in enumerate(days):
            target = day_share * (i + 1)
            while running + day.estimated_cost > target and len(day.activities) > 1:
                self._drop_most_expensive(day)
            running += day.estimated_cost

        while total_cost(days) > budget_limit:
            trimmable = [d for d in days if len(d.activities) > 1]
            if not trimmable:
                break
            worst = max(trimmable, key=lambda d: max(e.cost for e in d.activities))
            self._drop_most_expensive(worst)
        return days

    def replace_cheaper(self, days: list[DayPlan]) -> list[DayPlan]:
        factor = 1.0 - self.discount
        for day in days:
            for entry in day.activities:
                if entry.cost > 0:
                    entry.source = replace(entry.source, estimated_cost=round(entry.cost * factor, 2))
                    entry.notes = ". ".join(p for p in (entry.notes, "Switched to budget option") if p)
            self.day_scheduler.recost_day(day)
        return days

    # ── Internal ──────────────────────────────────────────────────────────────

    def _drop_most_expensive(self, day: DayPlan) -> None:
        idx = max(range(len(day.activities)), key=lambda i: day.activities[i].cost)
        removed = day.activities.pop(idx)
        logger.debug("remove_expensive: day %d drops %s", day.day, removed.source.id)
        self.day_scheduler.reflow_day(day)

    @staticmethod
    def _build(strategy: AlternativeStrategy, days: list[DayPlan], base_total: float) -> Alternative:
        return Alternative(
            strategy=strategy,
            description=_DESCRIPTIONS[strategy],
            days=days,
            savings=round(base_total - total_cost(days), 2),
        )
