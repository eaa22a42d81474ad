"""
modules/planning/budget_planner.py
------------------------------------
Archetype-driven budget allocation.

Each trip archetype splits the party's total budget into four shares
(accommodation / activities / food / transport, summing to 1.0).  Only the
activities share is consumed by the scheduler: it sizes the per-activity
allotment used by the scorer's budget-fit bands.

All monetary amounts are in INR (Indian Rupee).
"""

from __future__ import annotations

from dataclasses import dataclass

from goaguide.schemas.trip import TripArchetype, TripParameters


@dataclass(frozen=True)
class BudgetAllocation:
    accommodation: float
    activities: float
    food: float
    transport: float

    @property
    def total(self) -> float:
        return self.accommodation + self.activities + self.food + self.transport


ARCHETYPE_ALLOCATION: dict[TripArchetype, BudgetAllocation] = {
    TripArchetype.FAMILY:    BudgetAllocation(accommodation=0.40, activities=0.30, food=0.20, transport=0.10),
    TripArchetype.SOLO:      BudgetAllocation(accommodation=0.30, activities=0.40, food=0.15, transport=0.15),
    TripArchetype.COUPLE:    BudgetAllocation(accommodation=0.35, activities=0.35, food=0.20, transport=0.10),
    TripArchetype.FRIENDS:   BudgetAllocation(accommodation=0.30, activities=0.40, food=0.20, transport=0.10),
    TripArchetype.ADVENTURE: BudgetAllocation(accommodation=0.25, activities=0.50, food=0.15, transport=0.10),
    TripArchetype.BUSINESS:  BudgetAllocation(accommodation=0.50, activities=0.20, food=0.20, transport=0.10),
}


class BudgetPlanner:
    """Budget figures derived from trip parameters."""

    def allocation(self, archetype: TripArchetype) -> BudgetAllocation:
        return ARCHETYPE_ALLOCATION[archetype]

    def activity_budget(self, trip: TripParameters) -> float:
        """Party-level spend reserved for activities."""
        return trip.total_budget * self.allocation(trip.archetype).activities

    def day_budget(self, trip: TripParameters) -> float:
        """Per-day cost ceiling: total budget split evenly across the duration."""
        return trip.total_budget / max(trip.duration_days, 1)
