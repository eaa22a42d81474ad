"""
modules/planning/candidate_scoring.py
----------------------------------------
Multi-criteria ranking of candidate POIs (and costing of events).

Score per candidate (starts at 0):

    budget fit   +35 / +22 / +12   cost ≤ 30 % / 50 % / 70 % of the activity allotment
    archetype    ARCHETYPE_AFFINITY[archetype][category]   (default 5)
    rating       rating × 8        (missing rating counts as 4.0)
    interest     +30 on a match, −5 when interests are given but none match
    weather      −15 unfavorable / −5 moderate for the category's label
    tie-break    stable_tiebreak(id) ∈ [0, 0.99]

The tie-break is a truncated SHA-1 of the candidate id.  It is NOT a source
of randomness: the same id always yields the same offset, so ordering is
reproducible across runs and processes.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from goaguide import config
from goaguide.modules.planning.budget_planner import BudgetPlanner
from goaguide.modules.planning.cost_estimator import estimate_activity_cost, estimate_event_cost
from goaguide.modules.planning.weather_impact import category_suitability
from goaguide.schemas.trip import (
    CandidateActivity,
    CandidateEvent,
    Category,
    Interest,
    TripArchetype,
    TripParameters,
)
from goaguide.schemas.weather import Suitability, WeatherImpact

logger = logging.getLogger(__name__)

_BUDGET_BANDS: list[tuple[float, float]] = [(0.30, 35.0), (0.50, 22.0), (0.70, 12.0)]
_RATING_WEIGHT = 8.0
_DEFAULT_RATING = 4.0
_INTEREST_BONUS = 30.0
_INTEREST_MISS_PENALTY = -5.0
_DEFAULT_AFFINITY = 5.0

_WEATHER_ADJUSTMENT: dict[Suitability, float] = {
    Suitability.FAVORABLE:   0.0,
    Suitability.MODERATE:    -5.0,
    Suitability.UNFAVORABLE: -15.0,
}

ARCHETYPE_AFFINITY: dict[TripArchetype, dict[Category, float]] = {
    TripArchetype.FAMILY:    {Category.BEACH: 15, Category.HISTORICAL: 10, Category.NATURE: 10, Category.RELIGIOUS: 5},
    TripArchetype.SOLO:      {Category.BEACH: 10, Category.HISTORICAL: 15, Category.NATURE: 15, Category.ADVENTURE: 20},
    TripArchetype.COUPLE:    {Category.BEACH: 20, Category.HISTORICAL: 10, Category.NATURE: 15, Category.ENTERTAINMENT: 10},
    TripArchetype.FRIENDS:   {Category.BEACH: 20, Category.ENTERTAINMENT: 20, Category.ADVENTURE: 15},
    TripArchetype.ADVENTURE: {Category.NATURE: 25, Category.ADVENTURE: 25, Category.BEACH: 10},
    TripArchetype.BUSINESS:  {Category.HISTORICAL: 10, Category.ENTERTAINMENT: 15, Category.NATURE: 5},
}

# Ordered: the first category is the interest's primary one.
INTEREST_CATEGORIES: dict[Interest, tuple[Category, ...]] = {
    Interest.BEACHES:          (Category.BEACH,),
    Interest.HISTORICAL_SITES: (Category.HISTORICAL, Category.RELIGIOUS),
    Interest.ADVENTURE_SPORTS: (Category.ADVENTURE, Category.NATURE),
    Interest.NIGHTLIFE:        (Category.ENTERTAINMENT,),
    Interest.NATURE_WILDLIFE:  (Category.NATURE,),
    Interest.SHOPPING:         (Category.MARKET,),
}


def interest_categories(tags: Iterable[str]) -> list[Category]:
    """
    Categories implied by the traveller's interest tags, in tag order,
    de-duplicated.  A tag that names a category directly ("beach") maps to
    it; unknown tags are ignored.
    """
    ordered: list[Category] = []
    for tag in tags:
        interest = Interest.parse(tag)
        if interest is not None:
            cats: tuple[Category, ...] = INTEREST_CATEGORIES[interest]
        else:
            cat = Category.parse(tag)
            if cat is Category.OTHER and tag.strip().lower() != Category.OTHER.value:
                logger.debug("Ignoring unknown interest tag %r", tag)
                continue
            cats = (cat,)
        for cat in cats:
            if cat not in ordered:
                ordered.append(cat)
    return ordered


def stable_tiebreak(identity: str) -> float:
    """Deterministic offset in [0, 0.99] derived from the candidate id."""
    digest = hashlib.sha1(identity.encode("utf-8")).hexdigest()
    return (int(digest[:8], 16) % 100) / 100.0


class CandidateScorer:
    """Ranks a candidate pool for one trip under one weather assessment."""

    def __init__(self, budget_planner: Optional[BudgetPlanner] = None) -> None:
        self.budget_planner = budget_planner or BudgetPlanner()

    # ── Public ────────────────────────────────────────────────────────────────

    def score_all(
        self,
        candidates: list[CandidateActivity],
        trip: TripParameters,
        impact: WeatherImpact,
    ) -> list[CandidateActivity]:
        """Return scored copies sorted descending by score (ties by id)."""
        activity_budget = self.budget_planner.activity_budget(trip)
        wanted = set(interest_categories(trip.interests))
        scored = [
            self._score_one(c, trip, activity_budget, wanted, impact)
            for c in candidates
        ]
        return sorted(scored, key=lambda c: (-c.score, c.id))

    def cost_events(
        self,
        events: list[CandidateEvent],
        trip: TripParameters,
        now: datetime,
    ) -> list[CandidateEvent]:
        """Keep future events only, each carrying its party-scaled cost."""
        return [
            replace(e, estimated_cost=estimate_event_cost(e, trip.party_size))
            for e in sorted(events, key=lambda e: (e.start, e.id))
            if _is_future(e.start, now)
        ]

    # ── Internal ──────────────────────────────────────────────────────────────

    def _score_one(
        self,
        candidate: CandidateActivity,
        trip: TripParameters,
        activity_budget: float,
        wanted: set[Category],
        impact: WeatherImpact,
    ) -> CandidateActivity:
        cost = estimate_activity_cost(candidate, trip.party_size)
        score = 0.0

        for share, bonus in _BUDGET_BANDS:
            if cost <= activity_budget * share:
                score += bonus
                break

        score += ARCHETYPE_AFFINITY[trip.archetype].get(candidate.category, _DEFAULT_AFFINITY)

        rating = candidate.rating if candidate.rating is not None else _DEFAULT_RATING
        score += rating * _RATING_WEIGHT

        if wanted:
            score += _INTEREST_BONUS if candidate.category in wanted else _INTEREST_MISS_PENALTY

        score += _WEATHER_ADJUSTMENT[category_suitability(candidate.category, impact)]
        score += stable_tiebreak(candidate.id)

        return replace(candidate, score=round(score, 4), estimated_cost=cost)


def _is_future(start: datetime, now: datetime) -> bool:
    """Naive times on either side are destination-local wall clock."""
    local = ZoneInfo(config.LOCAL_TIMEZONE)
    if start.tzinfo is None and now.tzinfo is not None:
        now = now.astimezone(local).replace(tzinfo=None)
    elif start.tzinfo is not None and now.tzinfo is None:
        now = now.replace(tzinfo=local)
    return start > now
