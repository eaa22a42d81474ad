"""
modules/planning/cost_estimator.py
------------------------------------
Per-activity cost estimation (INR).

POIs:
    per_person = max(round(BASE[tier] × MULTIPLIER[category]), MINIMUM[category])
    cost       = per_person × party_size
    An unknown tier uses a flat 300 base.

Events:
    per_person = max(price or 0, inferred minimum spend)
    The minimum is inferred from title/description keywords:
        default 50 · "market" 100 · music/fest/concert/night 200 · "cruise" 300
    (later rules win).

Pure functions: no I/O, no failure modes.
"""

from __future__ import annotations

import re
from typing import Optional

from goaguide.schemas.trip import CandidateActivity, CandidateEvent, Category, PriceTier

_BASE_COST: dict[PriceTier, float] = {
    PriceTier.FREE:      0,
    PriceTier.BUDGET:    250,
    PriceTier.MID_RANGE: 700,
    PriceTier.LUXURY:    1400,
}
_UNKNOWN_TIER_BASE = 300

# Realism multipliers (per person)
_CATEGORY_MULTIPLIER: dict[Category, float] = {
    Category.BEACH:         0.8,    # parking, snacks, rentals
    Category.HISTORICAL:    0.5,    # tickets are usually cheap
    Category.RELIGIOUS:     0.4,
    Category.NATURE:        0.9,    # park entries, guides
    Category.ADVENTURE:     1.6,    # water sports
    Category.ENTERTAINMENT: 1.2,    # clubs, events
    Category.MARKET:        0.6,
    Category.OTHER:         1.0,
}

# Nominal minimum spend (per person)
_CATEGORY_MINIMUM: dict[Category, float] = {
    Category.BEACH:         150,
    Category.HISTORICAL:    50,
    Category.RELIGIOUS:     0,
    Category.NATURE:        100,
    Category.ADVENTURE:     600,
    Category.ENTERTAINMENT: 250,
    Category.MARKET:        150,
    Category.OTHER:         100,
}

_EVENT_BASE_MINIMUM = 50
_EVENT_KEYWORD_MINIMUMS: list[tuple[re.Pattern, float]] = [
    (re.compile(r"market"), 100),
    (re.compile(r"music|fest|concert|night"), 200),
    (re.compile(r"cruise"), 300),
]


def per_person_cost(tier: Optional[PriceTier], category: Category) -> float:
    base = _BASE_COST[tier] if tier is not None else _UNKNOWN_TIER_BASE
    scaled = round(base * _CATEGORY_MULTIPLIER[category])
    return max(scaled, _CATEGORY_MINIMUM[category])


def estimate_activity_cost(activity: CandidateActivity, party_size: int) -> float:
    return float(per_person_cost(activity.price_tier, activity.category) * party_size)


def infer_event_min_spend(title: str, description: str = "") -> float:
    text = f"{title or ''}\n{description or ''}".lower()
    minimum = _EVENT_BASE_MINIMUM
    for pattern, floor in _EVENT_KEYWORD_MINIMUMS:
        if pattern.search(text):
            minimum = floor
    return minimum


def estimate_event_cost(event: CandidateEvent, party_size: int) -> float:
    base = event.price or 0
    return float(max(base, infer_event_min_spend(event.title, event.description)) * party_size)
