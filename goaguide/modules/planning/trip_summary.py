"""
modules/planning/trip_summary.py
----------------------------------
Deterministic, template-based extras for the result: local-guide stay-area
suggestions and a short day-by-day narrative.
"""

from __future__ import annotations

from goaguide.schemas.itinerary import DayPlan
from goaguide.schemas.trip import Category, TripArchetype

_MAX_STAY_SUGGESTIONS = 4

_HIGHLIGHTS: dict[Category, str] = {
    Category.BEACH:         "beaches",
    Category.HISTORICAL:    "culture",
    Category.RELIGIOUS:     "culture",
    Category.ENTERTAINMENT: "nightlife",
    Category.MARKET:        "shopping",
    Category.NATURE:        "nature",
    Category.ADVENTURE:     "nature",
}


def stay_suggestions(interests: list[str], archetype: TripArchetype) -> list[dict]:
    """Up to four areas to stay in, picked from interests and archetype."""
    tags = [(i or "").lower() for i in interests]

    def likes(*words: str) -> bool:
        return any(w in tag for tag in tags for w in words)

    picks: list[dict] = []

    def push(area: str, why: str, good_for: str) -> None:
        picks.append({"area": area, "why": why, "good_for": good_for})

    if likes("beach") or archetype in (TripArchetype.FRIENDS, TripArchetype.COUPLE):
        push("Baga / Calangute", "Lively beaches, shacks, water sports and easy transfers", "beaches · nightlife")
        push("Candolim / Sinquerim", "Quieter stretch but close to all action", "couples · relaxed vibe")
    if likes("night"):
        push("Anjuna / Vagator", "Clubs, sundowners and cliff-side views", "nightlife · sunsets")
    if likes("historical", "culture", "church", "fort", "food", "cuisine"):
        push("Panjim / Altinho", "Central, heritage lanes and great local eateries", "culture · food walks")
    if likes("nature", "wildlife", "adventure"):
        push("Colva / Palolem (South Goa)", "Laid-back beaches and greener landscapes", "slow travel · families")
    if not picks:
        push("Candolim", "Balanced access to beaches, forts and restaurants", "first-time visitors")
    return picks[:_MAX_STAY_SUGGESTIONS]


def build_narrative(days: list[DayPlan], total_cost: float) -> str:
    lines: list[str] = []
    highlights: list[str] = []
    for day in days:
        names = [e.name for e in day.activities if e.name]
        if names:
            lines.append(f"Day {day.day}: {' → '.join(names)}.")
        for entry in day.activities:
            tag = _HIGHLIGHTS.get(entry.source.category)
            if tag and tag not in highlights:
                highlights.append(tag)

    highlight_text = " + ".join(highlights[:3]) or "local experiences"
    cost_line = f"Cost: ~₹{round(total_cost):,} | Highlights: {highlight_text}"
    return "\n".join(lines + [cost_line])
