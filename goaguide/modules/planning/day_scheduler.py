"""
modules/planning/day_scheduler.py
-----------------------------------
Partitions the ranked candidate pool into day plans.

For each day d = 1..duration:
  1. Interest guarantee: if an interest category still has unused
     candidates, the day takes its best one first.
  2. Round-robin fill up to `activities_per_day` through the category order
     (interest categories first, then the rest in bucket order), rotated by
     d so no category is always first.  At most `max_per_category` picks per
     category; the previous day's dominant category is taken at most once.
  3. Rain: if none of the day's picks can be done under cover, the best
     unused indoor-capable candidate is swapped in, and indoor picks take
     the morning slot.
  4. Events dated on the day are attached (category cap still applies).
  5. Slots: 09:00 morning · 13:00 afternoon · 17:00 evening; events keep
     their own start time.  Travel time / distance is annotated on the
     later of each consecutive pair.
  6. Cost = Σ entry costs + transport (km × TRANSPORT_RATE_PER_KM).  While
     the day exceeds total_budget / duration and has more than one entry,
     the last-scheduled entry is dropped.

A day may end up with zero entries when the pool is exhausted; that is a
valid plan with zero cost, not an error.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import date, time, timedelta
from typing import Optional

from goaguide import config
from goaguide.modules.planning.candidate_scoring import interest_categories
from goaguide.modules.planning.weather_impact import (
    INDOOR_CAPABLE_CATEGORIES,
    activity_weather_note,
    day_weather_recommendation,
)
from goaguide.modules.tool_usage.distance_tool import TravelTimeEstimator
from goaguide.schemas.itinerary import DayPlan, EntryKind, ScheduledEntry
from goaguide.schemas.trip import CandidateActivity, CandidateEvent, Category, TripParameters
from goaguide.schemas.weather import Suitability, WeatherImpact, WeatherReading

logger = logging.getLogger(__name__)

# (start, visit minutes)
_SLOTS: list[tuple[time, int]] = [
    (time(9, 0), 180),
    (time(13, 0), 180),
    (time(17, 0), 120),
    (time(19, 0), 90),
    (time(21, 0), 90),
]
_DEFAULT_EVENT_MINUTES = 180
_TRAVEL_NOTE_PREFIX = "Est. travel:"


def _slot(index: int) -> tuple[time, int]:
    return _SLOTS[min(index, len(_SLOTS) - 1)]


def _join_notes(*parts: str) -> str:
    return ". ".join(p for p in parts if p)


def _strip_travel_note(notes: str) -> str:
    return _join_notes(*(p for p in notes.split(". ") if not p.startswith(_TRAVEL_NOTE_PREFIX)))


def _dominant(entries: list[ScheduledEntry]) -> Optional[Category]:
    counts = Counter(e.source.category for e in entries if e.kind is EntryKind.POI)
    if not counts:
        return None
    return counts.most_common(1)[0][0]


def _drop_early_outdoor_events(entries: list[ScheduledEntry]) -> None:
    """On a rainy day an outdoor event may not open the day ahead of an indoor stop."""
    while (
        entries
        and entries[0].kind is EntryKind.EVENT
        and entries[0].source.category not in INDOOR_CAPABLE_CATEGORIES
        and any(e.source.category in INDOOR_CAPABLE_CATEGORIES for e in entries[1:])
    ):
        dropped = entries.pop(0)
        logger.debug("Rain: skipping early outdoor event %s", dropped.source.id)


class DayScheduler:

    def __init__(
        self,
        estimator: Optional[TravelTimeEstimator] = None,
        activities_per_day: int = config.ACTIVITIES_PER_DAY,
        max_per_category: int = config.MAX_PER_CATEGORY,
        transport_rate_per_km: float = config.TRANSPORT_RATE_PER_KM,
    ) -> None:
        self.estimator             = estimator or TravelTimeEstimator()
        self.activities_per_day    = activities_per_day
        self.max_per_category      = max_per_category
        self.transport_rate_per_km = transport_rate_per_km

    # ── Public ────────────────────────────────────────────────────────────────

    def build(
        self,
        pool: list[CandidateActivity],
        events: list[CandidateEvent],
        trip: TripParameters,
        impact: WeatherImpact,
        weather: WeatherReading,
    ) -> list[DayPlan]:
        """Return exactly `trip.duration_days` day plans."""
        buckets: dict[Category, list[CandidateActivity]] = {}
        for candidate in pool:
            buckets.setdefault(candidate.category, []).append(candidate)
        for bucket in buckets.values():
            bucket.sort(key=lambda c: (-c.score, c.id))

        priority = [c for c in interest_categories(trip.interests) if c in buckets]
        order = priority + [c for c in buckets if c not in priority]

        events_by_date: dict[date, list[CandidateEvent]] = {}
        for event in events:
            events_by_date.setdefault(event.local_start.date(), []).append(event)

        day_budget = trip.day_budget
        recommendation = day_weather_recommendation(weather)
        rainy = impact.outdoor_activities is Suitability.UNFAVORABLE

        days: list[DayPlan] = []
        prev_dominant: Optional[Category] = None
        for day_no in range(1, trip.duration_days + 1):
            day_date = trip.start_date + timedelta(days=day_no - 1)
            picks = self._pick_day(buckets, priority, order, day_no, prev_dominant)
            if rainy:
                picks = self._swap_in_indoor(picks, buckets)

            counts = Counter(c.category for c in picks)
            day_events: list[CandidateEvent] = []
            for event in events_by_date.get(day_date, []):
                if counts[event.category] >= self.max_per_category:
                    logger.debug("Day %d: skipping event %s (category cap)", day_no, event.id)
                    continue
                counts[event.category] += 1
                day_events.append(event)

            plan = DayPlan(
                day=day_no,
                date=day_date,
                activities=self._sequence(picks, day_events, weather, indoor_first=rainy),
                weather_recommendation=recommendation,
            )
            self.reflow_day(plan)
            self._trim_to_budget(plan, day_budget)
            prev_dominant = _dominant(plan.activities)
            days.append(plan)
        return days

    def reflow_day(self, plan: DayPlan) -> None:
        """Re-annotate travel legs and recompute transport + day cost."""
        self.annotate_travel(plan.activities)
        self.recost_day(plan)

    def annotate_travel(self, entries: list[ScheduledEntry]) -> None:
        for i, entry in enumerate(entries):
            entry.notes = _strip_travel_note(entry.notes)
            entry.travel_time_min = None
            entry.travel_dist_km = None
            entry.travel_source = None
            if i == 0:
                continue
            estimate = self.estimator.estimate(
                entries[i - 1].source.location, entry.source.location, entry.time,
            )
            if estimate is None:
                continue
            entry.notes = _join_notes(entry.notes, estimate.note())
            entry.travel_time_min = estimate.minutes
            entry.travel_dist_km = estimate.distance_km
            entry.travel_source = estimate.source

    def recost_day(self, plan: DayPlan) -> None:
        km = sum(e.travel_dist_km or 0.0 for e in plan.activities)
        plan.transport_cost = float(round(km * self.transport_rate_per_km))
        plan.estimated_cost = round(plan.activity_cost + plan.transport_cost, 2)

    # ── Internal ──────────────────────────────────────────────────────────────

    def _pick_day(
        self,
        buckets: dict[Category, list[CandidateActivity]],
        priority: list[Category],
        order: list[Category],
        day_no: int,
        prev_dominant: Optional[Category],
    ) -> list[CandidateActivity]:
        picks: list[CandidateActivity] = []
        counts: Counter = Counter()

        def take(cat: Category) -> None:
            picks.append(buckets[cat].pop(0))
            counts[cat] += 1

        for cat in priority:
            if buckets[cat]:
                take(cat)
                break

        if not order:
            return picks
        shift = (day_no - 1) % len(order)
        rotated = order[shift:] + order[:shift]

        progress = True
        while len(picks) < self.activities_per_day and progress:
            progress = False
            for cat in rotated:
                if len(picks) >= self.activities_per_day:
                    break
                if not buckets[cat] or counts[cat] >= self.max_per_category:
                    continue
                if cat == prev_dominant and counts[cat] >= 1:
                    continue
                take(cat)
                progress = True
        return picks

    def _swap_in_indoor(
        self,
        picks: list[CandidateActivity],
        buckets: dict[Category, list[CandidateActivity]],
    ) -> list[CandidateActivity]:
        if not picks or any(p.category in INDOOR_CAPABLE_CATEGORIES for p in picks):
            return picks
        options = [b[0] for cat, b in buckets.items() if cat in INDOOR_CAPABLE_CATEGORIES and b]
        if not options:
            return picks

        best = min(options, key=lambda c: (-c.score, c.id))
        buckets[best.category].pop(0)
        if len(picks) < self.activities_per_day:
            return picks + [best]

        # Keep the interest-guaranteed first pick; give the weakest back.
        replaced = picks[-1]
        bucket = buckets[replaced.category]
        bucket.append(replaced)
        bucket.sort(key=lambda c: (-c.score, c.id))
        logger.debug("Rain: swapped %s for indoor %s", replaced.id, best.id)
        return picks[:-1] + [best]

    def _sequence(
        self,
        picks: list[CandidateActivity],
        events: list[CandidateEvent],
        weather: WeatherReading,
        indoor_first: bool,
    ) -> list[ScheduledEntry]:
        ordered = picks
        if indoor_first:
            ordered = sorted(picks, key=lambda c: c.category not in INDOOR_CAPABLE_CATEGORIES)

        entries: list[ScheduledEntry] = []
        for i, candidate in enumerate(ordered):
            start, minutes = _slot(i)
            entries.append(ScheduledEntry(
                time=start,
                kind=EntryKind.POI,
                source=candidate,
                duration_minutes=minutes,
                notes=_join_notes(
                    activity_weather_note(candidate.category, weather),
                    "Free activity - great for budget" if candidate.estimated_cost == 0 else "",
                ),
            ))

        for event in events:
            minutes = _DEFAULT_EVENT_MINUTES
            if event.end is not None and event.end > event.start:
                minutes = int((event.end - event.start).total_seconds() // 60)
            entries.append(ScheduledEntry(
                time=event.local_start.time(),
                kind=EntryKind.EVENT,
                source=event,
                duration_minutes=minutes,
                notes=f"Local event - {event.description}" if event.description else "Local event",
            ))

        entries.sort(key=lambda e: e.time)
        if indoor_first:
            _drop_early_outdoor_events(entries)
        return entries

    def _trim_to_budget(self, plan: DayPlan, day_budget: float) -> None:
        while plan.estimated_cost > day_budget and len(plan.activities) > 1:
            dropped = plan.activities.pop()
            logger.info(
                "Day %d over budget (%.0f > %.0f): dropped %s",
                plan.day, plan.estimated_cost, day_budget, dropped.source.id,
            )
            self.recost_day(plan)
