"""
modules/planning/itinerary_assembler.py
-----------------------------------------
Planning entry point: composes the scheduler components into one
ItineraryResult per request.

    weather → impact labels → candidate scoring (+ event costing)
            → day-wise schedule → budget check → alternatives (if over)
            → optional day tips → optimisation score

External collaborators (weather, routing, LLM tips) degrade to their
fallbacks and are listed in `fallbacks_used`.  Any other fault is logged
and re-raised as a single ItineraryComputationError, so callers never see
a partial result.

Optimisation score (0–100), four components:
    budget_adherence  30 within budget; 30 − 30·overrun/budget past it, floor 0
    variety           5 per day, capped at 25
    preference_fit    25 × share of scheduled POIs matching an interest
                      (full marks when no interests were given)
    weather_fit       20 × mean suitability of scheduled entries
                      (favorable 1 · moderate 0.5 · unfavorable 0)
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Iterable, Optional

from goaguide import config
from goaguide.db.cache import TTLCache, get_cache
from goaguide.modules.observability.logger import StructuredLogger
from goaguide.modules.planning.budget_alternatives import BudgetAlternativeGenerator
from goaguide.modules.planning.candidate_scoring import CandidateScorer, interest_categories
from goaguide.modules.planning.day_scheduler import DayScheduler
from goaguide.modules.planning.trip_summary import build_narrative, stay_suggestions
from goaguide.modules.planning.weather_impact import assess_weather_impact, category_suitability
from goaguide.modules.tool_usage.distance_tool import TravelTimeEstimator
from goaguide.modules.tool_usage.routing_tool import RoutingTool
from goaguide.modules.tool_usage.tip_tool import DayTipTool
from goaguide.modules.tool_usage.weather_tool import WeatherTool
from goaguide.modules.validation import filter_valid, validate_candidate
from goaguide.schemas.itinerary import (
    Alternative,
    BudgetStatus,
    DayPlan,
    EntryKind,
    ItineraryResult,
    ScoreBreakdown,
    total_cost,
)
from goaguide.schemas.trip import CandidateActivity, CandidateEvent, TripParameters
from goaguide.schemas.weather import Suitability, WeatherImpact, WeatherReading

logger = logging.getLogger(__name__)

_SUITABILITY_WEIGHT: dict[Suitability, float] = {
    Suitability.FAVORABLE:   1.0,
    Suitability.MODERATE:    0.5,
    Suitability.UNFAVORABLE: 0.0,
}


class ItineraryComputationError(RuntimeError):
    """Generic planning failure surfaced to the caller."""


class ItineraryAssembler:

    def __init__(
        self,
        cache: Optional[TTLCache] = None,
        weather_tool: Optional[WeatherTool] = None,
        scorer: Optional[CandidateScorer] = None,
        day_scheduler: Optional[DayScheduler] = None,
        alternative_generator: Optional[BudgetAlternativeGenerator] = None,
        tip_tool: Optional[DayTipTool] = None,
        event_logger: Optional[StructuredLogger] = None,
    ) -> None:
        cache = cache if cache is not None else get_cache()
        self.weather_tool  = weather_tool or WeatherTool(cache=cache)
        self.scorer        = scorer or CandidateScorer()
        self.day_scheduler = day_scheduler or DayScheduler(
            estimator=TravelTimeEstimator(RoutingTool(cache=cache)),
        )
        self.alternative_generator = alternative_generator or BudgetAlternativeGenerator(self.day_scheduler)
        self.tip_tool      = tip_tool or DayTipTool(cache=cache)
        self.event_logger  = event_logger or StructuredLogger()

    # ── Public ────────────────────────────────────────────────────────────────

    def plan(
        self,
        trip: TripParameters,
        pois: Iterable[CandidateActivity],
        events: Iterable[CandidateEvent] = (),
        now: Optional[datetime] = None,
        trace_id: Optional[str] = None,
    ) -> ItineraryResult:
        trace_id = trace_id or str(uuid.uuid4())
        try:
            result = self._plan(trip, list(pois), list(events), now or datetime.now(timezone.utc))
        except Exception as exc:
            logger.exception("Itinerary computation failed (trace %s)", trace_id)
            self._record(trace_id, "ITINERARY_FAILED", {"error": type(exc).__name__})
            raise ItineraryComputationError("Failed to generate itinerary") from exc

        self._record(trace_id, "ITINERARY_PLANNED", {
            "days":               len(result.days),
            "total_cost":         result.total_cost,
            "budget_limit":       result.budget_limit,
            "budget_status":      result.budget_status.value,
            "alternatives":       len(result.alternatives),
            "optimization_score": result.optimization_score,
            "fallbacks_used":     result.fallbacks_used,
        })
        return result

    # ── Internal ──────────────────────────────────────────────────────────────

    def _record(self, trace_id: str, event_type: str, payload: dict) -> None:
        """Write a structured event; an unwritable log never changes the outcome."""
        try:
            self.event_logger.log(trace_id, event_type, payload)
        except OSError as exc:
            logger.warning("Could not write %s event for trace %s: %s", event_type, trace_id, exc)

    def _plan(
        self,
        trip: TripParameters,
        pois: list[CandidateActivity],
        events: list[CandidateEvent],
        now: datetime,
    ) -> ItineraryResult:
        fallbacks: list[str] = []

        weather_result = self.weather_tool.fetch(trip.city)
        weather = weather_result.unwrap_or(WeatherReading.default())
        if not weather_result.ok:
            logger.info("Using default weather: %s", weather_result.error)
            fallbacks.append("default_weather")
        impact = assess_weather_impact(weather)

        scored = self.scorer.score_all(filter_valid(pois, validate_candidate), trip, impact)
        upcoming = self.scorer.cost_events(filter_valid(events, validate_candidate), trip, now)

        days = self.day_scheduler.build(scored, upcoming, trip, impact, weather)

        total = total_cost(days)
        limit = round(trip.total_budget, 2)
        status = BudgetStatus.WITHIN if total <= limit else BudgetStatus.OVER
        alternatives = (
            self.alternative_generator.generate(days, limit) if status is BudgetStatus.OVER else []
        )
        if _used_heuristic_routing(days, alternatives):
            fallbacks.append("heuristic_routing")

        if not self._enrich_tips(days, trip, weather):
            fallbacks.append("tip_unavailable")

        breakdown = self.score(days, total, limit, trip, impact)
        return ItineraryResult(
            days=days,
            total_cost=total,
            budget_limit=limit,
            budget_status=status,
            alternatives=alternatives,
            optimization_score=breakdown.total,
            score_breakdown=breakdown,
            weather=weather,
            weather_impact=impact,
            stay_suggestions=stay_suggestions(trip.interests, trip.archetype),
            narrative=build_narrative(days, total),
            fallbacks_used=fallbacks,
            currency=config.CURRENCY_UNIT,
        )

    def _enrich_tips(self, days: list[DayPlan], trip: TripParameters, weather: WeatherReading) -> bool:
        """Attach a tip to each day; False if any day went without one."""
        all_ok = True
        for day in days:
            context = {
                "date":              day.date.isoformat(),
                "weather":           day.weather_recommendation or weather.condition,
                "budget_per_person": trip.budget_per_person,
                "trip_type":         trip.archetype.value,
                "interests":         list(trip.interests),
                "activities": [
                    {"time": e.time.strftime("%H:%M"), "name": e.name,
                     "category": e.source.category.value, "notes": e.notes}
                    for e in day.activities
                ],
            }
            result = self.tip_tool.fetch(context)
            if result.ok:
                day.ai_tip = result.value
            else:
                all_ok = False
        return all_ok

    @staticmethod
    def score(
        days: list[DayPlan],
        total: float,
        limit: float,
        trip: TripParameters,
        impact: WeatherImpact,
    ) -> ScoreBreakdown:
        if total <= limit:
            budget_adherence = 30.0
        else:
            budget_adherence = max(0.0, 30.0 - (total - limit) / limit * 30.0)

        entries = [e for d in days for e in d.activities]
        poi_entries = [e for e in entries if e.kind is EntryKind.POI]

        wanted = set(interest_categories(trip.interests))
        if not poi_entries:
            preference_fit = 0.0
        elif not wanted:
            preference_fit = 25.0
        else:
            matched = sum(1 for e in poi_entries if e.source.category in wanted)
            preference_fit = 25.0 * matched / len(poi_entries)

        if entries:
            weights = [_SUITABILITY_WEIGHT[category_suitability(e.source.category, impact)] for e in entries]
            weather_fit = 20.0 * sum(weights) / len(weights)
        else:
            weather_fit = 0.0

        return ScoreBreakdown(
            budget_adherence=budget_adherence,
            variety=float(min(25, len(days) * 5)),
            preference_fit=preference_fit,
            weather_fit=weather_fit,
        )


def _used_heuristic_routing(days: list[DayPlan], alternatives: list[Alternative]) -> bool:
    """True if any travel leg in this result was estimated without the routing API."""
    plans = list(days) + [d for alt in alternatives for d in alt.days]
    return any(e.travel_source == "heuristic" for d in plans for e in d.activities)
