"""
schemas/itinerary.py
--------------------
Dataclass definitions for the output itinerary structures.

All money amounts are INR, rounded to 2 decimals on serialisation.
Times are local wall-clock `HH:MM`; dates are ISO-8601.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from enum import Enum
from typing import Optional, Union

from goaguide.schemas.trip import CandidateActivity, CandidateEvent
from goaguide.schemas.weather import WeatherImpact, WeatherReading


class EntryKind(str, Enum):
    POI   = "poi"
    EVENT = "event"


class BudgetStatus(str, Enum):
    WITHIN = "within_budget"
    OVER   = "over_budget"


class AlternativeStrategy(str, Enum):
    REMOVE_EXPENSIVE = "remove_expensive"
    REPLACE_CHEAPER  = "replace_cheaper"
    REDUCE_DURATION  = "reduce_duration"


@dataclass
class ScheduledEntry:
    """A single stop in a day's plan."""
    time: time
    kind: EntryKind
    source: Union[CandidateActivity, CandidateEvent]
    duration_minutes: int = 0
    notes: str = ""
    travel_time_min: Optional[int] = None      # from the previous stop
    travel_dist_km: Optional[float] = None
    travel_source: Optional[str] = None        # "routing" | "heuristic"

    @property
    def cost(self) -> float:
        return self.source.estimated_cost

    @property
    def name(self) -> str:
        return self.source.name

    def to_dict(self) -> dict:
        return {
            "time":             self.time.strftime("%H:%M"),
            "kind":             self.kind.value,
            "source":           self.source.to_dict(),
            "duration_minutes": self.duration_minutes,
            "notes":            self.notes,
            "travel_time_min":  self.travel_time_min,
            "travel_dist_km":   self.travel_dist_km,
            "travel_source":    self.travel_source,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ScheduledEntry":
        kind = EntryKind(data["kind"])
        source_cls = CandidateEvent if kind is EntryKind.EVENT else CandidateActivity
        return cls(
            time=time.fromisoformat(data["time"]),
            kind=kind,
            source=source_cls.from_dict(data["source"]),
            duration_minutes=int(data.get("duration_minutes", 0)),
            notes=data.get("notes", ""),
            travel_time_min=data.get("travel_time_min"),
            travel_dist_km=data.get("travel_dist_km"),
            travel_source=data.get("travel_source"),
        )


@dataclass
class DayPlan:
    """One day's scheduled activities, sorted by time."""
    day: int
    date: date
    activities: list[ScheduledEntry] = field(default_factory=list)
    estimated_cost: float = 0.0        # activities + events + transport
    transport_cost: float = 0.0
    weather_recommendation: str = ""
    ai_tip: Optional[str] = None

    @property
    def activity_cost(self) -> float:
        return sum(entry.cost for entry in self.activities)

    def to_dict(self) -> dict:
        return {
            "day":                    self.day,
            "date":                   self.date.isoformat(),
            "activities":             [a.to_dict() for a in self.activities],
            "estimated_cost":         round(self.estimated_cost, 2),
            "transport_cost":         round(self.transport_cost, 2),
            "weather_recommendation": self.weather_recommendation,
            "ai_tip":                 self.ai_tip,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DayPlan":
        return cls(
            day=int(data["day"]),
            date=date.fromisoformat(data["date"]),
            activities=[ScheduledEntry.from_dict(a) for a in data.get("activities", [])],
            estimated_cost=float(data["estimated_cost"]),
            transport_cost=float(data.get("transport_cost", 0.0)),
            weather_recommendation=data.get("weather_recommendation", ""),
            ai_tip=data.get("ai_tip"),
        )


def total_cost(days: list[DayPlan]) -> float:
    return round(sum(d.estimated_cost for d in days), 2)


@dataclass
class Alternative:
    """An over-budget remediation; savings = base total − modified total."""
    strategy: AlternativeStrategy
    description: str
    days: list[DayPlan]
    savings: float

    def to_dict(self) -> dict:
        return {
            "type":        self.strategy.value,
            "description": self.description,
            "itinerary":   [d.to_dict() for d in self.days],
            "savings":     round(self.savings, 2),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Alternative":
        return cls(
            strategy=AlternativeStrategy(data["type"]),
            description=data["description"],
            days=[DayPlan.from_dict(d) for d in data["itinerary"]],
            savings=float(data["savings"]),
        )


@dataclass
class ScoreBreakdown:
    """The four named optimisation-score components (sum capped at 100)."""
    budget_adherence: float = 0.0     # max 30
    variety: float = 0.0              # max 25
    preference_fit: float = 0.0       # max 25
    weather_fit: float = 0.0          # max 20

    @property
    def total(self) -> int:
        return min(100, round(
            self.budget_adherence + self.variety + self.preference_fit + self.weather_fit
        ))

    def to_dict(self) -> dict:
        return {
            "budget_adherence": round(self.budget_adherence, 2),
            "variety":          round(self.variety, 2),
            "preference_fit":   round(self.preference_fit, 2),
            "weather_fit":      round(self.weather_fit, 2),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ScoreBreakdown":
        return cls(**{k: float(v) for k, v in data.items()})


@dataclass
class ItineraryResult:
    """
    Top-level output of the scheduler, handed to the persistence / API
    collaborator.  `alternatives` is non-empty only when over budget.
    """
    days: list[DayPlan]
    total_cost: float
    budget_limit: float
    budget_status: BudgetStatus
    alternatives: list[Alternative] = field(default_factory=list)
    optimization_score: int = 0
    score_breakdown: ScoreBreakdown = field(default_factory=ScoreBreakdown)
    weather: Optional[WeatherReading] = None
    weather_impact: WeatherImpact = field(default_factory=WeatherImpact)
    stay_suggestions: list[dict] = field(default_factory=list)
    narrative: str = ""
    fallbacks_used: list[str] = field(default_factory=list)
    currency: str = "INR"

    def to_dict(self) -> dict:
        return {
            "itinerary":          [d.to_dict() for d in self.days],
            "total_cost":         round(self.total_cost, 2),
            "budget_limit":       round(self.budget_limit, 2),
            "budget_status":      self.budget_status.value,
            "alternatives":       [a.to_dict() for a in self.alternatives],
            "optimization_score": self.optimization_score,
            "score_breakdown":    self.score_breakdown.to_dict(),
            "weather":            self.weather.to_dict() if self.weather else None,
            "weather_impact":     self.weather_impact.to_dict(),
            "stay_suggestions":   list(self.stay_suggestions),
            "narrative":          self.narrative,
            "fallbacks_used":     list(self.fallbacks_used),
            "currency":           self.currency,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ItineraryResult":
        weather = data.get("weather")
        return cls(
            days=[DayPlan.from_dict(d) for d in data["itinerary"]],
            total_cost=float(data["total_cost"]),
            budget_limit=float(data["budget_limit"]),
            budget_status=BudgetStatus(data["budget_status"]),
            alternatives=[Alternative.from_dict(a) for a in data.get("alternatives", [])],
            optimization_score=int(data.get("optimization_score", 0)),
            score_breakdown=ScoreBreakdown.from_dict(data.get("score_breakdown", {})),
            weather=WeatherReading.from_dict(weather) if weather else None,
            weather_impact=WeatherImpact.from_dict(data["weather_impact"]),
            stay_suggestions=list(data.get("stay_suggestions", [])),
            narrative=data.get("narrative", ""),
            fallbacks_used=list(data.get("fallbacks_used", [])),
            currency=data.get("currency", "INR"),
        )
