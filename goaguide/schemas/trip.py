"""
schemas/trip.py
---------------
Input-side dataclasses: closed enums for categories / price tiers /
archetypes, the candidate POI and event records, and trip parameters.

Candidates are frozen.  Scoring produces a copy (dataclasses.replace) that
carries `score` and the party-scaled `estimated_cost`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional
from zoneinfo import ZoneInfo

from goaguide import config


class Category(str, Enum):
    BEACH         = "beach"
    HISTORICAL    = "historical"
    RELIGIOUS     = "religious"
    NATURE        = "nature"
    ADVENTURE     = "adventure"
    ENTERTAINMENT = "entertainment"
    MARKET        = "market"
    OTHER         = "other"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "Category":
        """Lenient parse; 'shopping' is folded into MARKET, unknowns into OTHER."""
        value = (raw or "").strip().lower()
        if value == "shopping":
            return cls.MARKET
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


class PriceTier(str, Enum):
    FREE      = "free"
    BUDGET    = "budget"
    MID_RANGE = "mid_range"
    LUXURY    = "luxury"

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional["PriceTier"]:
        """Return None for a missing or unrecognised tier."""
        value = (raw or "").strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return cls(value)
        except ValueError:
            return None


class TripArchetype(str, Enum):
    FAMILY    = "family"
    SOLO      = "solo"
    COUPLE    = "couple"
    FRIENDS   = "friends"
    ADVENTURE = "adventure"
    BUSINESS  = "business"


class Interest(str, Enum):
    """Questionnaire interest tags as shown to the traveller."""
    BEACHES          = "Beaches"
    HISTORICAL_SITES = "Historical sites"
    ADVENTURE_SPORTS = "Adventure sports"
    NIGHTLIFE        = "Nightlife"
    NATURE_WILDLIFE  = "Nature/Wildlife"
    SHOPPING         = "Shopping"

    @classmethod
    def parse(cls, raw: str) -> Optional["Interest"]:
        value = raw.strip().lower()
        for member in cls:
            if member.value.lower() == value or member.name.lower() == value:
                return member
        return None


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lon: float


@dataclass(frozen=True)
class CandidateActivity:
    """A point of interest supplied by the place-data collaborator."""
    id: str
    name: str
    category: Category = Category.OTHER
    price_tier: Optional[PriceTier] = None
    rating: Optional[float] = None            # 0–5
    location: Optional[GeoPoint] = None
    description: str = ""
    # Derived by scoring
    estimated_cost: float = 0.0               # INR, party-scaled
    score: float = 0.0

    def to_dict(self) -> dict:
        return {
            "id":             self.id,
            "name":           self.name,
            "category":       self.category.value,
            "price_tier":     self.price_tier.value if self.price_tier else None,
            "rating":         self.rating,
            "location":       _ser_point(self.location),
            "description":    self.description,
            "estimated_cost": round(self.estimated_cost, 2),
            "score":          self.score,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CandidateActivity":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            category=Category.parse(data.get("category")),
            price_tier=PriceTier.parse(data.get("price_tier")),
            rating=data.get("rating"),
            location=_de_point(data.get("location")),
            description=data.get("description", ""),
            estimated_cost=float(data.get("estimated_cost", 0.0)),
            score=float(data.get("score", 0.0)),
        )


@dataclass(frozen=True)
class CandidateEvent:
    """A curator-approved local event supplied by the datastore collaborator."""
    id: str
    title: str
    start: datetime
    end: Optional[datetime] = None
    category: Category = Category.OTHER
    description: str = ""
    price: Optional[float] = None             # per person; None/0 → inferred
    location: Optional[GeoPoint] = None
    rating: Optional[float] = None
    estimated_cost: float = 0.0
    score: float = 0.0

    @property
    def name(self) -> str:
        return self.title

    @property
    def local_start(self) -> datetime:
        """Naive destination-local start; aware starts are converted first."""
        if self.start.tzinfo is None:
            return self.start
        return self.start.astimezone(ZoneInfo(config.LOCAL_TIMEZONE)).replace(tzinfo=None)

    def to_dict(self) -> dict:
        return {
            "id":             self.id,
            "title":          self.title,
            "start":          self.start.isoformat(),
            "end":            self.end.isoformat() if self.end else None,
            "category":       self.category.value,
            "description":    self.description,
            "price":          self.price,
            "location":       _ser_point(self.location),
            "rating":         self.rating,
            "estimated_cost": round(self.estimated_cost, 2),
            "score":          self.score,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CandidateEvent":
        end = data.get("end")
        return cls(
            id=str(data["id"]),
            title=data["title"],
            start=datetime.fromisoformat(data["start"]),
            end=datetime.fromisoformat(end) if end else None,
            category=Category.parse(data.get("category")),
            description=data.get("description", ""),
            price=data.get("price"),
            location=_de_point(data.get("location")),
            rating=data.get("rating"),
            estimated_cost=float(data.get("estimated_cost", 0.0)),
            score=float(data.get("score", 0.0)),
        )


@dataclass
class TripParameters:
    """
    Trip record fields the scheduler needs.

    Validated upstream (see modules.validation.validate_trip); the
    scheduler assumes budget_per_person > 0, party_size ≥ 1, duration_days ≥ 1.
    """
    budget_per_person: float
    party_size: int
    archetype: TripArchetype
    start_date: date
    duration_days: int
    interests: list[str] = field(default_factory=list)
    city: str = "Goa"

    @property
    def total_budget(self) -> float:
        return self.budget_per_person * self.party_size

    @property
    def day_budget(self) -> float:
        return self.total_budget / self.duration_days

    def to_dict(self) -> dict:
        return {
            "budget_per_person": self.budget_per_person,
            "party_size":        self.party_size,
            "archetype":         self.archetype.value,
            "start_date":        self.start_date.isoformat(),
            "duration_days":     self.duration_days,
            "interests":         list(self.interests),
            "city":              self.city,
        }


def _ser_point(point: Optional[GeoPoint]) -> Optional[dict]:
    return {"lat": point.lat, "lon": point.lon} if point else None


def _de_point(data: Optional[dict]) -> Optional[GeoPoint]:
    if not data:
        return None
    return GeoPoint(lat=float(data["lat"]), lon=float(data["lon"]))
