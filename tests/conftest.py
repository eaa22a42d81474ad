"""Shared fixtures: a small Goa candidate pool and offline collaborators."""

from __future__ import annotations

from datetime import date
from typing import Optional

import pytest

from goaguide.db.cache import InMemoryTTLCache
from goaguide.modules.observability.logger import StructuredLogger
from goaguide.modules.planning.day_scheduler import DayScheduler
from goaguide.modules.planning.itinerary_assembler import ItineraryAssembler
from goaguide.modules.tool_usage.distance_tool import TravelTimeEstimator
from goaguide.modules.tool_usage.routing_tool import RoutingTool
from goaguide.modules.tool_usage.tip_tool import DayTipTool
from goaguide.schemas.trip import (
    CandidateActivity,
    Category,
    GeoPoint,
    PriceTier,
    TripArchetype,
    TripParameters,
)
from goaguide.schemas.weather import WeatherReading

from fakes import FakeWeatherTool


def poi(pid, name, category, tier, rating, lat, lon) -> CandidateActivity:
    return CandidateActivity(
        id=pid,
        name=name,
        category=category,
        price_tier=tier,
        rating=rating,
        location=GeoPoint(lat, lon),
    )


GOA_POOL: list[CandidateActivity] = [
    poi("baga",       "Baga Beach",             Category.BEACH,         PriceTier.FREE,      4.5, 15.5553, 73.7517),
    poi("calangute",  "Calangute Beach",        Category.BEACH,         PriceTier.FREE,      4.3, 15.5439, 73.7553),
    poi("aguada",     "Fort Aguada",            Category.HISTORICAL,    PriceTier.BUDGET,    4.4, 15.4920, 73.7737),
    poi("reis-magos", "Reis Magos Fort",        Category.HISTORICAL,    PriceTier.BUDGET,    4.3, 15.4972, 73.8090),
    poi("bom-jesus",  "Basilica of Bom Jesus",  Category.RELIGIOUS,     PriceTier.FREE,      4.7, 15.5009, 73.9116),
    poi("grand-isl",  "Grand Island Snorkelling", Category.ADVENTURE,   PriceTier.MID_RANGE, 4.2, 15.3700, 73.7800),
    poi("anjuna-mkt", "Anjuna Flea Market",     Category.MARKET,        PriceTier.BUDGET,    4.1, 15.5733, 73.7408),
    poi("dudhsagar",  "Dudhsagar Falls",        Category.NATURE,        PriceTier.MID_RANGE, 4.6, 15.3144, 74.3143),
    poi("titos",      "Tito's Lane",            Category.ENTERTAINMENT, PriceTier.MID_RANGE, 4.0, 15.5560, 73.7530),
]


@pytest.fixture
def pool() -> list[CandidateActivity]:
    return list(GOA_POOL)


@pytest.fixture
def make_trip():
    def _make(
        budget_per_person: float = 5000,
        party_size: int = 2,
        archetype: TripArchetype = TripArchetype.FAMILY,
        duration_days: int = 3,
        interests: Optional[list[str]] = None,
        start_date: date = date(2026, 12, 1),
    ) -> TripParameters:
        return TripParameters(
            budget_per_person=budget_per_person,
            party_size=party_size,
            archetype=archetype,
            start_date=start_date,
            duration_days=duration_days,
            interests=["Beaches"] if interests is None else interests,
        )
    return _make


@pytest.fixture
def cache() -> InMemoryTTLCache:
    return InMemoryTTLCache()


@pytest.fixture
def scheduler(cache) -> DayScheduler:
    return DayScheduler(estimator=TravelTimeEstimator(RoutingTool(cache=cache, use_stub=True)))


@pytest.fixture
def make_assembler(cache, tmp_path):
    def _make(
        weather: Optional[WeatherReading] = None, tip_tool=None, routing=None, **kwargs,
    ) -> ItineraryAssembler:
        scheduler = DayScheduler(
            estimator=TravelTimeEstimator(routing or RoutingTool(cache=cache, use_stub=True)),
        )
        return ItineraryAssembler(
            cache=cache,
            weather_tool=FakeWeatherTool(weather),
            day_scheduler=scheduler,
            tip_tool=tip_tool or DayTipTool(cache=cache, use_stub=True),
            event_logger=StructuredLogger(tmp_path / "logs"),
            **kwargs,
        )
    return _make
