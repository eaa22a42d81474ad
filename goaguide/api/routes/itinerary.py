"""
api/routes/itinerary.py
------------------------
POST /v1/itinerary/optimize

Schedules a day-wise itinerary for one trip from the supplied POI and event
pools.  Alternatives are only returned when `include_alternatives=true`.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from goaguide.modules.planning.itinerary_assembler import (
    ItineraryAssembler,
    ItineraryComputationError,
)
from goaguide.modules.validation import validate_trip
from goaguide.schemas.trip import (
    CandidateActivity,
    CandidateEvent,
    Category,
    GeoPoint,
    PriceTier,
    TripArchetype,
    TripParameters,
)

router = APIRouter()

_assembler: Optional[ItineraryAssembler] = None


def get_assembler() -> ItineraryAssembler:
    """Process-wide assembler, built on first use."""
    global _assembler
    if _assembler is None:
        _assembler = ItineraryAssembler()
    return _assembler


# ── Request schemas ────────────────────────────────────────────────────────────

class TripModel(BaseModel):
    budget_per_person: float = Field(..., gt=0, description="INR per traveller")
    party_size:        int = Field(1, ge=1)
    trip_type:         Literal["family", "solo", "couple", "friends", "adventure", "business"] = "solo"
    interests:         list[str] = Field(default_factory=list)
    start_date:        date
    duration:          int = Field(..., ge=1, description="Days")
    city:              str = "Goa"


class PoiModel(BaseModel):
    id:          str
    name:        str
    category:    str = "other"
    price_tier:  Optional[str] = None
    rating:      Optional[float] = None
    lat:         Optional[float] = None
    lon:         Optional[float] = None
    description: str = ""


class EventModel(BaseModel):
    id:          str
    title:       str
    start:       datetime
    end:         Optional[datetime] = None
    category:    str = "other"
    description: str = ""
    price:       Optional[float] = Field(None, ge=0)
    rating:      Optional[float] = None
    lat:         Optional[float] = None
    lon:         Optional[float] = None


class OptimizeRequest(BaseModel):
    trip:   TripModel
    pois:   list[PoiModel] = Field(default_factory=list)
    events: list[EventModel] = Field(default_factory=list)


# ── Converters ─────────────────────────────────────────────────────────────────

def _point(lat: Optional[float], lon: Optional[float]) -> Optional[GeoPoint]:
    if lat is None or lon is None:
        return None
    return GeoPoint(lat=lat, lon=lon)


def _to_trip(m: TripModel) -> TripParameters:
    return TripParameters(
        budget_per_person=m.budget_per_person,
        party_size=m.party_size,
        archetype=TripArchetype(m.trip_type),
        start_date=m.start_date,
        duration_days=m.duration,
        interests=list(m.interests),
        city=m.city,
    )


def _to_poi(m: PoiModel) -> CandidateActivity:
    return CandidateActivity(
        id=m.id,
        name=m.name,
        category=Category.parse(m.category),
        price_tier=PriceTier.parse(m.price_tier),
        rating=m.rating,
        location=_point(m.lat, m.lon),
        description=m.description,
    )


def _to_event(m: EventModel) -> CandidateEvent:
    return CandidateEvent(
        id=m.id,
        title=m.title,
        start=m.start,
        end=m.end,
        category=Category.parse(m.category),
        description=m.description,
        price=m.price,
        location=_point(m.lat, m.lon),
        rating=m.rating,
    )


# ── Endpoint ───────────────────────────────────────────────────────────────────

@router.post("/optimize", summary="Generate a budget-constrained day-wise itinerary")
def optimize_itinerary(
    req: OptimizeRequest,
    include_alternatives: bool = Query(False, description="Return cheaper alternatives when over budget"),
    assembler: ItineraryAssembler = Depends(get_assembler),
) -> dict:
    """
    Runs the scheduler:
      1. Weather lookup + impact labels
      2. Candidate costing and scoring
      3. Day-wise slotting with travel estimates
      4. Budget check (+ alternatives when over)
      5. Optimisation score
    """
    trip = _to_trip(req.trip)
    check = validate_trip(trip.to_dict())
    if not check.valid:
        raise HTTPException(status_code=422, detail="; ".join(check.errors))

    trace_id = str(uuid.uuid4())
    try:
        result = assembler.plan(
            trip,
            [_to_poi(p) for p in req.pois],
            [_to_event(e) for e in req.events],
            trace_id=trace_id,
        )
    except ItineraryComputationError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    payload = result.to_dict()
    if not include_alternatives:
        payload["alternatives"] = []
    payload["trace_id"] = trace_id
    payload["generated_at"] = datetime.now(timezone.utc).isoformat()
    return payload
