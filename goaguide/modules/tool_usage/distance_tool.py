"""
modules/tool_usage/distance_tool.py
-------------------------------------
Travel-time estimation between consecutive stops.

Primary path: RoutingTool (Google Routes, bounded timeout).
Fallback:     haversine distance / time-of-day speed profile.

Speed profile (km/h, local hour of the later stop):
    22:00–05:59        → 35   late night
    09–11, 17–20       → 20   peak windows
    otherwise          → 30

Never returns fewer than TRAVEL_TIME_FLOOR_MIN minutes.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import time
from typing import Optional

from goaguide import config
from goaguide.modules.tool_usage.routing_tool import RoutingTool
from goaguide.schemas.trip import GeoPoint

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Pure maths
# ---------------------------------------------------------------------------

_EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points (Haversine formula) in km."""
    r = _EARTH_RADIUS_KM
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lam = math.radians(lon2 - lon1)
    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lam / 2) ** 2
    )
    return 2 * r * math.asin(math.sqrt(a))


def traffic_speed_kmh(hour: int) -> float:
    if hour >= 22 or hour <= 5:
        return 35.0
    if 9 <= hour <= 11 or 17 <= hour <= 20:
        return 20.0
    return 30.0


# ---------------------------------------------------------------------------
# TravelTimeEstimator
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TravelEstimate:
    minutes: int
    distance_km: float
    source: str          # "routing" | "heuristic"

    def note(self) -> str:
        return f"Est. travel: {self.minutes} min for ~{self.distance_km} km (traffic-adjusted)"


class TravelTimeEstimator:
    """
    Estimates transit between two stops for a target local time.
    Routing failures are not fatal: the estimate falls back to the heuristic
    and says so in its `source`. Holds no per-request state.
    """

    def __init__(
        self,
        routing_tool: Optional[RoutingTool] = None,
        floor_minutes: int = config.TRAVEL_TIME_FLOOR_MIN,
    ) -> None:
        self.routing_tool  = routing_tool or RoutingTool()
        self.floor_minutes = floor_minutes

    def estimate(
        self,
        origin: Optional[GeoPoint],
        dest: Optional[GeoPoint],
        at: time,
    ) -> Optional[TravelEstimate]:
        """Return None when either stop has no coordinates."""
        if origin is None or dest is None:
            return None

        result = self.routing_tool.fetch(origin, dest, at.hour)
        if result.ok:
            route = result.value
            return TravelEstimate(
                minutes=max(self.floor_minutes, round(route.duration_seconds / 60)),
                distance_km=round(route.distance_meters / 1000, 1),
                source="routing",
            )

        logger.debug("Routing unavailable (%s); using haversine heuristic", result.error)
        return self.heuristic(origin, dest, at)

    def heuristic(self, origin: GeoPoint, dest: GeoPoint, at: time) -> TravelEstimate:
        km = haversine_km(origin.lat, origin.lon, dest.lat, dest.lon)
        minutes = max(self.floor_minutes, round(km / traffic_speed_kmh(at.hour) * 60))
        return TravelEstimate(minutes=minutes, distance_km=round(km, 1), source="heuristic")
