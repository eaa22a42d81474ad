"""
modules/tool_usage/routing_tool.py
-------------------------------------
Drive time / distance between two stops via the Google Routes API.

Endpoint:
    POST https://routes.googleapis.com/directions/v2:computeRoutes
    Headers:
        X-Goog-Api-Key: {GOOGLE_ROUTES_API_KEY}
        X-Goog-FieldMask: routes.duration,routes.distanceMeters
        Content-Type: application/json
    Body:
        {
          "origin":      {"location": {"latLng": {"latitude": ..., "longitude": ...}}},
          "destination": {"location": {"latLng": {"latitude": ..., "longitude": ...}}},
          "travelMode": "DRIVE",
          "routingPreference": "TRAFFIC_AWARE"
        }

Response fields:
    routes[0].duration       → "Ns"  traffic-aware travel time
    routes[0].distanceMeters → int

Failures (timeout, HTTP error, empty routes) come back as a `routing`
DependencyError; the TravelTimeEstimator then uses its haversine heuristic.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from goaguide import config
from goaguide.db.cache import TTLCache, get_cache, make_cache_key
from goaguide.schemas.result import DependencyResult
from goaguide.schemas.trip import GeoPoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteEstimate:
    duration_seconds: int
    distance_meters: int

    def to_dict(self) -> dict:
        return {"duration_seconds": self.duration_seconds, "distance_meters": self.distance_meters}


def _parse_duration_s(value: str) -> int:
    """
    Parse Google Routes duration string to integer seconds.
    Format: "123s" or "123.456s"
    """
    s = value.strip().rstrip("s")
    return int(float(s))


def _lat_lng(point: GeoPoint) -> dict:
    return {"location": {"latLng": {"latitude": point.lat, "longitude": point.lon}}}


class RoutingTool:
    """Returns Google-Routes drive estimates, cached per (origin, destination, hour)."""

    def __init__(
        self,
        cache: Optional[TTLCache] = None,
        api_key: str = config.GOOGLE_ROUTES_API_KEY,
        use_stub: bool = config.USE_STUB_ROUTING,
        timeout_s: float = config.ROUTING_TIMEOUT_S,
    ) -> None:
        self.cache     = cache if cache is not None else get_cache()
        self.api_key   = api_key
        self.use_stub  = use_stub
        self.timeout_s = timeout_s

    def fetch(self, origin: GeoPoint, dest: GeoPoint, hour: int) -> DependencyResult[RouteEstimate]:
        if self.use_stub or not self.api_key:
            return DependencyResult.failure("routing", "routing API not configured")

        key = make_cache_key("route", {
            "origin": [round(origin.lat, 5), round(origin.lon, 5)],
            "dest":   [round(dest.lat, 5), round(dest.lon, 5)],
            "hour":   hour,
        })
        cached = self.cache.get(key)
        if cached is not None:
            return DependencyResult.success(RouteEstimate(**cached))

        try:
            resp = requests.post(
                config.GOOGLE_ROUTES_URL,
                json={
                    "origin":            _lat_lng(origin),
                    "destination":       _lat_lng(dest),
                    "travelMode":        "DRIVE",
                    "routingPreference": "TRAFFIC_AWARE",
                },
                headers={
                    "X-Goog-Api-Key":   self.api_key,
                    "X-Goog-FieldMask": "routes.duration,routes.distanceMeters",
                    "Content-Type":     "application/json",
                },
                timeout=self.timeout_s,
            )
            resp.raise_for_status()
            routes = resp.json().get("routes") or []
            if not routes:
                return DependencyResult.failure("routing", "no route returned")
            estimate = RouteEstimate(
                duration_seconds=_parse_duration_s(routes[0]["duration"]),
                distance_meters=int(routes[0].get("distanceMeters", 0)),
            )
        except requests.RequestException as exc:
            logger.warning("Routing lookup failed: %s", exc)
            return DependencyResult.failure("routing", str(exc))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Unexpected routing payload: %s", exc)
            return DependencyResult.failure("routing", f"malformed response: {exc}")

        self.cache.set(key, estimate.to_dict(), ttl=config.ROUTE_CACHE_TTL)
        return DependencyResult.success(estimate)
