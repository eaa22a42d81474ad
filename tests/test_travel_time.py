from datetime import time

from goaguide.modules.tool_usage.distance_tool import (
    TravelTimeEstimator,
    haversine_km,
    traffic_speed_kmh,
)
from goaguide.modules.tool_usage.routing_tool import RouteEstimate, RoutingTool
from goaguide.schemas.trip import GeoPoint

from fakes import FakeRoutingTool

BAGA = GeoPoint(15.5553, 73.7517)
BOM_JESUS = GeoPoint(15.5009, 73.9116)


def test_speed_profile():
    assert traffic_speed_kmh(23) == 35
    assert traffic_speed_kmh(3) == 35
    assert traffic_speed_kmh(10) == 20
    assert traffic_speed_kmh(18) == 20
    assert traffic_speed_kmh(14) == 30
    assert traffic_speed_kmh(7) == 30


def test_haversine_zero_for_same_point():
    assert haversine_km(15.5, 73.8, 15.5, 73.8) == 0


def test_heuristic_respects_floor():
    estimator = TravelTimeEstimator(FakeRoutingTool())
    estimate = estimator.estimate(BAGA, BAGA, time(13, 0))
    assert estimate.minutes == 5
    assert estimate.distance_km == 0.0
    assert estimate.source == "heuristic"


def test_heuristic_uses_peak_speed():
    estimator = TravelTimeEstimator(FakeRoutingTool())
    km = haversine_km(BAGA.lat, BAGA.lon, BOM_JESUS.lat, BOM_JESUS.lon)
    estimate = estimator.estimate(BAGA, BOM_JESUS, time(10, 0))
    assert estimate.minutes == max(5, round(km / 20 * 60))
    assert estimate.distance_km == round(km, 1)
    assert estimate.source == "heuristic"


def test_routing_success_is_preferred():
    routing = FakeRoutingTool(RouteEstimate(duration_seconds=1500, distance_meters=18400))
    estimator = TravelTimeEstimator(routing)
    estimate = estimator.estimate(BAGA, BOM_JESUS, time(9, 0))
    assert estimate.source == "routing"
    assert estimate.minutes == 25
    assert estimate.distance_km == 18.4
    assert not hasattr(estimator, "fallback_count")


def test_stubbed_routing_tool_falls_back(cache):
    estimator = TravelTimeEstimator(RoutingTool(cache=cache, use_stub=True))
    estimate = estimator.estimate(BAGA, BOM_JESUS, time(15, 0))
    assert estimate.source == "heuristic"
    assert estimate.minutes >= 5


def test_missing_coordinates_yield_no_estimate():
    routing = FakeRoutingTool()
    estimator = TravelTimeEstimator(routing)
    assert estimator.estimate(None, BAGA, time(9, 0)) is None
    assert routing.calls == 0


def test_note_format():
    estimate = TravelTimeEstimator(FakeRoutingTool()).heuristic(BAGA, BOM_JESUS, time(14, 0))
    assert estimate.note() == (
        f"Est. travel: {estimate.minutes} min for ~{estimate.distance_km} km (traffic-adjusted)"
    )
