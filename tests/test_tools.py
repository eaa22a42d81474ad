import requests

from goaguide.modules.tool_usage import routing_tool, weather_tool
from goaguide.modules.tool_usage.routing_tool import RoutingTool
from goaguide.modules.tool_usage.tip_tool import DayTipTool
from goaguide.modules.tool_usage.weather_tool import WeatherTool
from goaguide.schemas.trip import GeoPoint

from fakes import FakeGenai

OWM_PAYLOAD = {
    "weather": [{"main": "Rain", "description": "light rain"}],
    "main": {"temp": 27.4, "humidity": 88},
    "wind": {"speed": 4.1},
}


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    def json(self):
        return self.payload


def test_weather_stub_mode_reports_failure(cache):
    result = WeatherTool(cache=cache, api_key="k", use_stub=True).fetch("Goa")
    assert not result.ok
    assert result.error.dependency == "weather"


def test_weather_parses_and_caches(cache, monkeypatch):
    calls = []

    def fake_get(url, params, timeout):
        calls.append(params)
        return FakeResponse(OWM_PAYLOAD)

    monkeypatch.setattr(weather_tool.requests, "get", fake_get)
    tool = WeatherTool(cache=cache, api_key="k", use_stub=False)

    first = tool.fetch("Goa")
    second = tool.fetch("goa")
    assert first.ok
    assert first.value.condition == "Rain"
    assert first.value.temperature_c == 27.4
    assert second.value == first.value
    assert len(calls) == 1
    assert calls[0]["units"] == "metric"


def test_weather_timeout_is_a_failure(cache, monkeypatch):
    def fake_get(url, params, timeout):
        raise requests.Timeout("slow")

    monkeypatch.setattr(weather_tool.requests, "get", fake_get)
    result = WeatherTool(cache=cache, api_key="k", use_stub=False).fetch("Goa")
    assert not result.ok
    assert result.unwrap_or("fallback") == "fallback"


def test_weather_malformed_payload_is_a_failure(cache, monkeypatch):
    monkeypatch.setattr(weather_tool.requests, "get", lambda url, params, timeout: FakeResponse({"main": {}}))
    assert not WeatherTool(cache=cache, api_key="k", use_stub=False).fetch("Goa").ok


def test_routing_parses_duration_and_distance(cache, monkeypatch):
    payload = {"routes": [{"duration": "1260s", "distanceMeters": 15300}]}
    monkeypatch.setattr(routing_tool.requests, "post", lambda *a, **kw: FakeResponse(payload))
    result = RoutingTool(cache=cache, api_key="k", use_stub=False).fetch(
        GeoPoint(15.55, 73.75), GeoPoint(15.50, 73.91), 10,
    )
    assert result.ok
    assert result.value.duration_seconds == 1260
    assert result.value.distance_meters == 15300


def test_routing_empty_routes_is_a_failure(cache, monkeypatch):
    monkeypatch.setattr(routing_tool.requests, "post", lambda *a, **kw: FakeResponse({"routes": []}))
    result = RoutingTool(cache=cache, api_key="k", use_stub=False).fetch(
        GeoPoint(15.55, 73.75), GeoPoint(15.50, 73.91), 10,
    )
    assert not result.ok
    assert result.error.dependency == "routing"


def test_tip_is_cached_per_context(cache):
    client = FakeGenai("Sunsets are best at Vagator.")
    tool = DayTipTool(cache=cache, client=client, use_stub=False)
    context = {"date": "2026-12-01", "activities": []}
    assert tool.fetch(context).value == "Sunsets are best at Vagator."
    assert tool.fetch(dict(context)).value == "Sunsets are best at Vagator."
    assert client.calls == 1


def test_tip_errors_and_empty_text_are_failures(cache):
    failing = DayTipTool(cache=cache, client=FakeGenai(error=RuntimeError("quota")), use_stub=False)
    empty = DayTipTool(cache=cache, client=FakeGenai(""), use_stub=False)
    assert failing.fetch({"date": "2026-12-01"}).error.dependency == "day_tip"
    assert not empty.fetch({"date": "2026-12-02"}).ok
