"""Offline stand-ins for the weather and routing collaborators."""

from __future__ import annotations

from typing import Optional

from goaguide.schemas.result import DependencyResult
from goaguide.schemas.weather import WeatherReading


class FakeWeatherTool:
    """Returns a fixed reading, or a failure when none is given."""

    def __init__(self, reading: Optional[WeatherReading] = None) -> None:
        self.reading = reading
        self.calls = 0

    def fetch(self, city: str) -> DependencyResult[WeatherReading]:
        self.calls += 1
        if self.reading is None:
            return DependencyResult.failure("weather", "offline")
        return DependencyResult.success(self.reading)


class FakeRoutingTool:
    def __init__(self, estimate=None) -> None:
        self.estimate = estimate
        self.calls = 0

    def fetch(self, origin, dest, hour):
        self.calls += 1
        if self.estimate is None:
            return DependencyResult.failure("routing", "offline")
        return DependencyResult.success(self.estimate)


class FakeGenai:
    """Mimics `genai.Client().models.generate_content`."""

    def __init__(self, text: str = "", error: Optional[Exception] = None) -> None:
        self.text = text
        self.error = error
        self.calls = 0
        self.models = self

    def generate_content(self, model: str, contents: str):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return type("Response", (), {"text": self.text})()
