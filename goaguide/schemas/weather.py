"""
schemas/weather.py
------------------
Weather observation and the activity-suitability labels derived from it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from goaguide import config


class Suitability(str, Enum):
    FAVORABLE   = "favorable"
    MODERATE    = "moderate"
    UNFAVORABLE = "unfavorable"


@dataclass(frozen=True)
class WeatherReading:
    """Current conditions for the destination (OpenWeatherMap `weather` endpoint)."""
    condition: str              # OWM `weather[0].main`, e.g. "Rain", "Clear"
    temperature_c: float
    description: str = ""
    humidity: float | None = None
    wind_speed_ms: float | None = None
    is_default: bool = False    # True when the safe default was injected

    @classmethod
    def default(cls) -> "WeatherReading":
        return cls(
            condition=config.DEFAULT_WEATHER_CONDITION,
            temperature_c=config.DEFAULT_WEATHER_TEMP_C,
            description="sunny",
            is_default=True,
        )

    def to_dict(self) -> dict:
        return {
            "condition":     self.condition,
            "temperature_c": self.temperature_c,
            "description":   self.description,
            "humidity":      self.humidity,
            "wind_speed_ms": self.wind_speed_ms,
            "is_default":    self.is_default,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WeatherReading":
        return cls(
            condition=data["condition"],
            temperature_c=float(data["temperature_c"]),
            description=data.get("description", ""),
            humidity=data.get("humidity"),
            wind_speed_ms=data.get("wind_speed_ms"),
            is_default=bool(data.get("is_default", False)),
        )


@dataclass(frozen=True)
class WeatherImpact:
    outdoor_activities: Suitability = Suitability.FAVORABLE
    beach_activities: Suitability   = Suitability.FAVORABLE
    indoor_activities: Suitability  = Suitability.FAVORABLE

    def to_dict(self) -> dict:
        return {
            "outdoor_activities": self.outdoor_activities.value,
            "beach_activities":   self.beach_activities.value,
            "indoor_activities":  self.indoor_activities.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WeatherImpact":
        return cls(
            outdoor_activities=Suitability(data["outdoor_activities"]),
            beach_activities=Suitability(data["beach_activities"]),
            indoor_activities=Suitability(data["indoor_activities"]),
        )
