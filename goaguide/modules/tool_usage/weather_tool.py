"""
modules/tool_usage/weather_tool.py
-------------------------------------
Current-weather fetcher backed by the OpenWeatherMap `weather` endpoint.

Endpoint:
    GET https://api.openweathermap.org/data/2.5/weather
        ?q={city}&appid={key}&units=metric

No OAuth — plain API key in `appid` query param.

Response fields used:
    main.temp          → temperature_c
    weather[0].main    → condition   ("Rain", "Clear", "Clouds", ...)
    weather[0].description
    main.humidity
    wind.speed         → wind_speed_ms

Never raises: returns DependencyResult so the caller picks the fallback
(WeatherReading.default(), i.e. Clear / 28 °C).
"""

from __future__ import annotations

import logging
from typing import Optional

import requests

from goaguide import config
from goaguide.db.cache import TTLCache, get_cache, make_cache_key
from goaguide.schemas.result import DependencyResult
from goaguide.schemas.weather import WeatherReading

logger = logging.getLogger(__name__)


def _parse_reading(data: dict) -> WeatherReading:
    weather = data["weather"][0]
    return WeatherReading(
        condition=weather["main"],
        temperature_c=float(data["main"]["temp"]),
        description=weather.get("description", ""),
        humidity=data["main"].get("humidity"),
        wind_speed_ms=data.get("wind", {}).get("speed"),
    )


class WeatherTool:
    """Returns OpenWeatherMap readings, cached per city."""

    def __init__(
        self,
        cache: Optional[TTLCache] = None,
        api_key: str = config.OPENWEATHER_API_KEY,
        use_stub: bool = config.USE_STUB_WEATHER,
        timeout_s: float = config.WEATHER_TIMEOUT_S,
    ) -> None:
        self.cache     = cache if cache is not None else get_cache()
        self.api_key   = api_key
        self.use_stub  = use_stub
        self.timeout_s = timeout_s

    def fetch(self, city: str) -> DependencyResult[WeatherReading]:
        """Return the current reading for *city* or a `weather` DependencyError."""
        if self.use_stub or not self.api_key:
            return DependencyResult.failure("weather", "weather API not configured")

        key = make_cache_key("weather", {"city": city.strip().lower()})
        cached = self.cache.get(key)
        if cached is not None:
            return DependencyResult.success(WeatherReading.from_dict(cached))

        try:
            resp = requests.get(
                config.OPENWEATHER_URL,
                params={"q": city, "appid": self.api_key, "units": "metric"},
                timeout=self.timeout_s,
            )
            resp.raise_for_status()
            reading = _parse_reading(resp.json())
        except requests.RequestException as exc:
            logger.warning("Weather lookup for %r failed: %s", city, exc)
            return DependencyResult.failure("weather", str(exc))
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            logger.warning("Unexpected weather payload for %r: %s", city, exc)
            return DependencyResult.failure("weather", f"malformed response: {exc}")

        self.cache.set(key, reading.to_dict(), ttl=config.WEATHER_CACHE_TTL)
        return DependencyResult.success(reading)
