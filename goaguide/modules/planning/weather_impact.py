"""
modules/planning/weather_impact.py
------------------------------------
Maps a weather observation to activity-suitability labels, plus the
human-readable day recommendation and per-activity weather notes.

Rule table:
    rain (Rain / Drizzle / Thunderstorm) → outdoor + beach unfavorable, indoor favorable
    temperature > HOT_TEMPERATURE_C      → outdoor moderate, beach + indoor favorable
    otherwise                            → everything favorable

No observation → WeatherReading.default() (Clear, 28 °C) → everything favorable.
"""

from __future__ import annotations

from typing import Optional

from goaguide import config
from goaguide.schemas.trip import Category
from goaguide.schemas.weather import Suitability, WeatherImpact, WeatherReading

_RAIN_CONDITIONS = {"rain", "drizzle", "thunderstorm"}

# Categories exposed to the elements; everything else can be done under cover.
OUTDOOR_CATEGORIES = frozenset({Category.BEACH, Category.NATURE, Category.ADVENTURE, Category.MARKET})
INDOOR_CAPABLE_CATEGORIES = frozenset(set(Category) - OUTDOOR_CATEGORIES)


def is_rainy(weather: WeatherReading) -> bool:
    return weather.condition.strip().lower() in _RAIN_CONDITIONS


def is_hot(weather: WeatherReading) -> bool:
    return weather.temperature_c > config.HOT_TEMPERATURE_C


def assess_weather_impact(weather: Optional[WeatherReading]) -> WeatherImpact:
    if weather is None:
        return WeatherImpact()
    if is_rainy(weather):
        return WeatherImpact(
            outdoor_activities=Suitability.UNFAVORABLE,
            beach_activities=Suitability.UNFAVORABLE,
            indoor_activities=Suitability.FAVORABLE,
        )
    if is_hot(weather):
        return WeatherImpact(
            outdoor_activities=Suitability.MODERATE,
            beach_activities=Suitability.FAVORABLE,
            indoor_activities=Suitability.FAVORABLE,
        )
    return WeatherImpact()


def category_suitability(category: Category, impact: WeatherImpact) -> Suitability:
    """Which of the three labels governs a category."""
    if category is Category.BEACH:
        return impact.beach_activities
    if category in OUTDOOR_CATEGORIES:
        return impact.outdoor_activities
    return impact.indoor_activities


def day_weather_recommendation(weather: WeatherReading) -> str:
    if is_rainy(weather):
        return "Rainy day - focus on indoor activities and covered areas"
    if is_hot(weather):
        return "Hot day - plan early morning and evening activities"
    return "Good weather for outdoor activities"


def activity_weather_note(category: Category, weather: WeatherReading) -> str:
    if category is Category.BEACH and is_rainy(weather):
        return "Consider indoor alternatives due to rain"
    if category in OUTDOOR_CATEGORIES and is_hot(weather):
        return "Carry water and sun protection - high temperature"
    if category is Category.BEACH and weather.condition.strip().lower() == "clear":
        return "Perfect weather for beach activities"
    return ""
