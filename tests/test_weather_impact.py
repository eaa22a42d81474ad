from goaguide.modules.planning.weather_impact import (
    activity_weather_note,
    assess_weather_impact,
    category_suitability,
    day_weather_recommendation,
)
from goaguide.schemas.trip import Category
from goaguide.schemas.weather import Suitability, WeatherImpact, WeatherReading


def test_rain_makes_outdoor_and_beach_unfavorable():
    impact = assess_weather_impact(WeatherReading("Rain", 26))
    assert impact.outdoor_activities is Suitability.UNFAVORABLE
    assert impact.beach_activities is Suitability.UNFAVORABLE
    assert impact.indoor_activities is Suitability.FAVORABLE


def test_drizzle_and_thunderstorm_count_as_rain():
    for condition in ("Drizzle", "Thunderstorm"):
        assert assess_weather_impact(WeatherReading(condition, 26)).beach_activities is Suitability.UNFAVORABLE


def test_heat_makes_outdoor_moderate_only():
    impact = assess_weather_impact(WeatherReading("Clear", 37))
    assert impact == WeatherImpact(outdoor_activities=Suitability.MODERATE)


def test_exactly_35_degrees_is_not_hot():
    assert assess_weather_impact(WeatherReading("Clear", 35)) == WeatherImpact()


def test_missing_weather_is_all_favorable():
    assert assess_weather_impact(None) == WeatherImpact()
    assert assess_weather_impact(WeatherReading.default()) == WeatherImpact()


def test_category_suitability_routes_to_the_right_label():
    impact = assess_weather_impact(WeatherReading("Rain", 26))
    assert category_suitability(Category.BEACH, impact) is Suitability.UNFAVORABLE
    assert category_suitability(Category.MARKET, impact) is Suitability.UNFAVORABLE
    assert category_suitability(Category.RELIGIOUS, impact) is Suitability.FAVORABLE


def test_recommendations_and_notes():
    rain, hot, clear = WeatherReading("Rain", 26), WeatherReading("Clear", 38), WeatherReading("Clear", 28)
    assert day_weather_recommendation(rain).startswith("Rainy day")
    assert day_weather_recommendation(hot).startswith("Hot day")
    assert day_weather_recommendation(clear) == "Good weather for outdoor activities"
    assert activity_weather_note(Category.BEACH, rain) == "Consider indoor alternatives due to rain"
    assert activity_weather_note(Category.NATURE, hot) == "Carry water and sun protection - high temperature"
    assert activity_weather_note(Category.BEACH, clear) == "Perfect weather for beach activities"
    assert activity_weather_note(Category.HISTORICAL, clear) == ""
