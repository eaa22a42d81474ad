from datetime import datetime, timezone

from goaguide.schemas.itinerary import ItineraryResult
from goaguide.schemas.trip import CandidateEvent, Category
from goaguide.schemas.weather import WeatherReading

NOW = datetime(2026, 11, 20, 9, 0, tzinfo=timezone.utc)


def test_result_survives_dict_round_trip(make_assembler, make_trip, pool):
    event = CandidateEvent(
        id="ev1", title="Sunset music cruise", start=datetime(2026, 12, 1, 18, 30, tzinfo=timezone.utc),
        category=Category.ENTERTAINMENT, price=600,
    )
    result = make_assembler(weather=WeatherReading("Clear", 30)).plan(
        make_trip(budget_per_person=500), pool, events=[event], now=NOW,
    )
    data = result.to_dict()
    assert ItineraryResult.from_dict(data).to_dict() == data


def test_serialised_shape(make_assembler, make_trip, pool):
    data = make_assembler().plan(make_trip(), pool, now=NOW).to_dict()
    assert data["currency"] == "INR"
    assert data["budget_status"] == "within_budget"
    entry = data["itinerary"][0]["activities"][0]
    assert entry["time"] == "09:00"
    assert entry["kind"] == "poi"
    assert set(data["score_breakdown"]) == {"budget_adherence", "variety", "preference_fit", "weather_fit"}
