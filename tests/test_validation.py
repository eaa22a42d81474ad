from goaguide.modules.validation import filter_valid, validate_candidate, validate_trip
from goaguide.schemas.trip import CandidateActivity, GeoPoint


def test_valid_candidate_passes():
    result = validate_candidate({"name": "Fort Aguada", "location": {"lat": 15.49, "lon": 73.77}, "rating": 4.4})
    assert result.valid
    assert bool(result)


def test_candidate_without_location_is_allowed():
    assert validate_candidate({"title": "Night market", "location": None})


def test_candidate_errors_are_collected():
    result = validate_candidate({"name": "", "location": {"lat": 95, "lon": 73.7}, "rating": 7})
    assert not result.valid
    assert len(result.errors) == 3


def test_null_island_is_rejected():
    assert not validate_candidate({"name": "X", "location": {"lat": 0.0, "lon": 0.0}})


def test_trip_validation():
    good = {"budget_per_person": 5000, "party_size": 2, "duration_days": 3, "archetype": "family"}
    assert validate_trip(good)
    bad = validate_trip({"budget_per_person": 0, "party_size": 0, "duration_days": "3", "archetype": "pilgrim"})
    assert len(bad.errors) == 4


def test_filter_valid_keeps_objects():
    items = [
        CandidateActivity(id="a", name="Baga Beach", location=GeoPoint(15.55, 73.75)),
        CandidateActivity(id="b", name="Nowhere", location=GeoPoint(0.0, 0.0)),
    ]
    assert [c.id for c in filter_valid(items, validate_candidate)] == ["a"]
