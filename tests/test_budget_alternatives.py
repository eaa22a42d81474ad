from datetime import date, time

import pytest

from goaguide.modules.planning.budget_alternatives import BudgetAlternativeGenerator
from goaguide.schemas.itinerary import AlternativeStrategy, DayPlan, EntryKind, ScheduledEntry, total_cost
from goaguide.schemas.trip import CandidateActivity


def _day(scheduler, day_no, *costs):
    entries = [
        ScheduledEntry(
            time=time(9 + 4 * i, 0),
            kind=EntryKind.POI,
            source=CandidateActivity(id=f"d{day_no}-{i}", name=f"Stop {i}", estimated_cost=float(c)),
        )
        for i, c in enumerate(costs)
    ]
    plan = DayPlan(day=day_no, date=date(2026, 12, day_no), activities=entries)
    scheduler.recost_day(plan)
    return plan


@pytest.fixture
def over_budget_days(scheduler):
    return [_day(scheduler, 1, 1000, 200), _day(scheduler, 2, 500, 300)]


def test_no_alternatives_within_budget(scheduler, over_budget_days):
    generator = BudgetAlternativeGenerator(scheduler)
    assert generator.generate(over_budget_days, 5000) == []


def test_three_strategies_when_over(scheduler, over_budget_days):
    alternatives = BudgetAlternativeGenerator(scheduler).generate(over_budget_days, 1200)
    assert [a.strategy for a in alternatives] == [
        AlternativeStrategy.REMOVE_EXPENSIVE,
        AlternativeStrategy.REPLACE_CHEAPER,
        AlternativeStrategy.REDUCE_DURATION,
    ]
    assert all(a.savings >= 0 for a in alternatives)


def test_remove_expensive_drops_the_priciest_stop(scheduler, over_budget_days):
    alt = BudgetAlternativeGenerator(scheduler).generate(over_budget_days, 1200)[0]
    assert [e.source.id for e in alt.days[0].activities] == ["d1-1"]
    assert total_cost(alt.days) == 1000
    assert alt.savings == 1000


def test_replace_cheaper_discounts_by_thirty_percent(scheduler, over_budget_days):
    alt = BudgetAlternativeGenerator(scheduler).generate(over_budget_days, 1200)[1]
    assert alt.savings == 600
    assert all("Switched to budget option" in e.notes for d in alt.days for e in d.activities)


def test_reduce_duration_drops_last_day(scheduler, over_budget_days):
    alt = BudgetAlternativeGenerator(scheduler).generate(over_budget_days, 1200)[2]
    assert [d.day for d in alt.days] == [1]
    assert alt.savings == 800


def test_base_plan_is_not_mutated(scheduler, over_budget_days):
    BudgetAlternativeGenerator(scheduler).generate(over_budget_days, 1200)
    assert total_cost(over_budget_days) == 2000
    assert len(over_budget_days[0].activities) == 2


def test_single_day_trip_skips_reduce_duration(scheduler):
    days = [_day(scheduler, 1, 900, 600)]
    alternatives = BudgetAlternativeGenerator(scheduler).generate(days, 500)
    assert [a.strategy for a in alternatives] == [
        AlternativeStrategy.REMOVE_EXPENSIVE,
        AlternativeStrategy.REPLACE_CHEAPER,
    ]
    # a day never loses its last stop
    assert len(alternatives[0].days[0].activities) == 1


def test_serialised_alternative_shape(scheduler, over_budget_days):
    data = BudgetAlternativeGenerator(scheduler).generate(over_budget_days, 1200)[0].to_dict()
    assert set(data) == {"type", "description", "itinerary", "savings"}
    assert data["type"] == "remove_expensive"
