"""Unit tests for poolup_engine.scheduler."""

from datetime import date, timedelta

import pytest

from poolup_engine.errors import InvalidInput
from poolup_engine.scheduler import GoalSpec, compute_plan, months_between, projection_frame

TODAY = date(2026, 1, 15)


def test_group_goal_with_progress():
    goal = GoalSpec(
        total_amount=500000,
        contributor_count=4,
        target_date=date(2026, 7, 15),
        amount_saved_so_far=100000,
    )
    plan = compute_plan(goal, today=TODAY)

    assert plan.is_date_valid
    assert plan.remaining_amount == 400000
    assert plan.months_remaining == 6
    assert plan.per_contributor_per_month == 16666
    assert plan.per_contributor_per_day == 555
    assert plan.surplus_amount == 0


def test_date_strings_are_parsed():
    for text in ("2026-07-15", "July 15, 2026", "07/15/2026", "7-15-2026"):
        plan = compute_plan(GoalSpec(120000, 1, text), today=TODAY)
        assert plan.is_date_valid, text
        assert plan.target_date == date(2026, 7, 15)
        assert plan.months_remaining == 6


@pytest.mark.parametrize("target", [None, "", "whenever", "2025-12-31", TODAY])
def test_invalid_dates_give_no_monthly_figure(target):
    plan = compute_plan(GoalSpec(100000, 2, target, 25000), today=TODAY)

    assert not plan.is_date_valid
    assert plan.per_contributor_per_month is None
    assert plan.per_contributor_per_day is None
    assert plan.remaining_amount == 75000
    assert plan.total_amount == 100000


def test_tomorrow_rounds_up_to_one_month():
    plan = compute_plan(GoalSpec(30000, 3, TODAY + timedelta(days=1)), today=TODAY)
    assert plan.months_remaining == 1
    assert plan.per_contributor_per_month == 10000


def test_months_use_fixed_day_count():
    assert months_between(TODAY, TODAY + timedelta(days=30)) == 1
    assert months_between(TODAY, TODAY + timedelta(days=31)) == 2
    assert months_between(TODAY, TODAY + timedelta(days=365)) == 12


def test_over_saved_goal_is_not_negative():
    plan = compute_plan(GoalSpec(100000, 2, date(2026, 6, 1), 130000), today=TODAY)

    assert plan.remaining_amount == 0
    assert plan.surplus_amount == 30000
    assert plan.per_contributor_per_month == 0
    assert plan.is_funded


def test_zero_is_a_real_answer_not_a_sentinel():
    plan = compute_plan(GoalSpec(0, 1, date(2026, 6, 1)), today=TODAY)
    assert plan.is_date_valid
    assert plan.per_contributor_per_month == 0


@pytest.mark.parametrize("count", [0, -2])
def test_non_positive_contributors_raise(count):
    with pytest.raises(InvalidInput):
        compute_plan(GoalSpec(100000, count, date(2026, 6, 1)), today=TODAY)


def test_from_form_parses_text():
    goal = GoalSpec.from_form("$5,000", "4", "July 15, 2026", "1,000")

    assert goal == GoalSpec(500000, 4, "July 15, 2026", 100000)
    assert compute_plan(goal, today=TODAY).per_contributor_per_month == 16666


def test_from_form_falls_back_to_solo():
    goal = GoalSpec.from_form("900", "", None, "")
    assert goal.contributor_count == 1
    assert goal.amount_saved_so_far == 0


def test_default_today_is_used():
    far_future = date.today() + timedelta(days=400)
    plan = compute_plan(GoalSpec(1000000, 1, far_future))
    assert plan.is_date_valid
    assert plan.months_remaining >= 13


def test_projection_reaches_goal():
    goal = GoalSpec(500000, 4, date(2026, 7, 15), 100000)
    frame = projection_frame(compute_plan(goal, today=TODAY))

    assert list(frame.columns) == ['Month', 'Contribution', 'Cumulative Saved']
    assert len(frame) == 6
    assert frame['Contribution'].iloc[0] == 16666 * 4
    assert frame['Cumulative Saved'].iloc[-1] == 500000


def test_projection_empty_without_date():
    frame = projection_frame(compute_plan(GoalSpec(500000, 4, None), today=TODAY))
    assert frame.empty
