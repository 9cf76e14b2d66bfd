"""Contribution scheduling for savings pools.

Turns a goal amount, a contributor count and a target date into the amount
each contributor has to put aside every month.  All money is integer cents.

Months are counted with the fixed ``DAYS_PER_MONTH`` policy (30.44 days per
month, rounded up, never less than one month) instead of calendar month
lengths.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Union

import pandas as pd

from .config import DAYS_PER_MONTH, DAYS_PER_MONTH_DISPLAY
from .errors import InvalidInput
from .parsing import parse_contributor_count, parse_currency_input, parse_date


@dataclass(frozen=True)
class GoalSpec:
    """Inputs for a contribution schedule.

    ``amount_saved_so_far`` may exceed ``total_amount``; over-saving is legal.
    """

    total_amount: int
    contributor_count: int = 1
    target_date: Union[date, str, None] = None
    amount_saved_so_far: int = 0

    @classmethod
    def from_form(
        cls,
        total_amount: Any,
        contributor_count: Any = None,
        target_date: Any = None,
        amount_saved_so_far: Any = None,
    ) -> "GoalSpec":
        """Build a goal from raw form text.

        Money is entered in major units (``"5,000"``) and stored as cents.
        An empty or nonsensical contributor count means a solo goal.

        Example:
            >>> GoalSpec.from_form("5,000", "4", "July 4, 2027", "1000")
            GoalSpec(total_amount=500000, contributor_count=4, target_date='July 4, 2027', amount_saved_so_far=100000)
        """
        return cls(
            total_amount=parse_currency_input(total_amount),
            contributor_count=parse_contributor_count(contributor_count),
            target_date=target_date,
            amount_saved_so_far=parse_currency_input(amount_saved_so_far),
        )


@dataclass(frozen=True)
class ContributionPlan:
    """Derived schedule for a :class:`GoalSpec`.

    ``per_contributor_per_month`` is ``None`` whenever ``is_date_valid`` is
    false; callers should ask for a target date rather than show a number.
    """

    total_amount: int
    amount_saved_so_far: int
    remaining_amount: int
    surplus_amount: int
    contributor_count: int
    months_remaining: int
    is_date_valid: bool
    target_date: Optional[date] = None
    per_contributor_per_month: Optional[int] = None
    per_contributor_per_day: Optional[int] = None

    @property
    def is_funded(self) -> bool:
        return self.remaining_amount == 0


def months_between(start: date, end: date) -> int:
    """Whole months from ``start`` to ``end`` under the 30.44-day policy, minimum 1."""
    days = (end - start).days
    return max(1, math.ceil(days / DAYS_PER_MONTH))


def compute_plan(goal: GoalSpec, today: Optional[date] = None) -> ContributionPlan:
    """Compute the per-contributor monthly contribution for ``goal``.

    Args:
        goal: Goal amount, contributors, target date and progress so far.
        today: Reference date; defaults to ``date.today()``.

    Returns:
        A :class:`ContributionPlan`.  Without a valid future target date the
        plan reports totals only.

    Raises:
        InvalidInput: If ``goal.contributor_count`` is below 1.

    Example:
        >>> goal = GoalSpec(500000, 4, date(2026, 7, 15), 100000)
        >>> compute_plan(goal, today=date(2026, 1, 15)).per_contributor_per_month
        16666
    """
    if goal.contributor_count < 1:
        raise InvalidInput(
            f"contributor_count must be at least 1, got {goal.contributor_count}"
        )

    today = today or date.today()
    remaining = max(0, goal.total_amount - goal.amount_saved_so_far)
    surplus = max(0, goal.amount_saved_so_far - goal.total_amount)

    target = parse_date(goal.target_date)
    if target is None or target <= today:
        return ContributionPlan(
            total_amount=goal.total_amount,
            amount_saved_so_far=goal.amount_saved_so_far,
            remaining_amount=remaining,
            surplus_amount=surplus,
            contributor_count=goal.contributor_count,
            months_remaining=1,
            is_date_valid=False,
            target_date=target,
        )

    months = months_between(today, target)
    per_month = remaining // goal.contributor_count // months
    return ContributionPlan(
        total_amount=goal.total_amount,
        amount_saved_so_far=goal.amount_saved_so_far,
        remaining_amount=remaining,
        surplus_amount=surplus,
        contributor_count=goal.contributor_count,
        months_remaining=months,
        is_date_valid=True,
        target_date=target,
        per_contributor_per_month=per_month,
        per_contributor_per_day=per_month // DAYS_PER_MONTH_DISPLAY,
    )


def projection_frame(plan: ContributionPlan) -> pd.DataFrame:
    """Month-by-month projection of the pool balance if everyone pays on schedule.

    Returns a DataFrame with ``Month`` (1-based), ``Contribution`` (all
    contributors, cents) and ``Cumulative Saved`` (cents, starting from the
    amount already saved).  The last month absorbs the rounding remainder so
    the projection lands exactly on the goal.  Empty when the plan has no
    valid date.
    """
    columns = ['Month', 'Contribution', 'Cumulative Saved']
    if not plan.is_date_valid or plan.per_contributor_per_month is None:
        return pd.DataFrame(columns=columns)

    monthly = plan.per_contributor_per_month * plan.contributor_count
    contributions = [monthly] * plan.months_remaining
    contributions[-1] += plan.remaining_amount - monthly * plan.months_remaining

    frame = pd.DataFrame({
        'Month': range(1, plan.months_remaining + 1),
        'Contribution': contributions,
    })
    frame['Cumulative Saved'] = frame['Contribution'].cumsum() + plan.amount_saved_so_far
    return frame[columns]
