"""Budget aggregation for pool templates.

Sums the currency line items a user typed into a template into a suggested
goal total.  This runs on every keystroke, so partial or garbage input is
the normal case: anything that doesn't parse as a non-negative number
simply contributes nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import pandas as pd

from .errors import InvalidInput
from .formatting import format_cents
from .parsing import parse_amount, parse_count, parse_currency_input
from .templates import CategoryPolicy, PoolTemplate, TemplateCatalog, default_template_catalog

BudgetEntry = Mapping[str, Any]


@dataclass(frozen=True)
class BudgetLine:
    field_id: str
    name: str
    amount: int


@dataclass(frozen=True)
class BudgetInsight:
    kind: str
    amount: int
    message: str


@dataclass(frozen=True)
class BudgetSummary:
    """Result of :func:`aggregate`.  All amounts are cents."""

    total: int
    per_person_total: int
    contributor_count: int
    suggested_total: int
    breakdown: Tuple[BudgetLine, ...] = ()
    tips: Tuple[str, ...] = ()
    insight: Optional[BudgetInsight] = None

    def to_frame(self) -> pd.DataFrame:
        """Breakdown as a DataFrame with ``Field``, ``Name`` and ``Amount`` columns."""
        return pd.DataFrame(
            [{'Field': line.field_id, 'Name': line.name, 'Amount': line.amount} for line in self.breakdown],
            columns=['Field', 'Name', 'Amount'],
        )


InsightFn = Callable[[BudgetEntry, int, int], Optional[BudgetInsight]]


def _per_person_share(entries: BudgetEntry, total: int, contributor_count: int) -> Optional[BudgetInsight]:
    if contributor_count <= 1 or total <= 0:
        return None
    share = total // contributor_count
    return BudgetInsight('per_person_share', share, f"{format_cents(share)} per person")


def _per_guest_cost(entries: BudgetEntry, total: int, contributor_count: int) -> Optional[BudgetInsight]:
    guests = parse_count(entries.get('guest_count'))
    if guests <= 0 or total <= 0:
        return None
    per_guest = int(round(total / guests))
    return BudgetInsight('per_guest_cost', per_guest, f"~{format_cents(per_guest)} per guest")


def _down_payment(entries: BudgetEntry, total: int, contributor_count: int) -> Optional[BudgetInsight]:
    price = parse_currency_input(entries.get('home_price'))
    percent = parse_amount(entries.get('down_payment_percent'))
    if price <= 0 or percent <= 0:
        return None
    down_payment = int(round(price * percent / 100))
    return BudgetInsight(
        'down_payment',
        down_payment,
        f"{percent:g}% of {format_cents(price)} = {format_cents(down_payment)}",
    )


def _emergency_coverage(entries: BudgetEntry, total: int, contributor_count: int) -> Optional[BudgetInsight]:
    monthly = parse_currency_input(entries.get('monthly_expenses'))
    months = parse_count(entries.get('target_months'))
    if monthly <= 0 or months <= 0:
        return None
    coverage = monthly * months
    return BudgetInsight(
        'emergency_coverage',
        coverage,
        f"{months} months × {format_cents(monthly)} = {format_cents(coverage)}",
    )


INSIGHTS: Dict[str, InsightFn] = {
    'per_person_share': _per_person_share,
    'per_guest_cost': _per_guest_cost,
    'down_payment': _down_payment,
    'emergency_coverage': _emergency_coverage,
}


def _suggested_total(
    template: PoolTemplate, policy: CategoryPolicy, total: int, insight: Optional[BudgetInsight]
) -> int:
    if insight is not None and policy.insight_overrides_total:
        return insight.amount
    if total > 0:
        return total
    index = policy.fallback_suggestion_index
    if index is not None and 0 <= index < len(template.suggested_amounts):
        return template.suggested_amounts[index]
    return 0


def aggregate(
    template: PoolTemplate,
    entries: Optional[BudgetEntry],
    contributor_count: int = 1,
    catalog: Optional[TemplateCatalog] = None,
) -> BudgetSummary:
    """Sum a template's currency line items into a goal total.

    Args:
        template: The template whose fields the entries belong to.
        entries: Field id to user-entered text in major units (``"800"`` is
            $800).  Never modified.
        contributor_count: Pool size; per-person categories multiply by it.
        catalog: Source of category policies; defaults to the shipped catalog.

    Returns:
        A :class:`BudgetSummary` whose amounts are all integer cents, so
        $7,200 of entries comes back as ``720000``.  It also carries the
        per-field breakdown, the category's static tips and at most one
        computed insight.

    Raises:
        InvalidInput: If ``contributor_count`` is below 1.

    Example:
        >>> from poolup_engine.templates import template_by_id
        >>> trip = template_by_id('vacation_trip')
        >>> summary = aggregate(trip, {'flight': '800', 'hotel': '1200', 'food': '400'}, 3)
        >>> summary.total
        720000
        >>> format_cents(summary.total)
        '$7,200.00'
    """
    if contributor_count < 1:
        raise InvalidInput(f"contributor_count must be at least 1, got {contributor_count}")

    entries = entries or {}
    policy = (catalog or default_template_catalog()).policy_for(template.category)

    breakdown = tuple(
        BudgetLine(field.id, field.name, parse_currency_input(entries.get(field.id)))
        for field in template.currency_fields
    )
    per_person_total = sum(line.amount for line in breakdown)
    total = per_person_total * contributor_count if policy.per_person else per_person_total

    insight = None
    if policy.insight is not None:
        insight = INSIGHTS[policy.insight](entries, total, contributor_count)

    return BudgetSummary(
        total=total,
        per_person_total=per_person_total,
        contributor_count=contributor_count,
        suggested_total=_suggested_total(template, policy, total, insight),
        breakdown=breakdown,
        tips=policy.tips,
        insight=insight,
    )
