"""Formatting utilities for currency and badge text display.

The calculators work in integer cents; this module is the presentation
boundary where cents become display strings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict

from .config import CENTS_PER_UNIT, DEFAULT_CURRENCY

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Currency:
    code: str
    symbol: str
    name: str
    decimal_places: int = 2


SUPPORTED_CURRENCIES: Dict[str, Currency] = {
    currency.code: currency
    for currency in (
        Currency('USD', '$', 'US Dollar'),
        Currency('EUR', '€', 'Euro'),
        Currency('GBP', '£', 'British Pound'),
        Currency('CAD', 'C$', 'Canadian Dollar'),
        Currency('AUD', 'A$', 'Australian Dollar'),
        Currency('JPY', '¥', 'Japanese Yen', 0),
        Currency('CHF', 'CHF', 'Swiss Franc'),
        Currency('CNY', '¥', 'Chinese Yuan'),
        Currency('INR', '₹', 'Indian Rupee'),
        Currency('BRL', 'R$', 'Brazilian Real'),
        Currency('MXN', '$', 'Mexican Peso'),
        Currency('KRW', '₩', 'South Korean Won', 0),
    )
}


def get_currency(code: str) -> Currency:
    """Look up a currency, falling back to the default one for unknown codes."""
    currency = SUPPORTED_CURRENCIES.get(code.upper()) if code else None
    if currency is None:
        logger.warning("Currency %s not supported, falling back to %s", code, DEFAULT_CURRENCY)
        currency = SUPPORTED_CURRENCIES[DEFAULT_CURRENCY]
    return currency


def format_cents(
    cents: int,
    currency: str = DEFAULT_CURRENCY,
    include_sign: bool = True,
    compact: bool = False,
) -> str:
    """Format an amount of minor units for display.

    Args:
        cents: Amount in minor currency units.
        currency: ISO currency code.
        include_sign: Whether to include the currency symbol.
        compact: Drop the decimals when the amount is a whole number.

    Example:
        >>> format_cents(16666)
        '$166.66'
        >>> format_cents(100000, compact=True)
        '$1,000'
        >>> format_cents(123456, currency='JPY')
        '¥1,235'
    """
    info = get_currency(currency)
    amount = cents / CENTS_PER_UNIT
    places = info.decimal_places
    if places == 0 or (compact and cents % CENTS_PER_UNIT == 0):
        places = 0
        amount = round(amount)
    formatted = f"{abs(amount):,.{places}f}"
    sign = '-' if amount < 0 else ''
    return f"{sign}{info.symbol}{formatted}" if include_sign else f"{sign}{formatted}"


def format_requirement(achievement: Any) -> str:
    """Human-readable requirement for a badge, e.g. ``'Invite 3 friends'``.

    Example:
        >>> from poolup_engine.achievements import default_achievement_catalog
        >>> format_requirement(default_achievement_catalog().get('four_digit_club'))
        'Save $1,000'
    """
    value = achievement.requirement_value
    kind = getattr(achievement.requirement_type, 'value', achievement.requirement_type)
    plural = 's' if value > 1 else ''
    if kind == 'friends_invited':
        return f"Invite {value} friend{plural}"
    if kind == 'pools_created':
        return f"Create {value} pool{plural}"
    if kind == 'total_saved':
        return f"Save {format_cents(value, compact=True)}"
    if kind == 'group_size':
        return f"Lead a group of {value}+ members"
    if kind == 'group_savings':
        return f"Group saves {format_cents(value, compact=True)}+"
    return 'Complete special requirement'
