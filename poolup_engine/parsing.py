"""Lenient parsing of user-entered text.

Form screens pass every numeric field through as free-form text, so the
helpers here never raise on malformed input: numbers degrade to ``0`` and
dates degrade to ``None``.

Dates are handled by an ordered list of parser strategies.  Each strategy
either returns a :class:`datetime.date` or ``None`` to hand over to the next
one, which keeps every format testable on its own:

* ISO 8601 (``2026-07-04``, ``2026-07-04T09:30:00Z``)
* month name formats (``July 4, 2026``, ``4 July 2026``, ``Jul 4th 2026``)
* numeric month/day/year with slash, dash or space separators (``7/4/2026``)
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Any, Callable, Optional, Sequence

import numpy as np
import pandas as pd

from .config import CENTS_PER_UNIT
from .errors import UnparsableDate

logger = logging.getLogger(__name__)

DateParser = Callable[[str], Optional[date]]

_CURRENCY_NOISE = re.compile(r"[\s,$€£¥₹₩]")
_NUMERIC_PREFIX = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

_ISO_PATTERN = re.compile(r"^\d{4}-\d{1,2}-\d{1,2}(?:[T ].*)?$")
_MONTH_WORD = re.compile(r"[A-Za-z]{3,}")
_DAY_AND_YEAR = re.compile(r"^(?=.*\b\d{1,2}(?:st|nd|rd|th)?\b)(?=.*\b\d{4}\b)")
_NUMERIC_SEPARATORS = re.compile(r"[/\-\s,.]+")


# ---------------------------------------------------------------------------
# Numbers and money
# ---------------------------------------------------------------------------

def parse_amount(value: Any) -> float:
    """Parse a user-entered amount into a non-negative float.

    Currency symbols, whitespace and thousands separators are ignored and the
    leading numeric part of the text is used, so ``"$1,200 total"`` parses as
    ``1200.0``.  Empty, unparsable, non-finite and negative values give 0.

    Example:
        >>> parse_amount("$1,200.50")
        1200.5
        >>> parse_amount("abc")
        0.0
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float, np.number)):
        number = float(value)
    else:
        cleaned = _CURRENCY_NOISE.sub('', str(value))
        match = _NUMERIC_PREFIX.match(cleaned)
        if not match:
            return 0.0
        number = float(pd.to_numeric(match.group(0), errors='coerce'))
    if not np.isfinite(number) or number < 0:
        logger.debug("Treating amount %r as zero", value)
        return 0.0
    return number


def parse_currency_input(value: Any) -> int:
    """Parse a major-unit amount (``"12.34"``) into integer cents (``1234``)."""
    return int(round(parse_amount(value) * CENTS_PER_UNIT))


def parse_count(value: Any) -> int:
    """Parse a whole-number count, truncating any fractional part."""
    return int(parse_amount(value))


def parse_contributor_count(value: Any) -> int:
    """Parse a contributor count typed into a form; anything below 1 means solo."""
    return max(1, parse_count(value))


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_iso_date(text: str) -> Optional[date]:
    """ISO 8601 date or timestamp."""
    if not _ISO_PATTERN.match(text):
        return None
    parsed = pd.to_datetime(text, errors='coerce')
    if pd.isna(parsed):
        return None
    return parsed.date()


def parse_month_name_date(text: str) -> Optional[date]:
    """Free-form dates that spell the month out, in either day order.

    Only text with a word, a day and a four digit year is handed to pandas,
    so partial dates are never completed from today.
    """
    if not (_MONTH_WORD.search(text) and _DAY_AND_YEAR.match(text)):
        return None
    parsed = pd.to_datetime(text, errors='coerce')
    if pd.isna(parsed):
        return None
    return parsed.date()


def parse_numeric_date(text: str) -> Optional[date]:
    """Numeric month/day/year; two-digit years are taken as 20xx."""
    parts = [part for part in _NUMERIC_SEPARATORS.split(text) if part]
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        return None
    month, day, year = (int(part) for part in parts)
    if len(parts[2]) == 2:
        year += 2000
    elif len(parts[2]) != 4:
        return None
    return _safe_date(year, month, day)


DATE_PARSERS: Sequence[DateParser] = (
    parse_iso_date,
    parse_month_name_date,
    parse_numeric_date,
)


def parse_date(
    value: Any,
    *,
    strict: bool = False,
    parsers: Sequence[DateParser] = DATE_PARSERS,
) -> Optional[date]:
    """Parse a date using the first strategy in ``parsers`` that accepts it.

    Args:
        value: ``date``/``datetime`` instances pass straight through; anything
            else is converted to text and offered to each parser in order.
        strict: Raise :class:`UnparsableDate` instead of returning ``None``.
        parsers: Ordered parser strategies.

    Returns:
        The parsed date, or ``None`` when nothing matched and ``strict`` is off.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = '' if value is None else str(value).strip()
    if text:
        for parser in parsers:
            parsed = parser(text)
            if parsed is not None:
                return parsed

    logger.debug("No date parser accepted %r", value)
    if strict:
        raise UnparsableDate(text)
    return None
