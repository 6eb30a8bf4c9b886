"""Utility helpers for ValutaStat Hub.

Форматирование дат провайдера, перебор дней и нормализация десятичных строк.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import Iterator

DAY_FORMAT = "%d/%m/%Y"


def format_day(day: date) -> str:
    """Format a day the way the provider addresses publications (DD/MM/YYYY)."""
    return day.strftime(DAY_FORMAT)


def parse_day(value: str) -> date:
    """Parse a DD/MM/YYYY or DD.MM.YYYY string into a date.

    Raises:
        ValueError: when the string matches neither format
    """
    text = (value or "").strip()
    for fmt in (DAY_FORMAT, "%d.%m.%Y"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"unrecognized date {value!r}")


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield each day from start (inclusive) to end (exclusive), ascending."""
    day = start
    while day < end:
        yield day
        day += timedelta(days=1)


def normalize_decimal(text: str) -> str:
    """Replace a comma decimal separator with a period and trim whitespace."""
    return (text or "").strip().replace(",", ".")


def parse_rate(text: str) -> float:
    """Parse provider decimal text ("93,5" or "93.5") into a float.

    Raises:
        ValueError: when the normalized text is not a finite number
    """
    value = float(normalize_decimal(text))
    if not math.isfinite(value):
        raise ValueError(f"non-finite rate {text!r}")
    return value
