"""Reduction of collected observations into per-currency statistics."""

from __future__ import annotations

from typing import Iterable, Mapping

from .models import CurrencySummary, Observation
from .utils import format_day


def summarize_currency(
    code: str, observations: Iterable[Observation], value_field: str = "value"
) -> CurrencySummary | None:
    """Return min/max/average for one currency, or None if it has no samples.

    Observations are ordered by day first, so an extreme shared by several
    days is attributed to the earliest of them.
    """
    ordered = sorted(observations, key=lambda o: o.day)
    if not ordered:
        return None

    first = ordered[0]
    min_value = max_value = first.rate_for(value_field)
    min_day = max_day = first.day
    total = 0.0
    for obs in ordered:
        value = obs.rate_for(value_field)
        if value < min_value:
            min_value, min_day = value, obs.day
        if value > max_value:
            max_value, max_day = value, obs.day
        total += value

    return CurrencySummary(
        code=code,
        name=first.name,
        min_value=min_value,
        min_day=min_day,
        max_value=max_value,
        max_day=max_day,
        average=total / len(ordered),
        samples=len(ordered),
    )


def summarize(
    observations: Mapping[str, Iterable[Observation]], value_field: str = "value"
) -> dict[str, CurrencySummary]:
    """Summarize every currency with at least one observation.

    Returns a mapping ordered lexically by currency code.
    """
    out: dict[str, CurrencySummary] = {}
    for code in sorted(observations):
        summary = summarize_currency(code, observations[code], value_field)
        if summary is not None:
            out[code] = summary
    return out


def format_summary_line(summary: CurrencySummary) -> str:
    return (
        f"{summary.name}({summary.code})\t, "
        f"maximum value: {summary.max_value:.4f} on {format_day(summary.max_day)}; "
        f"minimum value: {summary.min_value:.4f} on {format_day(summary.min_day)}; "
        f"average value: {summary.average:.4f}"
    )
