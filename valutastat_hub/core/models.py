"""Domain models for ValutaStat Hub.

Immutable value objects shared by the fetch/parse/summary pipeline:
Window, Observation, CurrencySummary and CollectionResult.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterator

from .exceptions import DomainError
from .utils import iter_days

VALUE_FIELDS: tuple[str, ...] = ("value", "unit_rate")


@dataclass(frozen=True, slots=True)
class Window:
    """Contiguous range of calendar days, end exclusive."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if not isinstance(self.start, date) or not isinstance(self.end, date):
            raise DomainError("window bounds must be dates")
        if self.start >= self.end:
            raise DomainError(
                f"window start {self.start.isoformat()} must precede end "
                f"{self.end.isoformat()}"
            )

    @classmethod
    def last_days(cls, days: int, today: date | None = None) -> "Window":
        """Window of `days` days ending just before `today`."""
        if not isinstance(days, int) or days <= 0:
            raise DomainError("days must be a positive int")
        end = today or date.today()
        return cls(start=end - timedelta(days=days), end=end)

    def days(self) -> Iterator[date]:
        return iter_days(self.start, self.end)

    def __len__(self) -> int:
        return (self.end - self.start).days


@dataclass(frozen=True, slots=True)
class Observation:
    """One currency's published rate for one requested day."""

    code: str
    name: str
    nominal: int
    value: float
    unit_rate: float
    day: date
    num_code: str = ""

    def rate_for(self, value_field: str) -> float:
        if value_field == "value":
            return self.value
        if value_field == "unit_rate":
            return self.unit_rate
        raise DomainError(f"unknown value field {value_field!r}")


@dataclass(frozen=True, slots=True)
class CurrencySummary:
    code: str
    name: str
    min_value: float
    min_day: date
    max_value: float
    max_day: date
    average: float
    samples: int


@dataclass(frozen=True, slots=True)
class CollectionResult:
    """Outcome of one full run over a window."""

    window: Window
    summaries: dict[str, CurrencySummary]
    succeeded_days: tuple[date, ...] = ()
    failed_days: dict[date, str] = field(default_factory=dict)

    @property
    def all_failed(self) -> bool:
        return not self.succeeded_days
