from __future__ import annotations

import threading
from typing import Iterable, Mapping

from .exceptions import DomainError
from .models import Observation


class ObservationSet:
    """Concurrency-safe accumulator of observations keyed by currency code.

    Day tasks only write through insert/insert_day; the collected mapping
    becomes readable once via seal(), after every writer has finished.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_code: dict[str, list[Observation]] = {}
        self._sealed: dict[str, tuple[Observation, ...]] | None = None

    def insert(self, obs: Observation) -> None:
        with self._lock:
            self._ensure_open()
            self._by_code.setdefault(obs.code, []).append(obs)

    def insert_day(self, observations: Iterable[Observation]) -> int:
        """Append a whole day's batch under one lock. Returns number added."""
        batch = list(observations)
        with self._lock:
            self._ensure_open()
            for obs in batch:
                self._by_code.setdefault(obs.code, []).append(obs)
        return len(batch)

    def seal(self) -> Mapping[str, tuple[Observation, ...]]:
        """Close the set for writing and return its snapshot."""
        with self._lock:
            if self._sealed is None:
                self._sealed = {
                    code: tuple(items) for code, items in self._by_code.items()
                }
            return dict(self._sealed)

    @property
    def sealed(self) -> bool:
        return self._sealed is not None

    def __len__(self) -> int:
        with self._lock:
            return sum(len(items) for items in self._by_code.values())

    def _ensure_open(self) -> None:
        if self._sealed is not None:
            raise DomainError("observation set is sealed")
