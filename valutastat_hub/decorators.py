from __future__ import annotations

import logging
import time
from datetime import date
from functools import wraps
from typing import Any, Callable

from .core.utils import format_day

_logger = logging.getLogger("valutastat")


def _find_day(args: tuple[Any, ...], kwargs: dict[str, Any]) -> date | None:
    day = kwargs.get("day")
    if isinstance(day, date):
        return day
    # Positional lookup: methods receive self first, functions the payload
    for arg in args:
        if isinstance(arg, date):
            return arg
    return None


def log_stage(stage: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator to log one pipeline stage (FETCH, PARSE) for a single day.

    Logs day, elapsed milliseconds and result (OK/ERROR). Does not swallow
    exceptions.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            day = _find_day(args, kwargs)
            day_s = format_day(day) if day else "?"
            t0 = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:  # noqa: BLE001
                elapsed_ms = int((time.perf_counter() - t0) * 1000)
                _logger.debug(
                    "%s day=%s elapsed_ms=%d result=ERROR error_type=%s "
                    "error_message='%s'",
                    stage,
                    day_s,
                    elapsed_ms,
                    type(exc).__name__,
                    str(exc).replace("'", "\\'"),
                )
                raise
            elapsed_ms = int((time.perf_counter() - t0) * 1000)
            size = len(result) if hasattr(result, "__len__") else None
            _logger.debug(
                "%s day=%s elapsed_ms=%d size=%s result=OK",
                stage,
                day_s,
                elapsed_ms,
                size,
            )
            return result

        return wrapper

    return decorator
