from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from datetime import date

from ..core.aggregator import ObservationSet
from ..core.exceptions import ApiRequestError
from ..core.models import CollectionResult, Window
from ..core.summary import summarize
from ..core.utils import format_day
from ..logging_config import configure_logging
from .api_clients import BaseApiClient, CbrDailyClient
from .config import ParserConfig, load_parser_config
from .xml_parser import parse_document


class RatesCollector:
    """Orchestrates per-day fetch and parse, fan-in, and summarization.

    - Launches one thread per day of the window, no extra cap
    - Merges each successful day into a shared ObservationSet
    - Summarizes only after every day-task has finished
    """

    def __init__(
        self, cfg: ParserConfig | None = None, client: BaseApiClient | None = None
    ) -> None:
        self.cfg = cfg or load_parser_config()
        self.client = client or CbrDailyClient(self.cfg)

    def _process_day(self, day: date, observations: ObservationSet) -> int:
        raw = self.client.fetch(day)
        parsed = parse_document(raw, day)
        return observations.insert_day(parsed)

    def collect(self, window: Window, value_field: str | None = None) -> CollectionResult:
        """Run the whole window once.

        Args:
            window: Days to request.
            value_field: "value" or "unit_rate"; defaults to config.
        Returns:
            CollectionResult with summaries and per-day outcome.
        """
        logger = logging.getLogger("valutastat")
        field = value_field or self.cfg.VALUE_FIELD
        days = list(window.days())
        logger.info(
            "Collecting %d days from %s to %s...",
            len(days),
            format_day(window.start),
            format_day(window.end),
        )

        observations = ObservationSet()
        with ThreadPoolExecutor(
            max_workers=len(days), thread_name_prefix="valutastat-day"
        ) as pool:
            futures: dict[Future[int], date] = {
                pool.submit(self._process_day, day, observations): day for day in days
            }
            wait(futures)

        succeeded: list[date] = []
        failed: dict[date, str] = {}
        for future, day in futures.items():
            exc = future.exception()
            if exc is None:
                succeeded.append(day)
                continue
            failed[day] = str(exc)
            if isinstance(exc, ApiRequestError):
                logger.error("Skipping %s: %s", format_day(day), exc)
            else:
                logger.error(
                    "Skipping %s: unexpected %s: %s",
                    format_day(day),
                    type(exc).__name__,
                    exc,
                    exc_info=exc,
                )

        collected = observations.seal()
        summaries = summarize(collected, field)
        logger.info(
            "Collection done: %d days OK, %d failed, %d observations, %d currencies",
            len(succeeded),
            len(failed),
            sum(len(v) for v in collected.values()),
            len(summaries),
        )
        return CollectionResult(
            window=window,
            summaries=summaries,
            succeeded_days=tuple(sorted(succeeded)),
            failed_days=dict(sorted(failed.items())),
        )


def run_collection(
    days: int | None = None,
    value_field: str | None = None,
    today: date | None = None,
) -> CollectionResult:
    """Convenience function to run a collection without instantiating the class."""
    configure_logging()
    collector = RatesCollector()
    window = Window.last_days(
        days if days is not None else collector.cfg.INTERVAL_DAYS, today=today
    )
    return collector.collect(window, value_field=value_field)
