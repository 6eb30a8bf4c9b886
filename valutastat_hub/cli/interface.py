"""CLI entrypoint for ValutaStat Hub.

Единственная точка входа для пользователя. Здесь только разбор
аргументов и вывод. Вся логика в parser_service.collector.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from prettytable import PrettyTable

from ..core.exceptions import DomainError
from ..core.models import VALUE_FIELDS, CollectionResult, Window
from ..core.summary import format_summary_line
from ..core.utils import format_day
from ..logging_config import configure_logging
from ..parser_service.collector import RatesCollector
from ..parser_service.config import load_parser_config


def _print_error(msg: str) -> None:
    """Print a user-facing error message (no stack traces)."""
    print(msg, file=sys.stderr)


def _print_lines(result: CollectionResult) -> None:
    for summary in result.summaries.values():
        print(format_summary_line(summary))


def _print_table(result: CollectionResult) -> None:
    """Render summaries as a table.

    Args:
        result: Result of RatesCollector.collect.
    """
    table = PrettyTable()
    table.field_names = [
        "Currency",
        "Code",
        "Max",
        "Max on",
        "Min",
        "Min on",
        "Average",
        "Days",
    ]
    table.align["Currency"] = "l"
    table.align["Code"] = "l"
    for col in ("Max", "Min", "Average", "Days"):
        table.align[col] = "r"
    for s in result.summaries.values():
        table.add_row([
            s.name,
            s.code,
            f"{s.max_value:.4f}",
            format_day(s.max_day),
            f"{s.min_value:.4f}",
            format_day(s.min_day),
            f"{s.average:.4f}",
            s.samples,
        ])
    print(table)
    print(
        f"Window {format_day(result.window.start)} - {format_day(result.window.end)}: "
        f"{len(result.succeeded_days)} days OK, {len(result.failed_days)} failed"
    )


def build_parser() -> argparse.ArgumentParser:
    """Construct the argparse parser."""
    parser = argparse.ArgumentParser(
        prog="valutastat",
        description="Min/max/average CBR exchange rates over the last N days",
    )
    parser.add_argument(
        "--days",
        type=int,
        help="Длина окна в днях (по умолчанию 90)",
    )
    parser.add_argument(
        "--field",
        choices=list(VALUE_FIELDS),
        help="Курс за номинал (value) или за единицу валюты (unit_rate)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Таймаут HTTP-запроса в секундах",
    )
    parser.add_argument(
        "--table",
        action="store_true",
        help="Вывести результат таблицей",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Уровень логирования (DEBUG, INFO, WARNING, ...)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint used by the console script and main.py.

    Args:
        argv: Optional explicit argv (without program name). If None, uses sys.argv[1:].
    Returns:
        Exit code integer (0 success, 1 when no day succeeded, 2 on bad config).
    """
    args = sys.argv[1:] if argv is None else argv
    ns = build_parser().parse_args(args)
    configure_logging(ns.log_level)
    logger = logging.getLogger("valutastat")

    try:
        cfg = load_parser_config()
        if ns.timeout is not None:
            if ns.timeout <= 0:
                raise ValueError("--timeout должен быть положительным числом")
            cfg = replace(cfg, REQUEST_TIMEOUT=ns.timeout)
        window = Window.last_days(ns.days if ns.days is not None else cfg.INTERVAL_DAYS)
    except (ValueError, DomainError) as exc:
        _print_error(f"Ошибка конфигурации: {exc}")
        return 2

    result = RatesCollector(cfg).collect(window, value_field=ns.field)
    if result.all_failed:
        _print_error("Не удалось получить ни одной публикации за окно дат")
        return 1

    if ns.table:
        _print_table(result)
    else:
        _print_lines(result)
    if result.failed_days:
        logger.warning(
            "%d of %d days are missing from the statistics",
            len(result.failed_days),
            len(window),
        )
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
