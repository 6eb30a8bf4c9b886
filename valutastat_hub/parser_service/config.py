from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date
from typing import Final
from urllib.parse import urlencode

from dotenv import find_dotenv, load_dotenv

from ..core.models import VALUE_FIELDS
from ..core.utils import format_day
from ..infra.settings import SettingsLoader


CBR_DAILY_URL: Final[str] = "http://www.cbr.ru/scripts/XML_daily_eng.asp"
USER_AGENT: Final[str] = "tz_procontext"


@dataclass(frozen=True)
class ParserConfig:
    # Эндпоинт ежедневной публикации ЦБ РФ
    CBR_DAILY_URL: str

    # Идентификатор клиента в заголовке User-Agent
    USER_AGENT: str

    # Длина окна в днях
    INTERVAL_DAYS: int

    # Сетевые параметры
    REQUEST_TIMEOUT: float

    # Поле для статистики: "value" или "unit_rate"
    VALUE_FIELD: str


def load_parser_config() -> ParserConfig:
    """Load parser configuration from env/.env and project settings.

    Returns a frozen ParserConfig with the provider URL, client marker, window
    length, network timeout and value field. Environment variables override
    .env; SettingsLoader provides defaults for window length and value field.

    Raises:
        ValueError: when a value is out of range or not a number
    """
    # Load .env once per process (non-overriding), if available
    path = find_dotenv(usecwd=True)
    if path:
        load_dotenv(dotenv_path=path, override=False)
    settings = SettingsLoader()
    days = int(os.getenv("VALUTASTAT_DAYS", settings.get("interval_days", 90)))
    timeout = float(os.getenv("VALUTASTAT_HTTP_TIMEOUT", "10"))
    value_field = str(
        os.getenv("VALUTASTAT_VALUE_FIELD", settings.get("value_field", "value"))
    ).strip()
    if days <= 0:
        raise ValueError("VALUTASTAT_DAYS должен быть положительным числом")
    if timeout <= 0:
        raise ValueError("VALUTASTAT_HTTP_TIMEOUT должен быть положительным числом")
    if value_field not in VALUE_FIELDS:
        raise ValueError(
            f"VALUTASTAT_VALUE_FIELD должен быть одним из {', '.join(VALUE_FIELDS)}"
        )
    return ParserConfig(
        CBR_DAILY_URL=os.getenv("VALUTASTAT_CBR_URL", CBR_DAILY_URL),
        USER_AGENT=os.getenv("VALUTASTAT_USER_AGENT", USER_AGENT),
        INTERVAL_DAYS=days,
        REQUEST_TIMEOUT=timeout,
        VALUE_FIELD=value_field,
    )


def build_daily_url(cfg: ParserConfig, day: date) -> str:
    """Собрать URL публикации за конкретный день."""
    sep = "&" if "?" in cfg.CBR_DAILY_URL else "?"
    query = urlencode({"date_req": format_day(day)}, safe="/")
    return f"{cfg.CBR_DAILY_URL}{sep}{query}"
