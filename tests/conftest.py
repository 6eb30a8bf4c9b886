"""Shared fixtures: provider documents and an offline client."""

from __future__ import annotations

from datetime import date

import pytest

from valutastat_hub.core.exceptions import NetworkError
from valutastat_hub.parser_service.api_clients import BaseApiClient
from valutastat_hub.parser_service.config import ParserConfig

VALUTE_TEMPLATE = (
    '<Valute ID="{vid}">'
    "<NumCode>{num}</NumCode>"
    "<CharCode>{code}</CharCode>"
    "<Nominal>{nominal}</Nominal>"
    "<Name>{name}</Name>"
    "<Value>{value}</Value>"
    "{unit}"
    "</Valute>"
)


def make_document(
    day: date,
    records: list[tuple[str, str, int, str]],
    encoding: str = "windows-1251",
    with_unit_rate: bool = True,
) -> bytes:
    """Build a ValCurs document.

    records: (code, name, nominal, value text) tuples.
    """
    body = []
    for i, (code, name, nominal, value) in enumerate(records):
        unit = ""
        if with_unit_rate:
            try:
                unit_value = float(value.replace(",", ".")) / nominal
            except ValueError:
                # Broken rates are copied verbatim into VunitRate too
                unit = f"<VunitRate>{value}</VunitRate>"
            else:
                unit = f"<VunitRate>{unit_value:.4f}".replace(".", ",") + "</VunitRate>"
        body.append(
            VALUTE_TEMPLATE.format(
                vid=f"R0{i:04d}",
                num=f"{i + 800:03d}",
                code=code,
                nominal=nominal,
                name=name,
                value=value,
                unit=unit,
            )
        )
    xml = (
        f'<?xml version="1.0" encoding="{encoding}"?>'
        f'<ValCurs Date="{day.strftime("%d.%m.%Y")}" name="Foreign Currency Market">'
        + "".join(body)
        + "</ValCurs>"
    )
    return xml.encode(encoding)


class StubClient(BaseApiClient):
    """Offline client returning prepared documents; unknown days fail."""

    def __init__(self, cfg: ParserConfig, documents: dict[date, bytes | Exception]) -> None:
        super().__init__(cfg)
        self.documents = documents
        self.requested: list[date] = []

    def fetch(self, day: date) -> bytes:
        self.requested.append(day)
        doc = self.documents.get(day)
        if doc is None:
            raise NetworkError(day, "no stub document")
        if isinstance(doc, Exception):
            raise doc
        return doc


@pytest.fixture
def cfg() -> ParserConfig:
    return ParserConfig(
        CBR_DAILY_URL="http://www.cbr.ru/scripts/XML_daily_eng.asp",
        USER_AGENT="tz_procontext",
        INTERVAL_DAYS=90,
        REQUEST_TIMEOUT=5.0,
        VALUE_FIELD="value",
    )
