"""Decoder for the CBR daily publication (ValCurs/Valute XML).

The provider declares a legacy single-byte encoding (windows-1251) in the XML
prolog; the raw bytes go straight to lxml so the declared charset is honored
before the tree is built.
"""

from __future__ import annotations

import logging
from datetime import date

from lxml import etree

from ..core.exceptions import DecodeError, NumericParseError
from ..core.models import Observation
from ..core.utils import format_day, parse_day, parse_rate
from ..decorators import log_stage

logger = logging.getLogger("valutastat")

ROOT_TAG = "ValCurs"
RECORD_TAG = "Valute"


def _xml_parser() -> etree.XMLParser:
    # A new parser per call: lxml parser objects are not shared across threads
    return etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)


def _child_text(
    node: etree._Element, tag: str, day: date, required: bool = True
) -> str | None:
    child = node.find(tag)
    if child is None or child.text is None:
        if required:
            raise DecodeError(day, f"<{RECORD_TAG}> без обязательного поля <{tag}>")
        return None
    return child.text.strip()


def _rate(text: str, day: date) -> float:
    try:
        return parse_rate(text)
    except ValueError as exc:
        raise NumericParseError(day, text) from exc


def _record(node: etree._Element, day: date) -> Observation:
    code = _child_text(node, "CharCode", day)
    name = _child_text(node, "Name", day)
    nominal_s = _child_text(node, "Nominal", day)
    value_s = _child_text(node, "Value", day)
    unit_s = _child_text(node, "VunitRate", day, required=False)
    num_code = _child_text(node, "NumCode", day, required=False) or ""

    try:
        nominal = int(nominal_s)
    except ValueError as exc:
        raise DecodeError(day, f"некорректный Nominal {nominal_s!r}") from exc
    if nominal <= 0:
        raise DecodeError(day, f"некорректный Nominal {nominal_s!r}")

    value = _rate(value_s, day)
    # Older publications carry no VunitRate; derive it from the nominal
    unit_rate = _rate(unit_s, day) if unit_s else value / nominal

    return Observation(
        code=code.upper(),
        name=name,
        nominal=nominal,
        value=value,
        unit_rate=unit_rate,
        day=day,
        num_code=num_code,
    )


@log_stage("PARSE")
def parse_document(raw: bytes, day: date) -> list[Observation]:
    """Decode one day's publication into observations.

    Every observation is stamped with the requested day, not the Date
    attribute of the document. A single bad record fails the whole day.

    Raises:
        DecodeError: malformed XML, unsupported encoding or missing fields
        NumericParseError: rate text not numeric after normalization
    """
    if not raw:
        raise DecodeError(day, "пустой документ")
    try:
        root = etree.fromstring(raw, _xml_parser())
    except (etree.XMLSyntaxError, LookupError, ValueError) as exc:
        raise DecodeError(day, f"некорректный XML: {exc}") from exc

    if root.tag != ROOT_TAG:
        raise DecodeError(
            day, f"ожидался корневой элемент <{ROOT_TAG}>, получен <{root.tag}>"
        )

    published = root.get("Date")
    if published:
        try:
            if parse_day(published) != day:
                logger.debug(
                    "Publication for %s is dated %s", format_day(day), published
                )
        except ValueError:
            logger.debug("Unrecognized publication date %r", published)

    return [_record(node, day) for node in root.iterfind(RECORD_TAG)]
