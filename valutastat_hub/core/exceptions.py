from __future__ import annotations

from datetime import date


class DomainError(Exception):
    """Некорректное значение доменной модели (окно дат, закрытый набор)."""


class ApiRequestError(Exception):
    """Ошибка обработки публикации за конкретный день.

    Базовый класс для всех ошибок задачи одного дня: ошибка относится только
    к своему дню и не прерывает остальные задачи.
    """

    def __init__(self, day: date, reason: str) -> None:
        self.day = day
        self.reason = reason
        super().__init__(f"{day.strftime('%d/%m/%Y')}: {reason}")


class FetchError(ApiRequestError):
    """Не удалось получить документ у провайдера."""


class RequestConstructionError(FetchError):
    """Не удалось сформировать запрос (некорректный URL)."""


class NetworkError(FetchError):
    """Сбой соединения, таймаут или неуспешный HTTP-статус."""

    def __init__(self, day: date, reason: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(day, reason)


class ResponseReadError(FetchError):
    """Не удалось прочитать тело ответа."""


class ParseError(ApiRequestError):
    """Документ получен, но не разобран."""


class DecodeError(ParseError):
    """Нарушена структура XML или кодировка документа."""


class NumericParseError(ParseError):
    """Значение курса не является числом после нормализации."""

    def __init__(self, day: date, text: str) -> None:
        self.text = text
        super().__init__(day, f"некорректное числовое значение {text!r}")
