from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from datetime import date

import requests

from ..core.exceptions import (
    NetworkError,
    RequestConstructionError,
    ResponseReadError,
)
from ..decorators import log_stage
from .config import ParserConfig, build_daily_url

logger = logging.getLogger("valutastat")


class BaseApiClient(ABC):
    def __init__(self, cfg: ParserConfig) -> None:
        self.cfg = cfg

    @abstractmethod
    def fetch(self, day: date) -> bytes:
        """Вернуть сырой документ публикации за день.

        Raises:
            FetchError: (и подклассы) с атрибутом day
        """


class CbrDailyClient(BaseApiClient):
    SOURCE = "CBR"

    @log_stage("FETCH")
    def fetch(self, day: date) -> bytes:
        try:
            url = build_daily_url(self.cfg, day)
        except Exception as exc:  # noqa: BLE001
            raise RequestConstructionError(day, f"cannot build URL: {exc}") from exc
        headers = {"User-Agent": self.cfg.USER_AGENT}

        t0 = time.perf_counter()
        try:
            resp = requests.get(
                url, headers=headers, timeout=self.cfg.REQUEST_TIMEOUT, stream=True
            )
        except (
            requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema,
            requests.exceptions.InvalidURL,
            requests.exceptions.InvalidHeader,
        ) as exc:
            raise RequestConstructionError(day, f"invalid request: {exc}") from exc
        except requests.exceptions.RequestException as exc:
            raise NetworkError(day, f"network error ({self.SOURCE}): {exc}") from exc

        with resp:
            status = resp.status_code
            if status != 200:
                raise NetworkError(day, f"{self.SOURCE} HTTP {status}", status_code=status)
            try:
                body = resp.content
            except (requests.exceptions.RequestException, OSError) as exc:
                raise ResponseReadError(
                    day, f"cannot read {self.SOURCE} response: {exc}"
                ) from exc

        elapsed_ms = int((time.perf_counter() - t0) * 1000)
        if not body:
            raise ResponseReadError(day, f"empty {self.SOURCE} response")
        logger.debug(
            "Fetched %s bytes from %s in %d ms", len(body), self.SOURCE, elapsed_ms
        )
        return body
