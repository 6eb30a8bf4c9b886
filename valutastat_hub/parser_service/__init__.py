"""Parser Service package.

Отдельный модуль для получения ежедневных публикаций курсов ЦБ РФ
за окно дат и сведения их в статистику по валютам.

Публичная точка входа:
- collector.run_collection(): единоразовый проход по окну
- используется CLI-командой valutastat
"""

from __future__ import annotations

__all__ = [
    "config",
    "api_clients",
    "xml_parser",
    "collector",
]
