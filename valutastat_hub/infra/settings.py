from __future__ import annotations

import logging
import threading
import tomllib
from pathlib import Path
from typing import Any


class SettingsLoader:
    """Singleton settings provider.

    Reads pyproject.toml [tool.valutastat] if present.
    Provides defaults otherwise.
    """

    _instance: "SettingsLoader | None" = None
    _lock = threading.Lock()

    def __new__(cls, *args, **kwargs):  # noqa: D401 - singleton boilerplate
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if getattr(self, "_initialized", False):
            return
        self._initialized = True
        self._root = Path(__file__).resolve().parents[2]
        self._config: dict[str, Any] = {}
        self.reload()

    def _defaults(self) -> dict[str, Any]:
        root = self._root
        return {
            "logs_dir": str(root / "logs"),
            "log_file": str(root / "logs" / "valutastat.log"),
            "log_level": "INFO",
            "log_rotation_bytes": 1_048_576,  # 1MB
            "log_backup_count": 5,
            "interval_days": 90,
            "value_field": "value",
        }

    def reload(self) -> None:
        cfg = self._defaults()
        pyproject = self._root / "pyproject.toml"
        if pyproject.exists():
            try:
                data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
            except tomllib.TOMLDecodeError as exc:
                logging.getLogger("valutastat").warning(
                    "Malformed %s, using default settings: %s", pyproject, exc
                )
                data = {}
            vs = data.get("tool", {}).get("valutastat", {})
            if isinstance(vs, dict):
                cfg.update(vs)
        self._config = cfg
        Path(self._config["logs_dir"]).mkdir(parents=True, exist_ok=True)

    def get(self, key: str, default: Any | None = None) -> Any:
        return self._config.get(key, default)
