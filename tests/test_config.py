from __future__ import annotations

import pytest

from valutastat_hub.infra.settings import SettingsLoader
from valutastat_hub.parser_service.config import load_parser_config

ENV_VARS = (
    "VALUTASTAT_CBR_URL",
    "VALUTASTAT_USER_AGENT",
    "VALUTASTAT_DAYS",
    "VALUTASTAT_HTTP_TIMEOUT",
    "VALUTASTAT_VALUE_FIELD",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    cfg = load_parser_config()
    assert cfg.CBR_DAILY_URL == "http://www.cbr.ru/scripts/XML_daily_eng.asp"
    assert cfg.USER_AGENT == "tz_procontext"
    assert cfg.INTERVAL_DAYS == 90
    assert cfg.REQUEST_TIMEOUT == 10.0
    assert cfg.VALUE_FIELD == "value"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("VALUTASTAT_DAYS", "30")
    monkeypatch.setenv("VALUTASTAT_HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("VALUTASTAT_VALUE_FIELD", "unit_rate")
    monkeypatch.setenv("VALUTASTAT_USER_AGENT", "probe")

    cfg = load_parser_config()
    assert (cfg.INTERVAL_DAYS, cfg.REQUEST_TIMEOUT) == (30, 2.5)
    assert cfg.VALUE_FIELD == "unit_rate"
    assert cfg.USER_AGENT == "probe"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("VALUTASTAT_DAYS", "0"),
        ("VALUTASTAT_DAYS", "many"),
        ("VALUTASTAT_HTTP_TIMEOUT", "-3"),
        ("VALUTASTAT_VALUE_FIELD", "nominal"),
    ],
)
def test_invalid_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        load_parser_config()


def test_settings_is_singleton():
    assert SettingsLoader() is SettingsLoader()
    assert SettingsLoader().get("interval_days") == 90


def test_malformed_pyproject_falls_back_to_defaults(tmp_path, monkeypatch, caplog):
    (tmp_path / "pyproject.toml").write_text(
        "[tool.valutastat\ninterval_days = ", encoding="utf-8"
    )
    settings = SettingsLoader()
    monkeypatch.setattr(settings, "_root", tmp_path)
    monkeypatch.setattr(settings, "_defaults", lambda: {
        "logs_dir": str(tmp_path / "logs"),
        "interval_days": 90,
    })
    try:
        settings.reload()
        assert settings.get("interval_days") == 90
        assert "Malformed" in caplog.text
    finally:
        monkeypatch.undo()
        settings.reload()


def test_pyproject_values_override_defaults(tmp_path, monkeypatch):
    (tmp_path / "pyproject.toml").write_text(
        "[tool.valutastat]\ninterval_days = 30\n", encoding="utf-8"
    )
    settings = SettingsLoader()
    monkeypatch.setattr(settings, "_root", tmp_path)
    try:
        settings.reload()
        assert settings.get("interval_days") == 30
        assert settings.get("value_field") == "value"
    finally:
        monkeypatch.undo()
        settings.reload()
