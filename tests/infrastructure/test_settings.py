"""Tests for infrastructure settings."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from asset_monitor.infrastructure import settings as settings_module
from asset_monitor.infrastructure.settings import AppSettings


ENV_VARS = (
    "ASSET_MONITOR_DB_PATH",
    "ASSET_MONITOR_SHARED_DIR",
    "ASSET_MONITOR_REFRESH_MINUTES",
    "ASSET_MONITOR_NEWS_LIMIT",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_live_under_project_data(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(settings_module, "get_project_root", lambda: tmp_path)

    settings = AppSettings.from_env()

    assert settings.db_path == tmp_path / "data" / "assets.db"
    assert settings.shared_dir == tmp_path / "data" / "shared"
    assert settings.refresh_minutes == 15
    assert settings.openai_api_key is None
    assert settings.openai_model == "gpt-4"
    assert settings.news_limit == 15


def test_paths_and_credentials_from_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("ASSET_MONITOR_DB_PATH", str(tmp_path / "db.sqlite"))
    monkeypatch.setenv("ASSET_MONITOR_SHARED_DIR", str(tmp_path / "shared"))
    monkeypatch.setenv("ASSET_MONITOR_REFRESH_MINUTES", "60")
    monkeypatch.setenv("OPENAI_API_KEY", "  sk-test  ")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o-mini")

    settings = AppSettings.from_env()

    assert settings.db_path == (tmp_path / "db.sqlite").resolve()
    assert settings.shared_dir == (tmp_path / "shared").resolve()
    assert settings.refresh_minutes == 60
    assert settings.openai_api_key == "sk-test"
    assert settings.openai_model == "gpt-4o-mini"


def test_unsupported_interval_falls_back(monkeypatch) -> None:
    fake_logger = MagicMock()
    monkeypatch.setattr(settings_module, "get_app_logger", lambda: fake_logger)
    monkeypatch.setenv("ASSET_MONITOR_REFRESH_MINUTES", "7")

    settings = AppSettings.from_env()

    assert settings.refresh_minutes == 15
    fake_logger.warning.assert_called_once()


def test_zero_interval_disables_refresh(monkeypatch) -> None:
    monkeypatch.setenv("ASSET_MONITOR_REFRESH_MINUTES", "0")

    assert AppSettings.from_env().refresh_minutes == 0


@pytest.mark.parametrize("raw", ["abc", "0", "-3"])
def test_invalid_news_limit_raises(monkeypatch, raw) -> None:
    monkeypatch.setenv("ASSET_MONITOR_NEWS_LIMIT", raw)

    with pytest.raises(RuntimeError):
        AppSettings.from_env()
