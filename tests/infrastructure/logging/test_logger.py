"""Tests for the logging helpers."""

import logging
from unittest.mock import MagicMock

import pytest

from asset_monitor.infrastructure.logging import logger as logger_module


@pytest.fixture
def reset_singletons():
    saved = (
        logger_module.Logger._instance,
        logger_module.AppLogger._instance,
        logger_module.UsageLogger._instance,
    )
    logger_module.Logger._instance = None
    logger_module.AppLogger._instance = None
    logger_module.UsageLogger._instance = None
    yield
    (
        logger_module.Logger._instance,
        logger_module.AppLogger._instance,
        logger_module.UsageLogger._instance,
    ) = saved


def test_builder_writes_dated_file_under_project_logs(tmp_path, monkeypatch):
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "_today_stamp",
        staticmethod(lambda: "20240101"),
    )

    builder = (
        logger_module.LoggerBuilder()
        .name("asset_monitor.test_builder")
        .subdir("refresh")
        .prefix("refresh_logs")
        .console(False)
        .level(logging.WARNING)
    )
    built = builder.build()

    assert built.level == logging.WARNING
    assert built.propagate is False
    (handler,) = built.handlers
    assert isinstance(handler, logging.FileHandler)
    expected = tmp_path / "logs" / "refresh" / "20240101_refresh_logs.log"
    assert handler.baseFilename == str(expected)
    # An already configured logger is returned untouched.
    assert builder.build() is built
    assert len(built.handlers) == 1
    handler.close()
    built.handlers.clear()


def test_builder_uses_injected_factories(tmp_path, monkeypatch):
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    fmt = logging.Formatter("%(message)s")
    file_handler = logging.NullHandler()
    console_handler = logging.NullHandler()
    seen = {}

    def _file(path, formatter):
        seen["path"] = path
        seen["formatter"] = formatter
        return file_handler

    built = (
        logger_module.LoggerBuilder()
        .name("asset_monitor.test_factories")
        .formatter(lambda: fmt)
        .file_handler(_file)
        .console_handler(lambda formatter: console_handler)
        .build()
    )

    assert built.handlers == [file_handler, console_handler]
    assert seen["formatter"] is fmt
    assert seen["path"].parent == tmp_path / "logs" / "app"
    built.handlers.clear()


def test_default_handlers_use_formatter(tmp_path):
    fmt = logger_module.LoggerBuilder._default_formatter()
    file_handler = logger_module.LoggerBuilder._default_file_handler(
        tmp_path / "logs.log",
        fmt,
    )
    console_handler = logger_module.LoggerBuilder._default_console_handler(fmt)

    assert file_handler.level == logging.INFO
    assert file_handler.formatter is fmt
    assert isinstance(console_handler, logging.StreamHandler)
    assert console_handler.formatter is fmt
    file_handler.close()


def test_wrapper_delegates_to_built_logger(monkeypatch, reset_singletons):
    fake_logger = MagicMock()
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "build",
        lambda self: fake_logger,
    )

    logger = logger_module.Logger("asset_monitor")
    logger.info("hello")
    logger.warning("warn")
    logger.error("err")
    logger.debug("dbg")
    logger.exception("boom")

    fake_logger.info.assert_called_with("hello")
    fake_logger.warning.assert_called_with("warn")
    fake_logger.error.assert_called_with("err")
    fake_logger.debug.assert_called_with("dbg")
    fake_logger.exception.assert_called_with("boom")
    assert logger_module.Logger("asset_monitor") is logger


def test_app_and_usage_loggers_are_separate_singletons(
    monkeypatch,
    reset_singletons,
):
    subdirs = []

    def _fake_build(self):
        subdirs.append(self._subdir)
        return MagicMock()

    monkeypatch.setattr(logger_module.LoggerBuilder, "build", _fake_build)

    app_logger = logger_module.get_app_logger()
    usage_logger = logger_module.get_usage_logger()

    assert logger_module.get_app_logger() is app_logger
    assert logger_module.get_usage_logger() is usage_logger
    assert app_logger is not usage_logger
    assert subdirs == ["app", "usage"]
