"""Logging helpers shared by every layer of the application.

Loggers write to a dated file under ``<project root>/logs/<subdir>/`` and,
optionally, to the console. ``get_app_logger`` returns the application-wide
logger; ``get_usage_logger`` records user-facing actions (refreshes, exports,
AI requests) in a separate file.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from asset_monitor.utils.utils import get_project_root


FormatterFactory = Callable[[], logging.Formatter]
FileHandlerFactory = Callable[[Path, logging.Formatter], logging.Handler]
ConsoleHandlerFactory = Callable[[logging.Formatter], logging.Handler]


class LoggerBuilder:
    """Fluent builder for configured ``logging.Logger`` instances."""

    def __init__(self) -> None:
        self._name = "asset_monitor"
        self._subdir = "app"
        self._prefix = "app_logs"
        self._console = True
        self._level = logging.INFO
        self._formatter_factory: FormatterFactory = self._default_formatter
        self._file_handler_factory: FileHandlerFactory = (
            self._default_file_handler
        )
        self._console_handler_factory: ConsoleHandlerFactory = (
            self._default_console_handler
        )

    def name(self, name: str) -> "LoggerBuilder":
        self._name = name
        return self

    def subdir(self, subdir: str) -> "LoggerBuilder":
        self._subdir = subdir
        return self

    def prefix(self, prefix: str) -> "LoggerBuilder":
        self._prefix = prefix
        return self

    def console(self, enabled: bool) -> "LoggerBuilder":
        self._console = enabled
        return self

    def level(self, level: int) -> "LoggerBuilder":
        self._level = level
        return self

    def formatter(self, factory: FormatterFactory) -> "LoggerBuilder":
        self._formatter_factory = factory
        return self

    def file_handler(self, factory: FileHandlerFactory) -> "LoggerBuilder":
        self._file_handler_factory = factory
        return self

    def console_handler(
        self,
        factory: ConsoleHandlerFactory,
    ) -> "LoggerBuilder":
        self._console_handler_factory = factory
        return self

    def build(self) -> logging.Logger:
        """Create the logger, or return it untouched if already configured.

        Returns:
            logging.Logger: Logger with file and optional console handlers.
        """
        logger = logging.getLogger(self._name)
        if logger.handlers:
            return logger

        logger.setLevel(self._level)
        logger.propagate = False
        log_dir = get_project_root() / "logs" / self._subdir
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / f"{self._today_stamp()}_{self._prefix}.log"

        fmt = self._formatter_factory()
        logger.addHandler(self._file_handler_factory(log_path, fmt))
        if self._console:
            logger.addHandler(self._console_handler_factory(fmt))
        return logger

    @staticmethod
    def _today_stamp() -> str:
        return datetime.now().strftime("%Y%m%d")

    @staticmethod
    def _default_formatter() -> logging.Formatter:
        return logging.Formatter(
            "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
        )

    @staticmethod
    def _default_file_handler(
        path: Path,
        fmt: logging.Formatter,
    ) -> logging.Handler:
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setLevel(logging.INFO)
        handler.setFormatter(fmt)
        return handler

    @staticmethod
    def _default_console_handler(fmt: logging.Formatter) -> logging.Handler:
        handler = logging.StreamHandler()
        handler.setLevel(logging.INFO)
        handler.setFormatter(fmt)
        return handler


class Logger:
    """Singleton wrapper delegating to a configured ``logging.Logger``."""

    _instance: Optional["Logger"] = None
    _subdir = "app"
    _prefix = "app_logs"

    def __new__(cls, name: str = "asset_monitor"):
        if cls._instance is None:
            instance = super().__new__(cls)
            instance.logger = (
                LoggerBuilder()
                .name(name)
                .subdir(cls._subdir)
                .prefix(cls._prefix)
                .build()
            )
            cls._instance = instance
        return cls._instance

    def __init__(self, name: str = "asset_monitor") -> None:
        _ = name

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)

    def debug(self, message: str) -> None:
        self.logger.debug(message)

    def critical(self, message: str) -> None:
        self.logger.critical(message)

    def exception(self, message: str) -> None:
        self.logger.exception(message)


class AppLogger(Logger):
    """Application-wide logger."""

    _instance: Optional["AppLogger"] = None
    _subdir = "app"
    _prefix = "app_logs"


class UsageLogger(Logger):
    """Logger for user-triggered actions."""

    _instance: Optional["UsageLogger"] = None
    _subdir = "usage"
    _prefix = "usage_logs"


def get_app_logger() -> AppLogger:
    """Return the shared application logger."""
    return AppLogger("asset_monitor")


def get_usage_logger() -> UsageLogger:
    """Return the shared usage logger."""
    return UsageLogger("asset_monitor.usage")


__all__ = [
    "LoggerBuilder",
    "Logger",
    "AppLogger",
    "UsageLogger",
    "get_app_logger",
    "get_usage_logger",
]
