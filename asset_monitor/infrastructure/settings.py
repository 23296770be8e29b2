"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional

import dotenv

from asset_monitor.domain.constants import (
    DEFAULT_REFRESH_MINUTES,
    REFRESH_INTERVAL_CHOICES,
)
from asset_monitor.infrastructure.logging.logger import get_app_logger
from asset_monitor.utils.utils import get_project_root


DEFAULT_OPENAI_MODEL = "gpt-4"
DEFAULT_NEWS_LIMIT = 15


@dataclass(frozen=True)
class AppSettings:
    """Runtime settings of the portfolio tracker.

    Attributes:
        db_path: SQLite file holding the portfolio tables.
        shared_dir: Directory of the snapshot read by the widget CLI.
        refresh_minutes: Auto-refresh interval, 0 when disabled.
        openai_api_key: Key for the chat-completion endpoint, if any.
        openai_model: Model used for analysis requests.
        news_limit: Maximum number of headlines fetched per refresh.
    """

    db_path: Path
    shared_dir: Path
    refresh_minutes: int = DEFAULT_REFRESH_MINUTES
    openai_api_key: Optional[str] = None
    openai_model: str = DEFAULT_OPENAI_MODEL
    news_limit: int = DEFAULT_NEWS_LIMIT

    @classmethod
    def from_env(cls) -> "AppSettings":
        """Build settings from environment variables and ``.env``.

        Returns:
            AppSettings: Settings sourced from environment variables.

        Raises:
            RuntimeError: If ASSET_MONITOR_NEWS_LIMIT is not a positive
                integer.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        data_dir = get_project_root() / "data"
        db_path = cls._path_from_env(
            "ASSET_MONITOR_DB_PATH",
            data_dir / "assets.db",
        )
        shared_dir = cls._path_from_env(
            "ASSET_MONITOR_SHARED_DIR",
            data_dir / "shared",
        )
        api_key = (os.getenv("OPENAI_API_KEY") or "").strip() or None
        model = (
            os.getenv("OPENAI_MODEL") or ""
        ).strip() or DEFAULT_OPENAI_MODEL
        return cls(
            db_path=db_path,
            shared_dir=shared_dir,
            refresh_minutes=cls._refresh_minutes(logger),
            openai_api_key=api_key,
            openai_model=model,
            news_limit=cls._news_limit(),
        )

    @staticmethod
    def _path_from_env(name: str, default: Path) -> Path:
        raw = os.getenv(name)
        if not raw:
            return default
        return Path(raw).expanduser().resolve()

    @staticmethod
    def _refresh_minutes(logger) -> int:
        """Read the refresh interval, falling back to the default.

        Args:
            logger: Logger used for warnings.

        Returns:
            int: One of the supported intervals.
        """
        raw = os.getenv("ASSET_MONITOR_REFRESH_MINUTES")
        if raw is None or not raw.strip():
            return DEFAULT_REFRESH_MINUTES
        try:
            minutes = int(raw)
        except ValueError:
            minutes = None
        if minutes not in REFRESH_INTERVAL_CHOICES:
            logger.warning(
                f"Unsupported refresh interval '{raw}', "
                f"using {DEFAULT_REFRESH_MINUTES} minutes"
            )
            return DEFAULT_REFRESH_MINUTES
        return minutes

    @staticmethod
    def _news_limit() -> int:
        raw = os.getenv("ASSET_MONITOR_NEWS_LIMIT")
        if raw is None or not raw.strip():
            return DEFAULT_NEWS_LIMIT
        try:
            limit = int(raw)
        except ValueError as exc:
            raise RuntimeError(
                f"Invalid ASSET_MONITOR_NEWS_LIMIT: {raw!r}"
            ) from exc
        if limit <= 0:
            raise RuntimeError(f"Invalid ASSET_MONITOR_NEWS_LIMIT: {raw!r}")
        return limit


__all__ = ["AppSettings"]
