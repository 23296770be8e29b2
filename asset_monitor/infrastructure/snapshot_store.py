"""JSON snapshot shared between the dashboard and the widget CLI.

The whole snapshot lives in one file. Writes go to a temporary sibling and
replace the file atomically, so a reader never sees a partial document.
"""

import json
import os
import tempfile
import threading
from datetime import datetime
from pathlib import Path
from typing import Any

from asset_monitor.application.ports.snapshot_store import SnapshotStorePort
from asset_monitor.infrastructure.logging.logger import get_app_logger


SNAPSHOT_FILENAME = "widget_snapshot.json"

EMPTY_SNAPSHOT: dict[str, Any] = {
    "total_value": 0.0,
    "daily_change": 0.0,
    "daily_change_percent": 0.0,
    "top_holdings": [],
    "dca_plans": [],
    "stock_news": [],
    "last_updated": None,
    "privacy_mode": False,
}


class JsonSnapshotStore(SnapshotStorePort):
    """SnapshotStorePort implementation backed by a JSON file."""

    def __init__(
        self,
        directory: Path,
        filename: str = SNAPSHOT_FILENAME,
        logger=None,
    ) -> None:
        self._path = Path(directory) / filename
        self._lock = threading.Lock()
        self._logger = logger or get_app_logger()

    @property
    def path(self) -> Path:
        return self._path

    def write_portfolio(self, summary: dict[str, Any]) -> None:
        keys = ("total_value", "daily_change", "daily_change_percent", "top_holdings")
        self._update({key: summary[key] for key in keys if key in summary})

    def write_plans(self, plans: list[dict[str, Any]]) -> None:
        self._update({"dca_plans": plans})

    def write_news(self, news: list[dict[str, Any]]) -> None:
        self._update({"stock_news": news})

    def read(self) -> dict[str, Any]:
        with self._lock:
            stored = self._load()
        return {**EMPTY_SNAPSHOT, **stored}

    def clear(self) -> None:
        with self._lock:
            privacy = bool(self._load().get("privacy_mode", False))
            self._save({"privacy_mode": privacy})

    def get_privacy_mode(self) -> bool:
        return bool(self.read()["privacy_mode"])

    def set_privacy_mode(self, enabled: bool) -> None:
        with self._lock:
            document = self._load()
            document["privacy_mode"] = bool(enabled)
            self._save(document)

    def _update(self, values: dict[str, Any]) -> None:
        with self._lock:
            document = self._load()
            document.update(values)
            document["last_updated"] = datetime.now().isoformat(timespec="seconds")
            self._save(document)

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            document = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            self._logger.warning(f"Ignoring unreadable snapshot {self._path}: {exc}")
            return {}
        return document if isinstance(document, dict) else {}

    def _save(self, document: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(document, handle, indent=2)
            os.replace(tmp_name, self._path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise


__all__ = ["JsonSnapshotStore", "EMPTY_SNAPSHOT", "SNAPSHOT_FILENAME"]
