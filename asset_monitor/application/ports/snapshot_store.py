"""Port for the snapshot shared with out-of-process readers."""

from typing import Any, Protocol


class SnapshotStorePort(Protocol):
    """Port exposing the shared portfolio snapshot."""

    def write_portfolio(self, summary: dict[str, Any]) -> None:
        """Store totals and top holdings."""

    def write_plans(self, plans: list[dict[str, Any]]) -> None:
        """Store active plan entries."""

    def write_news(self, news: list[dict[str, Any]]) -> None:
        """Store headline entries."""

    def read(self) -> dict[str, Any]:
        """Return the whole snapshot (empty sections when never written)."""

    def clear(self) -> None:
        """Remove all stored data except the privacy flag."""

    def get_privacy_mode(self) -> bool:
        """Return whether readers should mask amounts."""

    def set_privacy_mode(self, enabled: bool) -> None:
        """Persist the privacy flag."""


__all__ = ["SnapshotStorePort"]
