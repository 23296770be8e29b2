"""Database infrastructure for the portfolio tracker.

This module exposes concrete helpers to create and reuse the SQLAlchemy
engine connected to the local SQLite file. It belongs to the infrastructure
layer because it deals with an external system (the database file).
"""

from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from asset_monitor.application.ports.database import DatabaseEnginePort
from asset_monitor.infrastructure.settings import AppSettings


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _create_engine(db_path: Path) -> Engine:
    """Create a configured SQLAlchemy engine for a SQLite file.

    Args:
        db_path: Location of the database file; parent folders are created.

    Returns:
        Engine: A SQLAlchemy engine enforcing foreign keys on each
        connection.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}", future=True)
    event.listen(engine, "connect", _enable_foreign_keys)
    return engine


_portfolio_engine: Optional[Engine] = None


def get_portfolio_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the portfolio database.

    Returns:
        Engine: Lazily initialized engine connected to the configured file.
    """
    global _portfolio_engine
    if _portfolio_engine is None:
        settings = AppSettings.from_env()
        _portfolio_engine = _create_engine(settings.db_path)
    return _portfolio_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine.

    Without an explicit path the adapter uses the process-wide engine built
    from settings; with one it owns a dedicated engine.
    """

    def __init__(self, db_path: Path | None = None) -> None:
        self._db_path = db_path
        self._engine: Optional[Engine] = None

    def get_portfolio_engine(self) -> Engine:
        """Get the engine for the portfolio database.

        Returns:
            Engine: SQLAlchemy engine connected to the SQLite file.
        """
        if self._db_path is None:
            return get_portfolio_engine()
        if self._engine is None:
            self._engine = _create_engine(self._db_path)
        return self._engine


__all__ = ["get_portfolio_engine", "SqlAlchemyDatabaseEngineAdapter"]
