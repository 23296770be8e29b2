"""Database ports for the portfolio tracker.

This module defines the application-layer protocol for accessing the database
engine. Infrastructure implementations are expected to provide a concrete
adapter that satisfies this port.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the engine of the local portfolio database.

    Application code can depend on this protocol instead of concrete
    database drivers or configuration details.
    """

    def get_portfolio_engine(self) -> Engine:
        """Get the engine for the portfolio database.

        Returns:
            Engine: SQLAlchemy engine connected to the SQLite file.
        """


__all__ = ["DatabaseEnginePort"]
