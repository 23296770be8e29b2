"""SQLAlchemy-backed repository for the portfolio tables.

Schema (SQLite): ``assets``, ``transactions``, ``investment_plans``,
``price_cache`` and ``watchlist``. Monetary columns are REAL, dates are
ISO-8601 text, timestamps are UTC instants with a ``Z`` suffix and ids
are uuid strings.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.engine import Connection

from asset_monitor.application.ports.database import DatabaseEnginePort
from asset_monitor.application.ports.portfolio_repository import (
    PortfolioRepositoryPort,
)
from asset_monitor.domain.models import (
    Asset,
    AssetType,
    InvestmentPlan,
    PlanFrequency,
    PlanStatus,
    PriceQuote,
    Transaction,
    TransactionType,
    WatchlistItem,
)
from asset_monitor.infrastructure.logging.logger import get_app_logger
from asset_monitor.utils.decimal_utils import (
    coerce_decimal,
    coerce_optional_decimal,
)
from asset_monitor.utils.time_utils import (
    format_timestamp,
    parse_calendar_date,
    parse_timestamp,
)


CREATE_TABLES_SQL = (
    """
    CREATE TABLE IF NOT EXISTS assets (
        id TEXT PRIMARY KEY,
        symbol TEXT NOT NULL,
        type TEXT NOT NULL,
        name TEXT NOT NULL,
        cd_maturity_date TEXT,
        cd_interest_rate REAL,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS transactions (
        id TEXT PRIMARY KEY,
        asset_id TEXT NOT NULL,
        type TEXT NOT NULL,
        date TEXT NOT NULL,
        shares REAL NOT NULL,
        price_per_share REAL NOT NULL,
        notes TEXT,
        linked_plan_id TEXT,
        created_at TEXT NOT NULL,
        FOREIGN KEY (asset_id) REFERENCES assets(id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS investment_plans (
        id TEXT PRIMARY KEY,
        asset_id TEXT NOT NULL,
        total_amount REAL NOT NULL,
        number_of_purchases INTEGER NOT NULL,
        amount_per_purchase REAL NOT NULL,
        frequency TEXT NOT NULL,
        custom_days_between INTEGER,
        start_date TEXT NOT NULL,
        completed_purchases INTEGER DEFAULT 0,
        status TEXT DEFAULT 'active',
        notes TEXT,
        created_at TEXT NOT NULL,
        FOREIGN KEY (asset_id) REFERENCES assets(id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS price_cache (
        symbol TEXT PRIMARY KEY,
        price REAL NOT NULL,
        previous_close REAL,
        change_percent REAL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS watchlist (
        id TEXT PRIMARY KEY,
        symbol TEXT NOT NULL UNIQUE,
        name TEXT NOT NULL,
        added_at TEXT NOT NULL
    )
    """,
)

ADD_LINKED_TRANSACTION_SQL = (
    "ALTER TABLE transactions ADD COLUMN linked_transaction_id TEXT"
)

SELECT_ASSETS_SQL = text(
    """
    SELECT id, symbol, type, name, cd_maturity_date, cd_interest_rate,
           created_at
    FROM assets
    """
)

INSERT_ASSET_SQL = text(
    """
    INSERT INTO assets (
        id, symbol, type, name, cd_maturity_date, cd_interest_rate, created_at
    )
    VALUES (
        :id, :symbol, :type, :name, :cd_maturity_date, :cd_interest_rate,
        :created_at
    )
    """
)

UPDATE_ASSET_SQL = text(
    """
    UPDATE assets
    SET symbol = :symbol,
        type = :type,
        name = :name,
        cd_maturity_date = :cd_maturity_date,
        cd_interest_rate = :cd_interest_rate
    WHERE id = :id
    """
)

SELECT_TRANSACTIONS_SQL = text(
    """
    SELECT id, asset_id, type, date, shares, price_per_share, notes,
           linked_plan_id, linked_transaction_id, created_at
    FROM transactions
    """
)

INSERT_TRANSACTION_SQL = text(
    """
    INSERT INTO transactions (
        id, asset_id, type, date, shares, price_per_share, notes,
        linked_plan_id, linked_transaction_id, created_at
    )
    VALUES (
        :id, :asset_id, :type, :date, :shares, :price_per_share, :notes,
        :linked_plan_id, :linked_transaction_id, :created_at
    )
    """
)

UPDATE_TRANSACTION_SQL = text(
    """
    UPDATE transactions
    SET asset_id = :asset_id,
        type = :type,
        date = :date,
        shares = :shares,
        price_per_share = :price_per_share,
        notes = :notes,
        linked_plan_id = :linked_plan_id,
        linked_transaction_id = :linked_transaction_id
    WHERE id = :id
    """
)

SELECT_PLANS_SQL = text(
    """
    SELECT id, asset_id, total_amount, number_of_purchases,
           amount_per_purchase, frequency, custom_days_between, start_date,
           completed_purchases, status, notes, created_at
    FROM investment_plans
    """
)

INSERT_PLAN_SQL = text(
    """
    INSERT INTO investment_plans (
        id, asset_id, total_amount, number_of_purchases, amount_per_purchase,
        frequency, custom_days_between, start_date, completed_purchases,
        status, notes, created_at
    )
    VALUES (
        :id, :asset_id, :total_amount, :number_of_purchases,
        :amount_per_purchase, :frequency, :custom_days_between, :start_date,
        :completed_purchases, :status, :notes, :created_at
    )
    """
)

UPDATE_PLAN_SQL = text(
    """
    UPDATE investment_plans
    SET total_amount = :total_amount,
        number_of_purchases = :number_of_purchases,
        amount_per_purchase = :amount_per_purchase,
        frequency = :frequency,
        custom_days_between = :custom_days_between,
        start_date = :start_date,
        completed_purchases = :completed_purchases,
        status = :status,
        notes = :notes
    WHERE id = :id
    """
)

UPSERT_PRICE_SQL = text(
    """
    INSERT OR REPLACE INTO price_cache (
        symbol, price, previous_close, change_percent, updated_at
    )
    VALUES (:symbol, :price, :previous_close, :change_percent, :updated_at)
    """
)

SELECT_PRICES_SQL = text(
    """
    SELECT symbol, price, previous_close, change_percent, updated_at
    FROM price_cache
    """
)

SELECT_WATCHLIST_SQL = text(
    """
    SELECT id, symbol, name, added_at
    FROM watchlist
    ORDER BY added_at DESC
    """
)

INSERT_WATCHLIST_SQL = text(
    """
    INSERT INTO watchlist (id, symbol, name, added_at)
    VALUES (:id, :symbol, :name, :added_at)
    """
)


class SqlAlchemyPortfolioRepository(PortfolioRepositoryPort):
    """Repository backed by SQLAlchemy for the portfolio tables."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the portfolio engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def prepare(self) -> None:
        """Create missing tables and add the pairing column when absent."""
        engine = self._db_port.get_portfolio_engine()
        with engine.begin() as conn:
            for statement in CREATE_TABLES_SQL:
                conn.exec_driver_sql(statement)
            if not self._column_exists(
                conn, "transactions", "linked_transaction_id"
            ):
                conn.exec_driver_sql(ADD_LINKED_TRANSACTION_SQL)
                self._logger.info(
                    "Added linked_transaction_id column to transactions"
                )

    # Assets

    def list_assets(self) -> list[Asset]:
        rows = self._fetch(
            text(f"{SELECT_ASSETS_SQL.text} ORDER BY created_at DESC")
        )
        return [_asset_from_row(row) for row in rows]

    def get_asset(self, asset_id: str) -> Asset | None:
        rows = self._fetch(
            text(f"{SELECT_ASSETS_SQL.text} WHERE id = :id"),
            {"id": asset_id},
        )
        return _asset_from_row(rows[0]) if rows else None

    def add_asset(self, asset: Asset) -> None:
        self._execute(INSERT_ASSET_SQL, [_asset_params(asset)])

    def update_asset(self, asset: Asset) -> None:
        self._execute(UPDATE_ASSET_SQL, [_asset_params(asset)])

    def delete_asset(self, asset_id: str) -> None:
        """Delete an asset after its transactions and plans."""
        engine = self._db_port.get_portfolio_engine()
        params = {"asset_id": asset_id}
        with engine.begin() as conn:
            conn.execute(
                text("DELETE FROM transactions WHERE asset_id = :asset_id"),
                params,
            )
            conn.execute(
                text("DELETE FROM investment_plans WHERE asset_id = :asset_id"),
                params,
            )
            conn.execute(text("DELETE FROM assets WHERE id = :asset_id"), params)

    # Transactions

    def list_transactions(self, asset_id: str | None = None) -> list[Transaction]:
        sql = SELECT_TRANSACTIONS_SQL.text
        params = {}
        if asset_id is not None:
            sql += " WHERE asset_id = :asset_id"
            params["asset_id"] = asset_id
        rows = self._fetch(text(f"{sql} ORDER BY date DESC, created_at DESC"), params)
        return [_transaction_from_row(row) for row in rows]

    def get_transaction(self, transaction_id: str) -> Transaction | None:
        rows = self._fetch(
            text(f"{SELECT_TRANSACTIONS_SQL.text} WHERE id = :id"),
            {"id": transaction_id},
        )
        return _transaction_from_row(rows[0]) if rows else None

    def add_transactions(self, transactions: list[Transaction]) -> None:
        self._execute(
            INSERT_TRANSACTION_SQL,
            [_transaction_params(tx) for tx in transactions],
        )

    def update_transactions(self, transactions: list[Transaction]) -> None:
        self._execute(
            UPDATE_TRANSACTION_SQL,
            [_transaction_params(tx) for tx in transactions],
        )

    def delete_transactions(self, transaction_ids: list[str]) -> None:
        self._execute(
            text("DELETE FROM transactions WHERE id = :id"),
            [{"id": transaction_id} for transaction_id in transaction_ids],
        )

    def move_transactions(self, from_asset_id: str, to_asset_id: str) -> int:
        engine = self._db_port.get_portfolio_engine()
        with engine.begin() as conn:
            result = conn.execute(
                text(
                    "UPDATE transactions SET asset_id = :to_id "
                    "WHERE asset_id = :from_id"
                ),
                {"to_id": to_asset_id, "from_id": from_asset_id},
            )
        return result.rowcount

    # Plans

    def list_plans(self) -> list[InvestmentPlan]:
        rows = self._fetch(
            text(f"{SELECT_PLANS_SQL.text} ORDER BY created_at DESC")
        )
        return [_plan_from_row(row) for row in rows]

    def get_plan(self, plan_id: str) -> InvestmentPlan | None:
        rows = self._fetch(
            text(f"{SELECT_PLANS_SQL.text} WHERE id = :id"),
            {"id": plan_id},
        )
        return _plan_from_row(rows[0]) if rows else None

    def add_plan(self, plan: InvestmentPlan) -> None:
        self._execute(INSERT_PLAN_SQL, [_plan_params(plan)])

    def update_plan(self, plan: InvestmentPlan) -> None:
        self._execute(UPDATE_PLAN_SQL, [_plan_params(plan)])

    def delete_plan(self, plan_id: str) -> None:
        self._execute(
            text("DELETE FROM investment_plans WHERE id = :id"),
            [{"id": plan_id}],
        )

    # Price cache

    def cache_price(self, quote: PriceQuote) -> None:
        self._execute(
            UPSERT_PRICE_SQL,
            [
                {
                    "symbol": quote.symbol.upper(),
                    "price": float(quote.price),
                    "previous_close": _optional_float(quote.previous_close),
                    "change_percent": _optional_float(quote.change_percent),
                    "updated_at": format_timestamp(quote.updated_at),
                }
            ],
        )

    def get_cached_prices(self) -> dict[str, PriceQuote]:
        rows = self._fetch(SELECT_PRICES_SQL)
        return {
            row.symbol: PriceQuote(
                symbol=row.symbol,
                price=coerce_decimal(row.price),
                previous_close=coerce_optional_decimal(row.previous_close),
                change_percent=coerce_optional_decimal(row.change_percent),
                updated_at=parse_timestamp(row.updated_at),
            )
            for row in rows
        }

    # Watchlist

    def list_watchlist(self) -> list[WatchlistItem]:
        return [
            WatchlistItem(
                id=row.id,
                symbol=row.symbol,
                name=row.name,
                added_at=parse_timestamp(row.added_at),
            )
            for row in self._fetch(SELECT_WATCHLIST_SQL)
        ]

    def add_watchlist_item(self, item: WatchlistItem) -> None:
        self._execute(
            INSERT_WATCHLIST_SQL,
            [
                {
                    "id": item.id,
                    "symbol": item.symbol,
                    "name": item.name,
                    "added_at": format_timestamp(item.added_at),
                }
            ],
        )

    def delete_watchlist_item(self, item_id: str) -> None:
        self._execute(
            text("DELETE FROM watchlist WHERE id = :id"),
            [{"id": item_id}],
        )

    def _fetch(self, query, params: dict | None = None) -> list:
        engine = self._db_port.get_portfolio_engine()
        with engine.connect() as conn:
            return conn.execute(query, params or {}).all()

    def _execute(self, statement, rows: list[dict]) -> None:
        if not rows:
            return
        engine = self._db_port.get_portfolio_engine()
        with engine.begin() as conn:
            conn.execute(statement, rows)

    @staticmethod
    def _column_exists(conn: Connection, table: str, column: str) -> bool:
        rows = conn.exec_driver_sql(f"PRAGMA table_info({table})").all()
        return any(row[1] == column for row in rows)


def _optional_float(value: Decimal | None) -> float | None:
    return None if value is None else float(value)


def _optional_date(value: str | None) -> date | None:
    return parse_calendar_date(value) if value else None


def _asset_params(asset: Asset) -> dict:
    return {
        "id": asset.id,
        "symbol": asset.symbol,
        "type": asset.asset_type.value,
        "name": asset.name,
        "cd_maturity_date": (
            asset.cd_maturity_date.isoformat() if asset.cd_maturity_date else None
        ),
        "cd_interest_rate": _optional_float(asset.cd_interest_rate),
        "created_at": format_timestamp(asset.created_at),
    }


def _asset_from_row(row) -> Asset:
    return Asset(
        id=row.id,
        symbol=row.symbol,
        asset_type=AssetType(row.type),
        name=row.name,
        cd_maturity_date=_optional_date(row.cd_maturity_date),
        cd_interest_rate=coerce_optional_decimal(row.cd_interest_rate),
        created_at=parse_timestamp(row.created_at),
    )


def _transaction_params(tx: Transaction) -> dict:
    return {
        "id": tx.id,
        "asset_id": tx.asset_id,
        "type": tx.transaction_type.value,
        "date": tx.date.isoformat(),
        "shares": float(tx.shares),
        "price_per_share": float(tx.price_per_share),
        "notes": tx.notes,
        "linked_plan_id": tx.linked_plan_id,
        "linked_transaction_id": tx.linked_transaction_id,
        "created_at": format_timestamp(tx.created_at),
    }


def _transaction_from_row(row) -> Transaction:
    return Transaction(
        id=row.id,
        asset_id=row.asset_id,
        transaction_type=TransactionType(row.type),
        date=parse_calendar_date(row.date),
        shares=coerce_decimal(row.shares),
        price_per_share=coerce_decimal(row.price_per_share),
        notes=row.notes,
        linked_plan_id=row.linked_plan_id,
        linked_transaction_id=row.linked_transaction_id,
        created_at=parse_timestamp(row.created_at),
    )


def _plan_params(plan: InvestmentPlan) -> dict:
    return {
        "id": plan.id,
        "asset_id": plan.asset_id,
        "total_amount": float(plan.total_amount),
        "number_of_purchases": plan.number_of_purchases,
        "amount_per_purchase": float(plan.amount_per_purchase),
        "frequency": plan.frequency.value,
        "custom_days_between": plan.custom_days_between,
        "start_date": plan.start_date.isoformat(),
        "completed_purchases": plan.completed_purchases,
        "status": plan.status.value,
        "notes": plan.notes,
        "created_at": format_timestamp(plan.created_at),
    }


def _plan_from_row(row) -> InvestmentPlan:
    return InvestmentPlan(
        id=row.id,
        asset_id=row.asset_id,
        total_amount=coerce_decimal(row.total_amount),
        number_of_purchases=int(row.number_of_purchases),
        amount_per_purchase=coerce_decimal(row.amount_per_purchase),
        frequency=PlanFrequency(row.frequency),
        custom_days_between=row.custom_days_between,
        start_date=parse_calendar_date(row.start_date),
        completed_purchases=int(row.completed_purchases or 0),
        status=PlanStatus(row.status or PlanStatus.ACTIVE.value),
        notes=row.notes,
        created_at=parse_timestamp(row.created_at),
    )


__all__ = ["SqlAlchemyPortfolioRepository"]
