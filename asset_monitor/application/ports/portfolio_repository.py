"""Port for persisting assets, transactions, plans, prices and the watchlist."""

from typing import Protocol

from asset_monitor.domain.models import (
    Asset,
    InvestmentPlan,
    PriceQuote,
    Transaction,
    WatchlistItem,
)


class PortfolioRepositoryPort(Protocol):
    """Port exposing CRUD access to the portfolio tables."""

    def prepare(self) -> None:
        """Create missing tables and apply pending column migrations."""

    def list_assets(self) -> list[Asset]:
        """Return all assets, newest first."""

    def get_asset(self, asset_id: str) -> Asset | None:
        """Return one asset by id."""

    def add_asset(self, asset: Asset) -> None:
        """Insert a new asset."""

    def update_asset(self, asset: Asset) -> None:
        """Persist changes to an existing asset."""

    def delete_asset(self, asset_id: str) -> None:
        """Delete an asset together with its transactions and plans."""

    def list_transactions(self, asset_id: str | None = None) -> list[Transaction]:
        """Return transactions, newest first, optionally for one asset."""

    def get_transaction(self, transaction_id: str) -> Transaction | None:
        """Return one transaction by id."""

    def add_transactions(self, transactions: list[Transaction]) -> None:
        """Insert rows in a single database transaction."""

    def update_transactions(self, transactions: list[Transaction]) -> None:
        """Persist changes to rows in a single database transaction."""

    def delete_transactions(self, transaction_ids: list[str]) -> None:
        """Delete rows in a single database transaction."""

    def move_transactions(self, from_asset_id: str, to_asset_id: str) -> int:
        """Reassign every row of one asset to another; return the row count."""

    def list_plans(self) -> list[InvestmentPlan]:
        """Return all investment plans, newest first."""

    def get_plan(self, plan_id: str) -> InvestmentPlan | None:
        """Return one plan by id."""

    def add_plan(self, plan: InvestmentPlan) -> None:
        """Insert a new plan."""

    def update_plan(self, plan: InvestmentPlan) -> None:
        """Persist changes to an existing plan."""

    def delete_plan(self, plan_id: str) -> None:
        """Delete a plan."""

    def cache_price(self, quote: PriceQuote) -> None:
        """Insert or replace the cached quote of a symbol."""

    def get_cached_prices(self) -> dict[str, PriceQuote]:
        """Return cached quotes keyed by symbol."""

    def list_watchlist(self) -> list[WatchlistItem]:
        """Return watched symbols, most recently added first."""

    def add_watchlist_item(self, item: WatchlistItem) -> None:
        """Insert a watched symbol."""

    def delete_watchlist_item(self, item_id: str) -> None:
        """Stop watching a symbol."""


__all__ = ["PortfolioRepositoryPort"]
