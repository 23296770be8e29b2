"""Shared in-memory fakes for the application ports."""

from dataclasses import replace
from decimal import Decimal
from typing import Any
from unittest.mock import MagicMock

import pytest

from asset_monitor.application.errors import NewsError, QuoteError
from asset_monitor.domain.models import (
    Asset,
    HistoricalPrice,
    InvestmentPlan,
    NewsItem,
    PriceQuote,
    Transaction,
    WatchlistItem,
)


class FakePortfolioRepository:
    """Dictionary-backed PortfolioRepositoryPort."""

    def __init__(self) -> None:
        self.assets: dict[str, Asset] = {}
        self.transactions: dict[str, Transaction] = {}
        self.plans: dict[str, InvestmentPlan] = {}
        self.prices: dict[str, PriceQuote] = {}
        self.watchlist: dict[str, WatchlistItem] = {}
        self.prepared = False

    def prepare(self) -> None:
        self.prepared = True

    def list_assets(self) -> list[Asset]:
        return sorted(
            self.assets.values(),
            key=lambda asset: asset.created_at,
            reverse=True,
        )

    def get_asset(self, asset_id: str) -> Asset | None:
        return self.assets.get(asset_id)

    def add_asset(self, asset: Asset) -> None:
        self.assets[asset.id] = asset

    def update_asset(self, asset: Asset) -> None:
        self.assets[asset.id] = asset

    def delete_asset(self, asset_id: str) -> None:
        self.transactions = {
            key: tx
            for key, tx in self.transactions.items()
            if tx.asset_id != asset_id
        }
        self.plans = {
            key: plan
            for key, plan in self.plans.items()
            if plan.asset_id != asset_id
        }
        self.assets.pop(asset_id, None)

    def list_transactions(self, asset_id: str | None = None) -> list[Transaction]:
        rows = [
            tx
            for tx in self.transactions.values()
            if asset_id is None or tx.asset_id == asset_id
        ]
        return sorted(
            rows,
            key=lambda tx: (tx.date, tx.created_at),
            reverse=True,
        )

    def get_transaction(self, transaction_id: str) -> Transaction | None:
        return self.transactions.get(transaction_id)

    def add_transactions(self, transactions: list[Transaction]) -> None:
        for tx in transactions:
            self.transactions[tx.id] = tx

    def update_transactions(self, transactions: list[Transaction]) -> None:
        for tx in transactions:
            self.transactions[tx.id] = tx

    def delete_transactions(self, transaction_ids: list[str]) -> None:
        for transaction_id in transaction_ids:
            self.transactions.pop(transaction_id, None)

    def move_transactions(self, from_asset_id: str, to_asset_id: str) -> int:
        moved = 0
        for key, tx in list(self.transactions.items()):
            if tx.asset_id == from_asset_id:
                self.transactions[key] = replace(tx, asset_id=to_asset_id)
                moved += 1
        return moved

    def list_plans(self) -> list[InvestmentPlan]:
        return sorted(
            self.plans.values(),
            key=lambda plan: plan.created_at,
            reverse=True,
        )

    def get_plan(self, plan_id: str) -> InvestmentPlan | None:
        return self.plans.get(plan_id)

    def add_plan(self, plan: InvestmentPlan) -> None:
        self.plans[plan.id] = plan

    def update_plan(self, plan: InvestmentPlan) -> None:
        self.plans[plan.id] = plan

    def delete_plan(self, plan_id: str) -> None:
        self.plans.pop(plan_id, None)

    def cache_price(self, quote: PriceQuote) -> None:
        self.prices[quote.symbol.upper()] = quote

    def get_cached_prices(self) -> dict[str, PriceQuote]:
        return dict(self.prices)

    def list_watchlist(self) -> list[WatchlistItem]:
        return sorted(
            self.watchlist.values(),
            key=lambda item: item.added_at,
            reverse=True,
        )

    def add_watchlist_item(self, item: WatchlistItem) -> None:
        self.watchlist[item.id] = item

    def delete_watchlist_item(self, item_id: str) -> None:
        self.watchlist.pop(item_id, None)


class FakeQuoteProvider:
    """QuoteProviderPort serving canned quotes and histories."""

    def __init__(self) -> None:
        self.quotes: dict[str, PriceQuote] = {}
        self.histories: dict[str, list[HistoricalPrice]] = {}
        self.calls: list[tuple[str, Any]] = []

    def set_price(
        self,
        symbol: str,
        price: str,
        previous_close: str | None = None,
        name: str | None = None,
    ) -> PriceQuote:
        quote = PriceQuote(
            symbol=symbol,
            price=Decimal(price),
            previous_close=(
                Decimal(previous_close) if previous_close is not None else None
            ),
            name=name,
        )
        self.quotes[symbol] = quote
        return quote

    async def fetch_quote(self, symbol: str) -> PriceQuote:
        self.calls.append(("quote", symbol))
        if symbol not in self.quotes:
            raise QuoteError(f"No quote for {symbol}")
        return self.quotes[symbol]

    async def fetch_quotes(self, symbols: list[str]) -> dict[str, PriceQuote]:
        self.calls.append(("quotes", list(symbols)))
        return {s: self.quotes[s] for s in symbols if s in self.quotes}

    async def fetch_history(
        self,
        symbol: str,
        period: str = "1mo",
    ) -> list[HistoricalPrice]:
        self.calls.append(("history", (symbol, period)))
        if symbol not in self.histories:
            raise QuoteError(f"No history for {symbol}")
        return self.histories[symbol]


class FakeNewsProvider:
    """NewsProviderPort returning canned headlines or failing."""

    def __init__(self) -> None:
        self.items: list[NewsItem] = []
        self.fail = False
        self.calls: list[tuple[list[str], int]] = []

    async def fetch_news(self, symbols: list[str], limit: int) -> list[NewsItem]:
        self.calls.append((list(symbols), limit))
        if self.fail:
            raise NewsError("Unable to load news. Please try again later.")
        return self.items[:limit]


class FakeSnapshotStore:
    """SnapshotStorePort keeping sections in a dictionary."""

    def __init__(self) -> None:
        self.data: dict[str, Any] = {"privacy_mode": False}

    def write_portfolio(self, summary: dict[str, Any]) -> None:
        self.data.update(summary)

    def write_plans(self, plans: list[dict[str, Any]]) -> None:
        self.data["dca_plans"] = plans

    def write_news(self, news: list[dict[str, Any]]) -> None:
        self.data["stock_news"] = news

    def read(self) -> dict[str, Any]:
        return dict(self.data)

    def clear(self) -> None:
        self.data = {"privacy_mode": self.data.get("privacy_mode", False)}

    def get_privacy_mode(self) -> bool:
        return bool(self.data.get("privacy_mode"))

    def set_privacy_mode(self, enabled: bool) -> None:
        self.data["privacy_mode"] = enabled


@pytest.fixture
def repository() -> FakePortfolioRepository:
    return FakePortfolioRepository()


@pytest.fixture
def quote_provider() -> FakeQuoteProvider:
    return FakeQuoteProvider()


@pytest.fixture
def news_provider() -> FakeNewsProvider:
    return FakeNewsProvider()


@pytest.fixture
def snapshot_store() -> FakeSnapshotStore:
    return FakeSnapshotStore()


@pytest.fixture
def fake_logger() -> MagicMock:
    return MagicMock()
