"""Use cases refreshing prices and headlines from the network.

Each use case holds an in-flight lock shared by every thread using it: a
call made while a previous one is still running returns immediately with
``skipped`` set.
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime

from asset_monitor.application.errors import NewsError, QuoteError
from asset_monitor.application.ports.market_data import (
    NewsProviderPort,
    QuoteProviderPort,
)
from asset_monitor.application.ports.portfolio_repository import (
    PortfolioRepositoryPort,
)
from asset_monitor.domain.models import NewsItem, PriceQuote
from asset_monitor.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class PriceRefreshResult:
    """Outcome of a price refresh.

    Attributes:
        quotes: Quotes fetched in this run, keyed by symbol.
        requested: Symbols that were asked for.
        skipped: True when another refresh was already running.
        refreshed_at: Completion time, None when skipped.
        error_message: User-facing failure description, if any.
    """

    quotes: dict[str, PriceQuote] = field(default_factory=dict)
    requested: list[str] = field(default_factory=list)
    skipped: bool = False
    refreshed_at: datetime | None = None
    error_message: str | None = None


@dataclass(frozen=True)
class NewsRefreshResult:
    """Outcome of a headline refresh."""

    items: list[NewsItem] = field(default_factory=list)
    skipped: bool = False
    error_message: str | None = None


def quoted_symbols(repository: PortfolioRepositoryPort) -> list[str]:
    """Return symbols of assets that have a market quote."""
    return [
        asset.symbol
        for asset in repository.list_assets()
        if asset.asset_type.is_quoted
    ]


class RefreshPricesUseCase:
    """Fetch quotes for traded assets and cache them."""

    def __init__(
        self,
        repository: PortfolioRepositoryPort,
        quote_provider: QuoteProviderPort,
        snapshot_sync=None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing access to the portfolio tables.
            quote_provider: Port fetching quotes.
            snapshot_sync: Optional use case refreshing the shared snapshot.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._quotes = quote_provider
        self._snapshot_sync = snapshot_sync
        self._logger = logger or get_app_logger()
        self._in_flight = threading.Lock()
        self.last_refreshed: datetime | None = None

    @property
    def is_refreshing(self) -> bool:
        return self._in_flight.locked()

    async def execute(self) -> PriceRefreshResult:
        """Refresh cached prices of every quoted asset.

        Returns:
            PriceRefreshResult: What was fetched.
        """
        if not self._in_flight.acquire(blocking=False):
            self._logger.info("Price refresh already running, skipping")
            return PriceRefreshResult(skipped=True)
        try:
            return await self._refresh()
        finally:
            self._in_flight.release()

    async def _refresh(self) -> PriceRefreshResult:
        symbols = quoted_symbols(self._repository)
        if not symbols:
            self.last_refreshed = datetime.now()
            return PriceRefreshResult(refreshed_at=self.last_refreshed)

        try:
            quotes = await self._quotes.fetch_quotes(symbols)
        except QuoteError as exc:
            self._logger.error(f"Price refresh failed: {exc}")
            return PriceRefreshResult(requested=symbols, error_message=str(exc))

        for quote in quotes.values():
            self._repository.cache_price(quote)

        missing = [symbol for symbol in symbols if symbol not in quotes]
        error_message = None
        if missing:
            self._logger.warning(f"No quote for: {', '.join(missing)}")
            if not quotes:
                error_message = "Unable to refresh prices. Please try again."

        self.last_refreshed = datetime.now()
        self._logger.info(
            f"Refreshed {len(quotes)}/{len(symbols)} prices"
        )
        if self._snapshot_sync is not None:
            self._snapshot_sync.execute()
        return PriceRefreshResult(
            quotes=quotes,
            requested=symbols,
            refreshed_at=self.last_refreshed,
            error_message=error_message,
        )


class RefreshNewsUseCase:
    """Fetch headlines for traded assets."""

    def __init__(
        self,
        repository: PortfolioRepositoryPort,
        news_provider: NewsProviderPort,
        snapshot_sync=None,
        limit: int = 15,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing access to the portfolio tables.
            news_provider: Port fetching headlines.
            snapshot_sync: Optional use case writing the news section.
            limit: Maximum number of headlines kept.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._news = news_provider
        self._snapshot_sync = snapshot_sync
        self._limit = limit
        self._logger = logger or get_app_logger()
        self._in_flight = threading.Lock()

    async def execute(self) -> NewsRefreshResult:
        if not self._in_flight.acquire(blocking=False):
            self._logger.info("News refresh already running, skipping")
            return NewsRefreshResult(skipped=True)
        try:
            symbols = quoted_symbols(self._repository)
            if not symbols:
                return NewsRefreshResult()
            try:
                items = await self._news.fetch_news(symbols, self._limit)
            except NewsError as exc:
                self._logger.error(f"News refresh failed: {exc}")
                return NewsRefreshResult(error_message=str(exc))
            if self._snapshot_sync is not None:
                self._snapshot_sync.sync_news(items)
            self._logger.info(f"Fetched {len(items)} headlines")
            return NewsRefreshResult(items=items)
        finally:
            self._in_flight.release()


__all__ = [
    "RefreshPricesUseCase",
    "RefreshNewsUseCase",
    "PriceRefreshResult",
    "NewsRefreshResult",
    "quoted_symbols",
]
