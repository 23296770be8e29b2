"""Use cases behind the Monitor page: price charts and the watchlist."""

from dataclasses import dataclass, field
from decimal import Decimal

from asset_monitor.application.errors import QuoteError
from asset_monitor.application.ports.market_data import QuoteProviderPort
from asset_monitor.application.ports.portfolio_repository import (
    PortfolioRepositoryPort,
)
from asset_monitor.domain.constants import CHART_RANGES, DEFAULT_CHART_RANGE
from asset_monitor.domain.models import (
    HistoricalPrice,
    PeriodChange,
    PriceQuote,
    WatchlistItem,
)
from asset_monitor.domain.policies import is_valid_symbol
from asset_monitor.domain.services.valuation import period_change
from asset_monitor.infrastructure.logging.logger import get_app_logger
from asset_monitor.utils.decimal_utils import percent_of


CHART_ERROR_MESSAGE = "Unable to load chart data. Please try again."


@dataclass(frozen=True)
class PriceHistoryResult:
    """Bars of one chart range and the move across it.

    Attributes:
        symbol: Charted symbol.
        range_label: Key of ``CHART_RANGES`` that was requested.
        points: Daily bars, oldest first.
        change: Move from the first to the last bar, None without bars.
        error_message: User-facing failure description, if any.
    """

    symbol: str
    range_label: str
    points: list[HistoricalPrice] = field(default_factory=list)
    change: PeriodChange | None = None
    error_message: str | None = None


@dataclass(frozen=True)
class WatchlistRow:
    """A watched symbol with its latest quote, when one came back."""

    item: WatchlistItem
    quote: PriceQuote | None = None

    @property
    def daily_change_percent(self) -> Decimal:
        if self.quote is None or self.quote.previous_close is None:
            return Decimal("0")
        return percent_of(self.quote.change, self.quote.previous_close)


class GetPriceHistoryUseCase:
    """Load the price history drawn on the Monitor chart."""

    def __init__(self, quote_provider: QuoteProviderPort, logger=None) -> None:
        self._quotes = quote_provider
        self._logger = logger or get_app_logger()

    async def execute(
        self,
        symbol: str,
        range_label: str = DEFAULT_CHART_RANGE,
    ) -> PriceHistoryResult:
        """Fetch bars for ``symbol`` over ``range_label``.

        Raises:
            ValueError: If ``range_label`` is not a known chart range.
        """
        if range_label not in CHART_RANGES:
            raise ValueError(f"Unknown chart range: {range_label}")
        try:
            history = await self._quotes.fetch_history(
                symbol,
                CHART_RANGES[range_label],
            )
        except QuoteError as exc:
            self._logger.warning(f"Chart data failed for {symbol}: {exc}")
            return PriceHistoryResult(
                symbol=symbol,
                range_label=range_label,
                error_message=CHART_ERROR_MESSAGE,
            )
        points = sorted(history, key=lambda bar: bar.date)
        return PriceHistoryResult(
            symbol=symbol,
            range_label=range_label,
            points=points,
            change=period_change(points),
        )


class ManageWatchlistUseCase:
    """Follow symbols that are not part of the portfolio."""

    def __init__(
        self,
        repository: PortfolioRepositoryPort,
        quote_provider: QuoteProviderPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port storing the watchlist.
            quote_provider: Port used for names and latest prices.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._quotes = quote_provider
        self._logger = logger or get_app_logger()

    def list_items(self) -> list[WatchlistItem]:
        return self._repository.list_watchlist()

    async def add(self, symbol: str, name: str = "") -> WatchlistItem:
        """Watch a symbol, naming it after its quote when no name is given.

        Raises:
            ValueError: If the symbol is unusable or already watched.
        """
        cleaned = symbol.strip().upper()
        if not is_valid_symbol(cleaned):
            raise ValueError(f"'{cleaned}' is not a valid symbol")
        if any(item.symbol == cleaned for item in self.list_items()):
            raise ValueError(f"'{cleaned}' is already in your watchlist")

        name = name.strip()
        if not name or name == cleaned:
            try:
                quote = await self._quotes.fetch_quote(cleaned)
            except QuoteError as exc:
                self._logger.warning(f"Could not look up {cleaned}: {exc}")
            else:
                name = quote.name or name
        item = WatchlistItem(symbol=cleaned, name=name or cleaned)
        self._repository.add_watchlist_item(item)
        self._logger.info(f"Added {cleaned} to the watchlist")
        return item

    def remove(self, item_id: str) -> None:
        self._repository.delete_watchlist_item(item_id)
        self._logger.info(f"Removed watchlist item {item_id}")

    async def rows(self) -> list[WatchlistRow]:
        """Return watched symbols with their latest quotes."""
        items = self.list_items()
        if not items:
            return []
        quotes = await self._quotes.fetch_quotes([item.symbol for item in items])
        return [WatchlistRow(item=item, quote=quotes.get(item.symbol)) for item in items]


__all__ = [
    "CHART_ERROR_MESSAGE",
    "GetPriceHistoryUseCase",
    "ManageWatchlistUseCase",
    "PriceHistoryResult",
    "WatchlistRow",
]
