"""Ports for market quotes and headlines."""

from typing import Protocol

from asset_monitor.domain.models import HistoricalPrice, NewsItem, PriceQuote


class QuoteProviderPort(Protocol):
    """Port exposing asynchronous access to a public quote endpoint."""

    async def fetch_quote(self, symbol: str) -> PriceQuote:
        """Return the latest quote.

        Raises:
            QuoteError: If the request fails or the payload is unusable.
        """

    async def fetch_quotes(self, symbols: list[str]) -> dict[str, PriceQuote]:
        """Fetch quotes concurrently; failed symbols are left out."""

    async def fetch_history(
        self,
        symbol: str,
        period: str = "1mo",
    ) -> list[HistoricalPrice]:
        """Return daily prices, oldest first.

        Raises:
            QuoteError: If the request fails or the payload is unusable.
        """


class NewsProviderPort(Protocol):
    """Port exposing asynchronous access to a headline feed."""

    async def fetch_news(self, symbols: list[str], limit: int) -> list[NewsItem]:
        """Return at most ``limit`` headlines across symbols, newest first."""


__all__ = ["QuoteProviderPort", "NewsProviderPort"]
