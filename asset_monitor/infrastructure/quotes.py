"""Quote client for the public Yahoo Finance chart endpoint."""

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, AsyncIterator

import httpx

from asset_monitor.application.errors import QuoteError
from asset_monitor.application.ports.market_data import QuoteProviderPort
from asset_monitor.domain.models import HistoricalPrice, PriceQuote
from asset_monitor.infrastructure.logging.logger import get_app_logger
from asset_monitor.utils.decimal_utils import (
    coerce_decimal,
    coerce_optional_decimal,
    percent_of,
)


BASE_URL = "https://query1.finance.yahoo.com/v8/finance/chart/"
DEFAULT_TIMEOUT_SECONDS = 10.0
HEADERS = {"User-Agent": "Mozilla/5.0"}


class YahooQuoteProvider(QuoteProviderPort):
    """Asynchronous quote client.

    A shared ``httpx.AsyncClient`` can be injected (tests pass one built on
    ``httpx.MockTransport``); otherwise one client is opened per call.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        logger=None,
    ) -> None:
        self._client = client
        self._base_url = base_url
        self._timeout = timeout
        self._logger = logger or get_app_logger()

    async def fetch_quote(self, symbol: str) -> PriceQuote:
        async with self._session() as client:
            return await self._fetch_quote(client, symbol)

    async def fetch_quotes(self, symbols: list[str]) -> dict[str, PriceQuote]:
        """Fetch quotes concurrently; failures are logged and left out."""
        async with self._session() as client:
            results = await asyncio.gather(
                *(self._try_fetch_quote(client, symbol) for symbol in symbols)
            )
        return {quote.symbol: quote for quote in results if quote is not None}

    async def fetch_history(
        self,
        symbol: str,
        period: str = "1mo",
    ) -> list[HistoricalPrice]:
        async with self._session() as client:
            payload = await self._get_chart(client, symbol, period)
        try:
            return parse_history(payload)
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise QuoteError(f"Failed to parse history for {symbol}") from exc

    async def _try_fetch_quote(
        self,
        client: httpx.AsyncClient,
        symbol: str,
    ) -> PriceQuote | None:
        try:
            return await self._fetch_quote(client, symbol)
        except QuoteError as exc:
            self._logger.warning(f"Error fetching {symbol}: {exc}")
            return None

    async def _fetch_quote(
        self,
        client: httpx.AsyncClient,
        symbol: str,
    ) -> PriceQuote:
        payload = await self._get_chart(client, symbol, "5d")
        try:
            return parse_quote(payload, symbol)
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise QuoteError(f"Failed to parse quote for {symbol}") from exc

    async def _get_chart(
        self,
        client: httpx.AsyncClient,
        symbol: str,
        period: str,
    ) -> dict[str, Any]:
        url = f"{self._base_url}{symbol}"
        try:
            response = await client.get(
                url,
                params={"interval": "1d", "range": period},
                headers=HEADERS,
            )
        except httpx.HTTPError as exc:
            raise QuoteError(f"Request failed for {symbol}: {exc}") from exc
        if response.status_code == 429:
            raise QuoteError("Rate limited, please try again later")
        if response.status_code != 200:
            raise QuoteError(
                f"Request failed for {symbol}: HTTP {response.status_code}"
            )
        try:
            return response.json()
        except ValueError as exc:
            raise QuoteError(f"Invalid JSON payload for {symbol}") from exc

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            yield client


def parse_quote(payload: dict[str, Any], symbol: str) -> PriceQuote:
    """Build a quote from a chart payload.

    Raises:
        KeyError, IndexError, TypeError: If the payload lacks a result.
    """
    result = payload["chart"]["result"][0]
    meta = result["meta"]
    price = coerce_decimal(meta.get("regularMarketPrice") or 0)
    previous = coerce_decimal(
        meta.get("chartPreviousClose") or meta.get("previousClose") or 0
    )
    change_percent = percent_of(price - previous, previous)

    day_high = day_low = None
    quotes = (result.get("indicators") or {}).get("quote") or []
    if quotes:
        highs = quotes[0].get("high") or []
        lows = quotes[0].get("low") or []
        day_high = coerce_optional_decimal(highs[-1]) if highs else None
        day_low = coerce_optional_decimal(lows[-1]) if lows else None

    return PriceQuote(
        symbol=symbol.upper(),
        name=meta.get("shortName") or symbol,
        price=price,
        previous_close=previous,
        change_percent=change_percent,
        day_high=day_high,
        day_low=day_low,
        currency=meta.get("currency") or "USD",
        exchange=meta.get("exchangeName") or "",
    )


def parse_history(payload: dict[str, Any]) -> list[HistoricalPrice]:
    """Build daily prices from a chart payload, skipping empty closes."""
    result = payload["chart"]["result"][0]
    timestamps = result["timestamp"]
    quote = result["indicators"]["quote"][0]
    closes = quote.get("close") or []
    opens = quote.get("open") or []
    highs = quote.get("high") or []
    lows = quote.get("low") or []
    volumes = quote.get("volume") or []

    points = []
    for index, timestamp in enumerate(timestamps):
        close = _at(closes, index)
        if close is None:
            continue
        volume = _at(volumes, index)
        points.append(
            HistoricalPrice(
                date=datetime.fromtimestamp(timestamp, tz=timezone.utc).date(),
                close=coerce_decimal(close),
                open=coerce_optional_decimal(_at(opens, index)),
                high=coerce_optional_decimal(_at(highs, index)),
                low=coerce_optional_decimal(_at(lows, index)),
                volume=None if volume is None else int(volume),
            )
        )
    return points


def _at(values: list, index: int):
    return values[index] if index < len(values) else None


__all__ = ["YahooQuoteProvider", "parse_quote", "parse_history"]
