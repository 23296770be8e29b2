"""Tests for the Yahoo chart quote client."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import httpx
import pytest

from asset_monitor.application.errors import QuoteError
from asset_monitor.infrastructure.quotes import (
    YahooQuoteProvider,
    parse_history,
    parse_quote,
)


def _chart(price=190.5, previous=185.0, name="Apple Inc."):
    return {
        "chart": {
            "result": [
                {
                    "meta": {
                        "regularMarketPrice": price,
                        "chartPreviousClose": previous,
                        "shortName": name,
                        "currency": "USD",
                        "exchangeName": "NMS",
                    },
                    "timestamp": [1704153600, 1704240000, 1704326400],
                    "indicators": {
                        "quote": [
                            {
                                "close": [184.0, None, 190.5],
                                "open": [183.0, None, 186.0],
                                "high": [185.0, None, 191.0],
                                "low": [182.0, None, 185.5],
                                "volume": [1000, None, 1200],
                            }
                        ]
                    },
                }
            ]
        }
    }


def _provider(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return YahooQuoteProvider(client=client, logger=MagicMock()), client


def test_parse_quote_reads_meta():
    quote = parse_quote(_chart(), "aapl")

    assert quote.symbol == "AAPL"
    assert quote.name == "Apple Inc."
    assert quote.price == Decimal("190.5")
    assert quote.previous_close == Decimal("185.0")
    assert quote.change == Decimal("5.5")
    assert quote.day_high == Decimal("191.0")
    assert quote.exchange == "NMS"


def test_parse_history_skips_missing_closes():
    points = parse_history(_chart())

    assert [p.date for p in points] == [date(2024, 1, 2), date(2024, 1, 4)]
    assert points[-1].close == Decimal("190.5")
    assert points[-1].volume == 1200


@pytest.mark.asyncio
async def test_fetch_quote_requests_five_day_chart():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=_chart())

    provider, client = _provider(handler)
    async with client:
        quote = await provider.fetch_quote("AAPL")

    assert quote.price == Decimal("190.5")
    assert seen[0].url.path == "/v8/finance/chart/AAPL"
    assert seen[0].url.params["range"] == "5d"
    assert seen[0].url.params["interval"] == "1d"


@pytest.mark.asyncio
async def test_fetch_quotes_leaves_out_failures():
    def handler(request):
        if request.url.path.endswith("/BAD"):
            return httpx.Response(404)
        return httpx.Response(200, json=_chart())

    provider, client = _provider(handler)
    async with client:
        quotes = await provider.fetch_quotes(["AAPL", "BAD"])

    assert list(quotes) == ["AAPL"]


@pytest.mark.asyncio
async def test_rate_limit_is_reported():
    provider, client = _provider(lambda request: httpx.Response(429))

    async with client:
        with pytest.raises(QuoteError, match="Rate limited"):
            await provider.fetch_quote("AAPL")


@pytest.mark.asyncio
async def test_malformed_payload_raises_quote_error():
    provider, client = _provider(
        lambda request: httpx.Response(200, json={"chart": {"result": []}})
    )

    async with client:
        with pytest.raises(QuoteError):
            await provider.fetch_quote("AAPL")
        with pytest.raises(QuoteError):
            await provider.fetch_history("AAPL")


@pytest.mark.asyncio
async def test_transport_error_raises_quote_error():
    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    provider, client = _provider(handler)
    async with client:
        with pytest.raises(QuoteError):
            await provider.fetch_quote("AAPL")


@pytest.mark.asyncio
async def test_fetch_history_uses_requested_period():
    seen = []

    def handler(request):
        seen.append(request.url.params["range"])
        return httpx.Response(200, json=_chart())

    provider, client = _provider(handler)
    async with client:
        points = await provider.fetch_history("AAPL", "1mo")

    assert seen == ["1mo"]
    assert len(points) == 2
