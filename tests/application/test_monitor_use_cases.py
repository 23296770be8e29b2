"""Tests for the Monitor page use cases."""

from datetime import date
from decimal import Decimal

import pytest

from asset_monitor.application.use_cases import (
    GetPriceHistoryUseCase,
    ManageWatchlistUseCase,
)
from asset_monitor.application.use_cases.monitor import CHART_ERROR_MESSAGE
from asset_monitor.domain.models import HistoricalPrice


def _bars(*closes: str) -> list[HistoricalPrice]:
    return [
        HistoricalPrice(date=date(2024, 2, day), close=Decimal(close))
        for day, close in enumerate(closes, start=1)
    ]


@pytest.mark.asyncio
async def test_history_uses_range_and_reports_period_change(
    quote_provider,
    fake_logger,
):
    quote_provider.histories["AAPL"] = list(reversed(_bars("180", "190", "198")))
    use_case = GetPriceHistoryUseCase(quote_provider, logger=fake_logger)

    result = await use_case.execute("AAPL", "6M")

    assert quote_provider.calls == [("history", ("AAPL", "6mo"))]
    assert [bar.close for bar in result.points] == [
        Decimal("180"),
        Decimal("190"),
        Decimal("198"),
    ]
    assert result.change.change == Decimal("18")
    assert result.change.change_percent == Decimal("10")
    assert result.error_message is None


@pytest.mark.asyncio
async def test_history_defaults_to_one_month(quote_provider, fake_logger):
    quote_provider.histories["AAPL"] = _bars("100")
    use_case = GetPriceHistoryUseCase(quote_provider, logger=fake_logger)

    result = await use_case.execute("AAPL")

    assert result.range_label == "1M"
    assert quote_provider.calls == [("history", ("AAPL", "1mo"))]


@pytest.mark.asyncio
async def test_history_failure_gives_message(quote_provider, fake_logger):
    use_case = GetPriceHistoryUseCase(quote_provider, logger=fake_logger)

    result = await use_case.execute("NOPE", "1Y")

    assert result.points == []
    assert result.change is None
    assert result.error_message == CHART_ERROR_MESSAGE
    fake_logger.warning.assert_called_once()


@pytest.mark.asyncio
async def test_history_rejects_unknown_range(quote_provider, fake_logger):
    use_case = GetPriceHistoryUseCase(quote_provider, logger=fake_logger)

    with pytest.raises(ValueError):
        await use_case.execute("AAPL", "10Y")


@pytest.mark.asyncio
async def test_watchlist_add_names_symbol_from_quote(
    repository,
    quote_provider,
    fake_logger,
):
    quote_provider.set_price("TSLA", "250", name="Tesla, Inc.")
    use_case = ManageWatchlistUseCase(
        repository, quote_provider, logger=fake_logger
    )

    item = await use_case.add(" tsla ")

    assert item.symbol == "TSLA"
    assert item.name == "Tesla, Inc."
    assert use_case.list_items() == [item]


@pytest.mark.asyncio
async def test_watchlist_add_keeps_given_name_without_lookup(
    repository,
    quote_provider,
    fake_logger,
):
    use_case = ManageWatchlistUseCase(
        repository, quote_provider, logger=fake_logger
    )

    item = await use_case.add("NVDA", "Nvidia")

    assert item.name == "Nvidia"
    assert quote_provider.calls == []


@pytest.mark.asyncio
async def test_watchlist_add_without_quote_falls_back_to_symbol(
    repository,
    quote_provider,
    fake_logger,
):
    use_case = ManageWatchlistUseCase(
        repository, quote_provider, logger=fake_logger
    )

    item = await use_case.add("QQQ")

    assert item.name == "QQQ"
    fake_logger.warning.assert_called_once()


@pytest.mark.asyncio
async def test_watchlist_rejects_duplicates_and_bad_symbols(
    repository,
    quote_provider,
    fake_logger,
):
    use_case = ManageWatchlistUseCase(
        repository, quote_provider, logger=fake_logger
    )
    await use_case.add("AMD", "AMD Inc.")

    with pytest.raises(ValueError, match="already in your watchlist"):
        await use_case.add("amd")
    with pytest.raises(ValueError, match="not a valid symbol"):
        await use_case.add("X")
    assert len(use_case.list_items()) == 1


@pytest.mark.asyncio
async def test_watchlist_rows_and_remove(
    repository,
    quote_provider,
    fake_logger,
):
    quote_provider.set_price("SPY", "505", "500")
    use_case = ManageWatchlistUseCase(
        repository, quote_provider, logger=fake_logger
    )
    spy = await use_case.add("SPY", "S&P 500")
    dia = await use_case.add("DIA", "Dow")

    rows = {row.item.symbol: row for row in await use_case.rows()}

    assert rows["SPY"].quote.price == Decimal("505")
    assert rows["SPY"].daily_change_percent == Decimal("1")
    assert rows["DIA"].quote is None
    assert rows["DIA"].daily_change_percent == Decimal("0")

    use_case.remove(spy.id)
    assert use_case.list_items() == [dia]


@pytest.mark.asyncio
async def test_watchlist_rows_empty_skips_fetch(
    repository,
    quote_provider,
    fake_logger,
):
    use_case = ManageWatchlistUseCase(
        repository, quote_provider, logger=fake_logger
    )

    assert await use_case.rows() == []
    assert quote_provider.calls == []
