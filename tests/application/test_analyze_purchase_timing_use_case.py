"""Tests for the AnalyzePurchaseTimingUseCase."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from asset_monitor.application.use_cases import AnalyzePurchaseTimingUseCase
from asset_monitor.domain.models import HistoricalPrice, TimingRecommendation


def _history(closes):
    start = date(2024, 1, 1)
    return [
        HistoricalPrice(date=start + timedelta(days=i), close=Decimal(c))
        for i, c in enumerate(closes)
    ]


@pytest.mark.asyncio
async def test_execute_analyzes_one_month_history(quote_provider, fake_logger):
    quote_provider.histories["AAPL"] = _history(["100"] * 19 + ["90"])
    use_case = AnalyzePurchaseTimingUseCase(quote_provider, logger=fake_logger)

    result = await use_case.execute("AAPL")

    assert result.recommendation == TimingRecommendation.GOOD
    assert quote_provider.calls == [("history", ("AAPL", "1mo"))]


@pytest.mark.asyncio
async def test_execute_failure_is_neutral(quote_provider, fake_logger):
    use_case = AnalyzePurchaseTimingUseCase(quote_provider, logger=fake_logger)

    result = await use_case.execute("NOPE")

    assert result.recommendation == TimingRecommendation.NEUTRAL
    assert result.reason == "Unable to analyze"
    fake_logger.warning.assert_called_once()


@pytest.mark.asyncio
async def test_execute_many_deduplicates(quote_provider, fake_logger):
    quote_provider.histories["VOO"] = _history(["100"] * 20)
    use_case = AnalyzePurchaseTimingUseCase(quote_provider, logger=fake_logger)

    results = await use_case.execute_many(["VOO", "VOO", "NOPE"])

    assert list(results) == ["VOO", "NOPE"]
    assert results["VOO"].reason == "Price is near 20-day average"
    assert len(quote_provider.calls) == 2
