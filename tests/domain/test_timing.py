"""Tests for the purchase timing heuristic."""

from decimal import Decimal

from asset_monitor.domain.models import TimingRecommendation
from asset_monitor.domain.services.timing import analyze_timing


def _closes(*values) -> list[Decimal]:
    return [Decimal(str(value)) for value in values]


def test_short_history_is_neutral() -> None:
    result = analyze_timing(_closes(1, 2, 3, 4))

    assert result.recommendation == TimingRecommendation.NEUTRAL
    assert result.reason == "Insufficient data"
    assert result.percent_from_average is None


def test_price_well_below_average_is_a_good_time() -> None:
    result = analyze_timing(_closes(*([100] * 19), 90))

    assert result.recommendation == TimingRecommendation.GOOD
    assert result.reason == "Price is 9.5% below 20-day avg"
    assert result.trend == "downward"


def test_price_well_above_average_suggests_waiting() -> None:
    result = analyze_timing(_closes(*([100] * 19), 110))

    assert result.recommendation == TimingRecommendation.WAIT
    assert result.reason.endswith("above 20-day avg")
    assert result.trend == "upward"


def test_price_near_average_is_neutral() -> None:
    result = analyze_timing(_closes(*([100] * 15), 101, 102, 103, 104, 105))

    assert result.recommendation == TimingRecommendation.NEUTRAL
    assert result.reason == "Price is near 20-day average"
    assert result.trend == "upward"


def test_only_last_twenty_closes_count() -> None:
    result = analyze_timing(_closes(*([1000] * 10), *([100] * 20)))

    assert result.percent_from_average == Decimal("0")
