"""Purchase timing heuristic based on the 20-day average."""

from collections.abc import Sequence
from decimal import Decimal

from asset_monitor.domain.models import TimingAnalysis, TimingRecommendation


MIN_POINTS = 5
WINDOW = 20
HALF_WINDOW = 10
THRESHOLD_PERCENT = Decimal("5")


def analyze_timing(closes: Sequence[Decimal]) -> TimingAnalysis:
    """Compare the latest close with the recent average.

    Args:
        closes: Daily closes, oldest first.

    Returns:
        TimingAnalysis: ``good`` when more than 5% below the average,
        ``wait`` when more than 5% above, ``neutral`` otherwise.
    """
    if len(closes) < MIN_POINTS:
        return TimingAnalysis(
            recommendation=TimingRecommendation.NEUTRAL,
            reason="Insufficient data",
        )

    recent = list(closes[-WINDOW:])
    current = recent[-1]
    average = _mean(recent)
    if average == 0:
        return TimingAnalysis(
            recommendation=TimingRecommendation.NEUTRAL,
            reason="Insufficient data",
        )
    percent = (current - average) / average * Decimal("100")
    first_half = _mean(recent[:HALF_WINDOW])
    second_half = _mean(recent[-HALF_WINDOW:])
    trend = "upward" if second_half > first_half else "downward"

    if percent < -THRESHOLD_PERCENT:
        return TimingAnalysis(
            recommendation=TimingRecommendation.GOOD,
            reason=f"Price is {abs(percent):.1f}% below 20-day avg",
            percent_from_average=percent,
            trend=trend,
        )
    if percent > THRESHOLD_PERCENT:
        return TimingAnalysis(
            recommendation=TimingRecommendation.WAIT,
            reason=f"Price is {percent:.1f}% above 20-day avg",
            percent_from_average=percent,
            trend=trend,
        )
    return TimingAnalysis(
        recommendation=TimingRecommendation.NEUTRAL,
        reason="Price is near 20-day average",
        percent_from_average=percent,
        trend=trend,
    )


def _mean(values: Sequence[Decimal]) -> Decimal:
    return sum(values, Decimal("0")) / Decimal(len(values))


__all__ = ["analyze_timing"]
