"""Domain constants for the portfolio tracker."""

CASH_SYMBOL = "CASH"
CASH_NAME = "Cash"

REFRESH_INTERVAL_CHOICES = (0, 5, 15, 30, 60)
DEFAULT_REFRESH_MINUTES = 15

WIDGET_TOP_HOLDINGS = 6
WIDGET_NEWS_ITEMS = 10

# Monitor chart ranges: label -> history range of daily bars.
CHART_RANGES = {
    "5D": "5d",
    "1M": "1mo",
    "3M": "3mo",
    "6M": "6mo",
    "1Y": "1y",
    "5Y": "5y",
}
DEFAULT_CHART_RANGE = "1M"


__all__ = [
    "CASH_SYMBOL",
    "CASH_NAME",
    "REFRESH_INTERVAL_CHOICES",
    "DEFAULT_REFRESH_MINUTES",
    "WIDGET_TOP_HOLDINGS",
    "WIDGET_NEWS_ITEMS",
    "CHART_RANGES",
    "DEFAULT_CHART_RANGE",
]
