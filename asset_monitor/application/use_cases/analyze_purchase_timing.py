"""Use case judging whether now is a good moment for a plan purchase."""

import asyncio

from asset_monitor.application.errors import QuoteError
from asset_monitor.application.ports.market_data import QuoteProviderPort
from asset_monitor.domain.models import TimingAnalysis, TimingRecommendation
from asset_monitor.domain.services.timing import analyze_timing
from asset_monitor.infrastructure.logging.logger import get_app_logger


HISTORY_PERIOD = "1mo"


class AnalyzePurchaseTimingUseCase:
    """Compare the latest close with its recent average."""

    def __init__(self, quote_provider: QuoteProviderPort, logger=None) -> None:
        self._quotes = quote_provider
        self._logger = logger or get_app_logger()

    async def execute(self, symbol: str) -> TimingAnalysis:
        """Return the timing verdict for one symbol.

        Failures to fetch history yield a neutral "Unable to analyze".
        """
        try:
            history = await self._quotes.fetch_history(symbol, HISTORY_PERIOD)
        except QuoteError as exc:
            self._logger.warning(f"Timing analysis failed for {symbol}: {exc}")
            return TimingAnalysis(
                recommendation=TimingRecommendation.NEUTRAL,
                reason="Unable to analyze",
            )
        return analyze_timing([point.close for point in history])

    async def execute_many(self, symbols: list[str]) -> dict[str, TimingAnalysis]:
        unique = list(dict.fromkeys(symbols))
        results = await asyncio.gather(*(self.execute(s) for s in unique))
        return dict(zip(unique, results))


__all__ = ["AnalyzePurchaseTimingUseCase"]
