"""Use case requesting written analysis of the portfolio."""

from dataclasses import dataclass
from decimal import Decimal

from asset_monitor.application.errors import (
    AnalysisError,
    AnalysisNotConfiguredError,
)
from asset_monitor.application.ports.analysis import AnalysisProviderPort
from asset_monitor.application.ports.portfolio_repository import (
    PortfolioRepositoryPort,
)
from asset_monitor.application.use_cases.analysis_prompts import (
    FINANCIAL_ANALYST_PROMPT,
    INVESTMENT_ADVISOR_PROMPT,
    build_asset_prompt,
    build_plan_suggestion_prompt,
    build_portfolio_prompt,
)
from asset_monitor.application.use_cases.get_portfolio_overview import (
    GetPortfolioOverviewUseCase,
)
from asset_monitor.domain.models import PortfolioAnalysis
from asset_monitor.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of an analysis request.

    Attributes:
        text: The reply, None on failure.
        analysis: Whole-portfolio analysis with the totals it was based on.
        error_message: User-facing failure description, if any.
    """

    text: str | None = None
    analysis: PortfolioAnalysis | None = None
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        return self.error_message is None


class AnalyzePortfolioUseCase:
    """Build prompts from portfolio figures and send them for analysis."""

    def __init__(
        self,
        repository: PortfolioRepositoryPort,
        overview_use_case: GetPortfolioOverviewUseCase,
        analysis_provider: AnalysisProviderPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing access to the portfolio tables.
            overview_use_case: Use case computing holdings and totals.
            analysis_provider: Port sending prompts to the model.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._overview_use_case = overview_use_case
        self._provider = analysis_provider
        self._logger = logger or get_app_logger()
        self._in_flight = False

    @property
    def is_analyzing(self) -> bool:
        return self._in_flight

    @property
    def is_configured(self) -> bool:
        return self._provider.is_configured

    def analyze_portfolio(self) -> AnalysisResult:
        """Return an assessment of the whole portfolio."""
        overview = self._overview_use_case.execute()
        prompt = build_portfolio_prompt(overview.holdings, overview.plans)
        result = self._complete(prompt)
        if not result.ok:
            return result
        return AnalysisResult(
            text=result.text,
            analysis=PortfolioAnalysis(
                summary=result.text,
                totals=overview.totals,
                number_of_holdings=len(overview.holdings),
            ),
        )

    def analyze_asset(self, asset_id: str) -> AnalysisResult:
        """Return an assessment of one position."""
        overview = self._overview_use_case.execute()
        holding = overview.holding_for(asset_id)
        if holding is None:
            return AnalysisResult(error_message=f"Asset {asset_id} not found")
        transactions = self._repository.list_transactions(asset_id)
        return self._complete(build_asset_prompt(holding, transactions))

    def suggest_plan(self, asset_id: str, amount: Decimal) -> AnalysisResult:
        """Return a suggested purchase schedule for ``amount`` dollars."""
        overview = self._overview_use_case.execute()
        holding = overview.holding_for(asset_id)
        if holding is None:
            return AnalysisResult(error_message=f"Asset {asset_id} not found")
        return self._complete(
            build_plan_suggestion_prompt(holding, amount),
            system_prompt=INVESTMENT_ADVISOR_PROMPT,
        )

    def _complete(
        self,
        prompt: str,
        system_prompt: str | None = None,
    ) -> AnalysisResult:
        if self._in_flight:
            return AnalysisResult(error_message="Analysis already in progress")
        if not self._provider.is_configured:
            return AnalysisResult(
                error_message=str(AnalysisNotConfiguredError())
            )
        self._in_flight = True
        try:
            text = self._provider.complete(
                prompt,
                system_prompt=system_prompt or FINANCIAL_ANALYST_PROMPT,
            )
        except AnalysisError as exc:
            self._logger.error(f"Analysis failed: {exc}")
            return AnalysisResult(error_message=str(exc))
        finally:
            self._in_flight = False
        self._logger.info(f"Analysis received ({len(text)} characters)")
        return AnalysisResult(text=text)


__all__ = ["AnalyzePortfolioUseCase", "AnalysisResult"]
