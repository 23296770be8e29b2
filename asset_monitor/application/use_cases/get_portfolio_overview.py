"""Use case to assemble the derived view of the whole portfolio."""

from dataclasses import dataclass
from datetime import date

from asset_monitor.application.ports.portfolio_repository import (
    PortfolioRepositoryPort,
)
from asset_monitor.domain.models import (
    AllocationItem,
    Holding,
    InvestmentPlan,
    PlanStatus,
    PortfolioTotals,
)
from asset_monitor.domain.services.plans import is_overdue
from asset_monitor.domain.services.valuation import (
    allocation_by_asset,
    allocation_by_type,
    build_holdings,
    compute_totals,
)
from asset_monitor.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class PortfolioOverview:
    """Derived portfolio figures.

    Attributes:
        holdings: One holding per asset.
        totals: Aggregated value, cost and daily change.
        allocation_by_asset: Share of value per asset, largest first.
        allocation_by_type: Share of value per asset type, largest first.
        plans: All stored plans.
        active_plans: Plans currently running.
        overdue_plans: Active plans whose next purchase date has passed.
    """

    holdings: list[Holding]
    totals: PortfolioTotals
    allocation_by_asset: list[AllocationItem]
    allocation_by_type: list[AllocationItem]
    plans: list[InvestmentPlan]
    active_plans: list[InvestmentPlan]
    overdue_plans: list[InvestmentPlan]

    def holding_for(self, asset_id: str) -> Holding | None:
        return next(
            (h for h in self.holdings if h.asset.id == asset_id),
            None,
        )

    @property
    def cash_holding(self) -> Holding | None:
        return next((h for h in self.holdings if h.asset.is_cash), None)


class GetPortfolioOverviewUseCase:
    """Recompute holdings and totals from stored rows and cached prices."""

    def __init__(self, repository: PortfolioRepositoryPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing access to the portfolio tables.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(self, today: date | None = None) -> PortfolioOverview:
        """Return the portfolio overview.

        Args:
            today: Reference date for CD accrual and overdue checks.

        Returns:
            PortfolioOverview: Holdings, totals, allocations and plans.
        """
        today = today or date.today()
        assets = self._repository.list_assets()
        transactions = self._repository.list_transactions()
        prices = self._repository.get_cached_prices()
        plans = self._repository.list_plans()

        holdings = build_holdings(assets, transactions, prices)
        totals = compute_totals(holdings, today)
        active = [plan for plan in plans if plan.status == PlanStatus.ACTIVE]
        overdue = [plan for plan in active if is_overdue(plan, today)]

        self._logger.info(
            f"Portfolio overview computed: {len(holdings)} holdings, "
            f"value={totals.total_value}"
        )
        return PortfolioOverview(
            holdings=holdings,
            totals=totals,
            allocation_by_asset=allocation_by_asset(holdings),
            allocation_by_type=allocation_by_type(totals),
            plans=plans,
            active_plans=active,
            overdue_plans=overdue,
        )


__all__ = ["GetPortfolioOverviewUseCase", "PortfolioOverview"]
