"""Use case for dollar-cost averaging plans."""

from datetime import date
from decimal import Decimal
from typing import Callable

from asset_monitor.application.ports.portfolio_repository import (
    PortfolioRepositoryPort,
)
from asset_monitor.domain.models import (
    InvestmentPlan,
    PlanFrequency,
    PlanScheduleItem,
)
from asset_monitor.domain.services import plans as plan_rules
from asset_monitor.infrastructure.logging.logger import get_app_logger


class ManagePlansUseCase:
    """Create plans and drive them through their lifecycle."""

    def __init__(
        self,
        repository: PortfolioRepositoryPort,
        snapshot_sync=None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing access to the portfolio tables.
            snapshot_sync: Optional use case refreshing the shared snapshot
                after each change.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._snapshot_sync = snapshot_sync
        self._logger = logger or get_app_logger()

    def add_plan(
        self,
        asset_id: str,
        total_amount: Decimal,
        number_of_purchases: int,
        frequency: PlanFrequency,
        start_date: date,
        custom_days_between: int | None = None,
        notes: str | None = None,
    ) -> InvestmentPlan:
        """Create and store an active plan.

        Raises:
            LookupError: If the asset does not exist.
            ValueError: If the plan terms are impossible.
        """
        if self._repository.get_asset(asset_id) is None:
            raise LookupError(f"Asset {asset_id} not found")
        plan = plan_rules.create_plan(
            asset_id=asset_id,
            total_amount=total_amount,
            number_of_purchases=number_of_purchases,
            frequency=frequency,
            start_date=start_date,
            custom_days_between=custom_days_between,
            notes=notes,
        )
        self._repository.add_plan(plan)
        self._logger.info(
            f"Added plan {plan.id}: {total_amount} over "
            f"{number_of_purchases} purchases"
        )
        self._sync()
        return plan

    def edit_plan(self, plan_id: str, **changes) -> InvestmentPlan:
        """Apply an explicit edit; see ``plans.edit_plan`` for fields."""
        return self._transition(
            plan_id,
            lambda plan: plan_rules.edit_plan(plan, **changes),
            "edited",
        )

    def pause(self, plan_id: str) -> InvestmentPlan:
        return self._transition(plan_id, plan_rules.pause, "paused")

    def resume(self, plan_id: str) -> InvestmentPlan:
        return self._transition(plan_id, plan_rules.resume, "resumed")

    def cancel(self, plan_id: str) -> InvestmentPlan:
        return self._transition(plan_id, plan_rules.cancel, "cancelled")

    def delete(self, plan_id: str) -> None:
        self._repository.delete_plan(plan_id)
        self._logger.info(f"Deleted plan {plan_id}")
        self._sync()

    def schedule(
        self,
        plan_id: str,
        today: date | None = None,
    ) -> list[PlanScheduleItem]:
        return plan_rules.schedule(self._require_plan(plan_id), today)

    def _transition(
        self,
        plan_id: str,
        change: Callable[[InvestmentPlan], InvestmentPlan],
        verb: str,
    ) -> InvestmentPlan:
        plan = self._require_plan(plan_id)
        updated = change(plan)
        if updated != plan:
            self._repository.update_plan(updated)
            self._logger.info(f"Plan {plan_id} {verb} ({updated.status.value})")
            self._sync()
        return updated

    def _require_plan(self, plan_id: str) -> InvestmentPlan:
        plan = self._repository.get_plan(plan_id)
        if plan is None:
            raise LookupError(f"Plan {plan_id} not found")
        return plan

    def _sync(self) -> None:
        if self._snapshot_sync is not None:
            self._snapshot_sync.execute()


__all__ = ["ManagePlansUseCase"]
