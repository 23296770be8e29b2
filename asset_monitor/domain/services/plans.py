"""Dollar-cost averaging plan lifecycle.

States move active <-> paused, end in completed once every planned purchase
is recorded, or in cancelled from any state. Due dates are derived from the
start date and cadence and are never stored.
"""

from dataclasses import replace
from datetime import date, timedelta
from decimal import Decimal

from asset_monitor.domain.models import (
    InvestmentPlan,
    PlanFrequency,
    PlanScheduleItem,
    PlanStatus,
)


def create_plan(
    asset_id: str,
    total_amount: Decimal,
    number_of_purchases: int,
    frequency: PlanFrequency,
    start_date: date,
    custom_days_between: int | None = None,
    notes: str | None = None,
) -> InvestmentPlan:
    """Create an active plan with its per-purchase amount fixed.

    Raises:
        ValueError: If the purchase count is not positive, or a custom
            cadence has no positive day count.
    """
    _validate_terms(number_of_purchases, frequency, custom_days_between)
    return InvestmentPlan(
        asset_id=asset_id,
        total_amount=total_amount,
        number_of_purchases=number_of_purchases,
        amount_per_purchase=total_amount / Decimal(number_of_purchases),
        frequency=frequency,
        custom_days_between=custom_days_between,
        start_date=start_date,
        notes=notes,
    )


def edit_plan(
    plan: InvestmentPlan,
    *,
    total_amount: Decimal | None = None,
    number_of_purchases: int | None = None,
    frequency: PlanFrequency | None = None,
    custom_days_between: int | None = None,
    start_date: date | None = None,
    notes: str | None = None,
) -> InvestmentPlan:
    """Apply an explicit edit and recompute the per-purchase amount."""
    total = plan.total_amount if total_amount is None else total_amount
    count = (
        plan.number_of_purchases
        if number_of_purchases is None
        else number_of_purchases
    )
    cadence = plan.frequency if frequency is None else frequency
    custom_days = (
        plan.custom_days_between
        if custom_days_between is None
        else custom_days_between
    )
    _validate_terms(count, cadence, custom_days)
    completed = min(plan.completed_purchases, count)
    status = plan.status
    if completed >= count and not status.is_terminal:
        status = PlanStatus.COMPLETED
    return replace(
        plan,
        total_amount=total,
        number_of_purchases=count,
        amount_per_purchase=total / Decimal(count),
        frequency=cadence,
        custom_days_between=custom_days,
        start_date=plan.start_date if start_date is None else start_date,
        notes=plan.notes if notes is None else notes,
        completed_purchases=completed,
        status=status,
    )


def record_purchase(plan: InvestmentPlan) -> InvestmentPlan:
    """Count one purchase; reaching the planned count completes the plan.

    Completed and cancelled plans are returned unchanged.
    """
    if (
        plan.status.is_terminal
        or plan.completed_purchases >= plan.number_of_purchases
    ):
        return plan
    completed = plan.completed_purchases + 1
    status = plan.status
    if completed >= plan.number_of_purchases:
        status = PlanStatus.COMPLETED
    return replace(plan, completed_purchases=completed, status=status)


def pause(plan: InvestmentPlan) -> InvestmentPlan:
    if plan.status != PlanStatus.ACTIVE:
        return plan
    return replace(plan, status=PlanStatus.PAUSED)


def resume(plan: InvestmentPlan) -> InvestmentPlan:
    if plan.status != PlanStatus.PAUSED:
        return plan
    return replace(plan, status=PlanStatus.ACTIVE)


def cancel(plan: InvestmentPlan) -> InvestmentPlan:
    return replace(plan, status=PlanStatus.CANCELLED)


def next_purchase_date(plan: InvestmentPlan) -> date | None:
    """Return when the next purchase is due, or None if nothing is due."""
    if (
        plan.status != PlanStatus.ACTIVE
        or plan.completed_purchases >= plan.number_of_purchases
    ):
        return None
    return plan.start_date + timedelta(
        days=plan.days_between * plan.completed_purchases
    )


def is_overdue(plan: InvestmentPlan, today: date | None = None) -> bool:
    due = next_purchase_date(plan)
    if due is None:
        return False
    return due < (today or date.today())


def schedule(
    plan: InvestmentPlan,
    today: date | None = None,
) -> list[PlanScheduleItem]:
    """Return every planned purchase with its completion state."""
    today = today or date.today()
    items = []
    for index in range(plan.number_of_purchases):
        scheduled = plan.start_date + timedelta(days=plan.days_between * index)
        completed = index < plan.completed_purchases
        items.append(
            PlanScheduleItem(
                purchase_number=index + 1,
                scheduled_date=scheduled,
                amount=plan.amount_per_purchase,
                is_completed=completed,
                is_overdue=not completed and scheduled < today,
            )
        )
    return items


def progress_percent(plan: InvestmentPlan) -> Decimal:
    if plan.number_of_purchases <= 0:
        return Decimal("0")
    return (
        Decimal(plan.completed_purchases)
        / Decimal(plan.number_of_purchases)
        * Decimal("100")
    )


def remaining_purchases(plan: InvestmentPlan) -> int:
    return max(plan.number_of_purchases - plan.completed_purchases, 0)


def remaining_amount(plan: InvestmentPlan) -> Decimal:
    return Decimal(remaining_purchases(plan)) * plan.amount_per_purchase


def invested_amount(plan: InvestmentPlan) -> Decimal:
    return Decimal(plan.completed_purchases) * plan.amount_per_purchase


def _validate_terms(
    number_of_purchases: int,
    frequency: PlanFrequency,
    custom_days_between: int | None,
) -> None:
    if number_of_purchases <= 0:
        raise ValueError("A plan needs at least one purchase")
    if frequency == PlanFrequency.CUSTOM and not (
        custom_days_between and custom_days_between > 0
    ):
        raise ValueError("A custom cadence needs a positive day count")


__all__ = [
    "create_plan",
    "edit_plan",
    "record_purchase",
    "pause",
    "resume",
    "cancel",
    "next_purchase_date",
    "is_overdue",
    "schedule",
    "progress_percent",
    "remaining_purchases",
    "remaining_amount",
    "invested_amount",
]
