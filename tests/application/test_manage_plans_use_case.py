"""Tests for the ManagePlansUseCase."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from asset_monitor.application.use_cases import ManagePlansUseCase
from asset_monitor.domain.models import (
    Asset,
    AssetType,
    PlanFrequency,
    PlanStatus,
)


@pytest.fixture
def asset(repository):
    stock = Asset(symbol="VTI", asset_type=AssetType.ETF, name="Total Market")
    repository.add_asset(stock)
    return stock


def _add(use_case, asset):
    return use_case.add_plan(
        asset.id,
        Decimal("1200"),
        12,
        PlanFrequency.MONTHLY,
        date(2024, 1, 1),
    )


def test_add_plan_stores_active_plan(repository, asset, fake_logger):
    sync = MagicMock()
    use_case = ManagePlansUseCase(repository, sync, logger=fake_logger)

    plan = _add(use_case, asset)

    assert repository.get_plan(plan.id) == plan
    assert plan.amount_per_purchase == Decimal("100")
    sync.execute.assert_called_once()


def test_add_plan_for_unknown_asset_raises(repository, fake_logger):
    use_case = ManagePlansUseCase(repository, logger=fake_logger)

    with pytest.raises(LookupError):
        use_case.add_plan(
            "missing",
            Decimal("100"),
            1,
            PlanFrequency.WEEKLY,
            date(2024, 1, 1),
        )


def test_add_plan_rejects_impossible_terms(repository, asset, fake_logger):
    use_case = ManagePlansUseCase(repository, logger=fake_logger)

    with pytest.raises(ValueError):
        use_case.add_plan(
            asset.id,
            Decimal("100"),
            0,
            PlanFrequency.WEEKLY,
            date(2024, 1, 1),
        )
    assert repository.plans == {}


def test_lifecycle_transitions_are_persisted(repository, asset, fake_logger):
    sync = MagicMock()
    use_case = ManagePlansUseCase(repository, sync, logger=fake_logger)
    plan = _add(use_case, asset)

    assert use_case.pause(plan.id).status == PlanStatus.PAUSED
    assert repository.get_plan(plan.id).status == PlanStatus.PAUSED
    assert use_case.resume(plan.id).status == PlanStatus.ACTIVE
    assert use_case.cancel(plan.id).status == PlanStatus.CANCELLED
    assert repository.get_plan(plan.id).status == PlanStatus.CANCELLED
    assert sync.execute.call_count == 4


def test_noop_transition_does_not_write(repository, asset, fake_logger):
    sync = MagicMock()
    use_case = ManagePlansUseCase(repository, sync, logger=fake_logger)
    plan = _add(use_case, asset)
    sync.reset_mock()

    use_case.resume(plan.id)

    sync.execute.assert_not_called()


def test_edit_plan_recomputes_amount(repository, asset, fake_logger):
    use_case = ManagePlansUseCase(repository, logger=fake_logger)
    plan = _add(use_case, asset)

    edited = use_case.edit_plan(plan.id, number_of_purchases=6)

    assert edited.amount_per_purchase == Decimal("200")
    assert repository.get_plan(plan.id).number_of_purchases == 6


def test_delete_and_schedule(repository, asset, fake_logger):
    use_case = ManagePlansUseCase(repository, logger=fake_logger)
    plan = _add(use_case, asset)

    items = use_case.schedule(plan.id, today=date(2024, 1, 15))
    assert len(items) == 12
    assert items[0].is_overdue

    use_case.delete(plan.id)
    assert repository.plans == {}
    with pytest.raises(LookupError):
        use_case.schedule(plan.id)
