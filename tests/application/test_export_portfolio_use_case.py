"""Tests for the ExportPortfolioUseCase."""

import csv
import io
import json
from datetime import date
from decimal import Decimal

import pytest

from asset_monitor.application.use_cases import (
    ExportPortfolioUseCase,
    GetPortfolioOverviewUseCase,
)
from asset_monitor.domain.models import (
    Asset,
    AssetType,
    InvestmentPlan,
    PlanFrequency,
    Transaction,
    TransactionType,
)
from asset_monitor.application.use_cases.export_portfolio import (
    ASSET_COLUMNS,
    TRANSACTION_COLUMNS,
)


@pytest.fixture
def use_case(repository, fake_logger):
    asset = Asset(symbol="AAPL", asset_type=AssetType.STOCK, name="Apple")
    repository.add_asset(asset)
    repository.add_transactions(
        [
            Transaction(
                asset_id=asset.id,
                transaction_type=TransactionType.BUY,
                date=date(2024, 2, 1),
                shares=Decimal("2"),
                price_per_share=Decimal("150.25"),
                notes="first lot",
            )
        ]
    )
    repository.add_plan(
        InvestmentPlan(
            asset_id=asset.id,
            total_amount=Decimal("600"),
            number_of_purchases=3,
            amount_per_purchase=Decimal("200"),
            frequency=PlanFrequency.MONTHLY,
            start_date=date(2024, 2, 1),
        )
    )
    overview = GetPortfolioOverviewUseCase(repository, logger=fake_logger)
    return ExportPortfolioUseCase(repository, overview, logger=fake_logger)


def _rows(text):
    return list(csv.reader(io.StringIO(text)))


def test_assets_csv(use_case):
    rows = _rows(use_case.assets_csv())

    assert rows[0] == ASSET_COLUMNS
    assert rows[1][:3] == ["AAPL", "stock", "Apple"]
    assert Decimal(rows[1][6]) == Decimal("300.50")


def test_transactions_csv(use_case):
    rows = _rows(use_case.transactions_csv())

    assert rows[0] == TRANSACTION_COLUMNS
    assert rows[1][0] == "2024-02-01"
    assert rows[1][1] == "AAPL"
    assert rows[1][2] == "buy"
    assert Decimal(rows[1][5]) == Decimal("300.50")
    assert rows[1][6] == "first lot"


def test_backup_json_keeps_decimals_as_text(use_case):
    document = json.loads(use_case.backup_json())

    assert set(document) == {
        "assets",
        "transactions",
        "investment_plans",
        "export_date",
    }
    (tx,) = document["transactions"]
    assert tx["shares"] == "2"
    assert tx["price_per_share"] == "150.25"
    (plan,) = document["investment_plans"]
    assert plan["total_amount"] == "600"
    assert plan["frequency"] == "monthly"
    assert plan["status"] == "active"


def test_write_creates_requested_files(use_case, tmp_path, fake_logger):
    target = tmp_path / "exports"

    result = use_case.write(target)

    names = sorted(path.name.split("_")[0] for path in result.paths)
    assert names == ["asset", "assets", "transactions"]
    assert all(path.exists() for path in result.paths)
    fake_logger.info.assert_called()


def test_write_json_only(use_case, tmp_path):
    result = use_case.write(tmp_path, formats=("json",))

    (path,) = result.paths
    assert path.suffix == ".json"
    assert json.loads(path.read_text(encoding="utf-8"))["assets"]
