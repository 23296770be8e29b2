"""Use case exporting portfolio data as CSV or JSON."""

import csv
import io
import json
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from asset_monitor.application.ports.portfolio_repository import (
    PortfolioRepositoryPort,
)
from asset_monitor.application.use_cases.get_portfolio_overview import (
    GetPortfolioOverviewUseCase,
)
from asset_monitor.domain.models import Asset, InvestmentPlan, Transaction
from asset_monitor.infrastructure.logging.logger import get_app_logger


ASSET_COLUMNS = [
    "Symbol",
    "Type",
    "Name",
    "Shares",
    "Average Cost",
    "Current Price",
    "Total Value",
    "Gain/Loss %",
]
TRANSACTION_COLUMNS = [
    "Date",
    "Symbol",
    "Type",
    "Shares",
    "Price",
    "Total",
    "Notes",
]


@dataclass(frozen=True)
class ExportResult:
    """Files written by an export run."""

    paths: list[Path]


class ExportPortfolioUseCase:
    """Render assets, transactions and plans for backup or spreadsheets."""

    def __init__(
        self,
        repository: PortfolioRepositoryPort,
        overview_use_case: GetPortfolioOverviewUseCase,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing access to the portfolio tables.
            overview_use_case: Use case computing holdings.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._overview_use_case = overview_use_case
        self._logger = logger or get_app_logger()

    def assets_csv(self) -> str:
        overview = self._overview_use_case.execute()
        rows = [
            [
                h.asset.symbol,
                h.asset.asset_type.value,
                h.asset.name,
                h.total_shares,
                h.average_cost,
                h.current_price or Decimal("0"),
                h.total_value,
                round(h.gain_loss_percent, 2),
            ]
            for h in overview.holdings
        ]
        return _to_csv(ASSET_COLUMNS, rows)

    def transactions_csv(self) -> str:
        symbols = {a.id: a.symbol for a in self._repository.list_assets()}
        rows = [
            [
                tx.date.isoformat(),
                symbols.get(tx.asset_id, "?"),
                tx.transaction_type.value,
                tx.shares,
                tx.price_per_share,
                tx.total_amount,
                tx.notes or "",
            ]
            for tx in self._repository.list_transactions()
        ]
        return _to_csv(TRANSACTION_COLUMNS, rows)

    def backup_json(self) -> str:
        """Return every stored record as an indented JSON document."""
        document = {
            "assets": [
                _asset_record(a) for a in self._repository.list_assets()
            ],
            "transactions": [
                _transaction_record(tx)
                for tx in self._repository.list_transactions()
            ],
            "investment_plans": [
                _plan_record(plan) for plan in self._repository.list_plans()
            ],
            "export_date": datetime.now().isoformat(timespec="seconds"),
        }
        return json.dumps(document, indent=2, sort_keys=True)

    def write(
        self,
        directory: Path,
        formats: tuple[str, ...] = ("csv", "json"),
    ) -> ExportResult:
        """Write export files stamped with the current time.

        Args:
            directory: Destination folder, created when missing.
            formats: Any of "csv" and "json".

        Returns:
            ExportResult: Paths of the files written.
        """
        directory.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        paths = []
        if "csv" in formats:
            paths.append(
                _write(directory / f"assets_{stamp}.csv", self.assets_csv())
            )
            paths.append(
                _write(
                    directory / f"transactions_{stamp}.csv",
                    self.transactions_csv(),
                )
            )
        if "json" in formats:
            paths.append(
                _write(
                    directory / f"asset_monitor_backup_{stamp}.json",
                    self.backup_json(),
                )
            )
        self._logger.info(f"Exported {len(paths)} file(s) to {directory}")
        return ExportResult(paths=paths)


def _to_csv(header: list[str], rows: list[list]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return buffer.getvalue()


def _write(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


def _decimal(value: Decimal | None) -> str | None:
    return None if value is None else str(value)


def _asset_record(asset: Asset) -> dict:
    return {
        "id": asset.id,
        "symbol": asset.symbol,
        "type": asset.asset_type.value,
        "name": asset.name,
        "cd_maturity_date": (
            asset.cd_maturity_date.isoformat() if asset.cd_maturity_date else None
        ),
        "cd_interest_rate": _decimal(asset.cd_interest_rate),
        "created_at": asset.created_at.isoformat(),
    }


def _transaction_record(tx: Transaction) -> dict:
    return {
        "id": tx.id,
        "asset_id": tx.asset_id,
        "type": tx.transaction_type.value,
        "date": tx.date.isoformat(),
        "shares": _decimal(tx.shares),
        "price_per_share": _decimal(tx.price_per_share),
        "notes": tx.notes,
        "linked_plan_id": tx.linked_plan_id,
        "linked_transaction_id": tx.linked_transaction_id,
        "created_at": tx.created_at.isoformat(),
    }


def _plan_record(plan: InvestmentPlan) -> dict:
    return {
        "id": plan.id,
        "asset_id": plan.asset_id,
        "total_amount": _decimal(plan.total_amount),
        "number_of_purchases": plan.number_of_purchases,
        "amount_per_purchase": _decimal(plan.amount_per_purchase),
        "frequency": plan.frequency.value,
        "custom_days_between": plan.custom_days_between,
        "start_date": plan.start_date.isoformat(),
        "completed_purchases": plan.completed_purchases,
        "status": plan.status.value,
        "notes": plan.notes,
        "created_at": plan.created_at.isoformat(),
    }


__all__ = ["ExportPortfolioUseCase", "ExportResult"]
