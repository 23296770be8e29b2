"""Use case recording trades together with their cash counterpart."""

from datetime import date
from decimal import Decimal

from asset_monitor.application.ports.portfolio_repository import (
    PortfolioRepositoryPort,
)
from asset_monitor.domain.models import (
    Asset,
    JournalEntry,
    Transaction,
    TransactionType,
)
from asset_monitor.domain.services.ledger import amend_counterpart, post_trade
from asset_monitor.domain.services.plans import record_purchase
from asset_monitor.infrastructure.logging.logger import get_app_logger


class RecordTransactionUseCase:
    """Add, edit and delete transactions, keeping paired rows consistent."""

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

    def add(
        self,
        asset_id: str,
        transaction_type: TransactionType,
        transaction_date: date,
        shares: Decimal,
        price_per_share: Decimal,
        notes: str | None = None,
        linked_plan_id: str | None = None,
        update_cash: bool = True,
    ) -> JournalEntry:
        """Record a transaction and, for trades, its cash leg.

        Args:
            asset_id: Asset the row belongs to.
            transaction_type: Kind of row.
            transaction_date: Trade date.
            shares: Quantity, or dollars on the cash asset.
            price_per_share: Unit price, 1 on the cash asset.
            notes: Optional free text.
            linked_plan_id: Plan this purchase counts towards.
            update_cash: Whether to mirror the trade on the cash asset.

        Returns:
            JournalEntry: The stored row(s).

        Raises:
            LookupError: If the asset does not exist.
        """
        asset = self._require_asset(asset_id)
        cash_asset = self._cash_asset() if update_cash else None
        entry = post_trade(
            asset,
            transaction_type,
            transaction_date,
            shares,
            price_per_share,
            notes=notes,
            linked_plan_id=linked_plan_id,
            cash_asset=cash_asset,
        )
        self._repository.add_transactions(list(entry.postings))
        self._logger.info(
            f"Recorded {transaction_type.value} of {asset.symbol} "
            f"for {entry.position.total_amount}"
            + (" with cash leg" if entry.cash else "")
        )

        if linked_plan_id:
            plan = self._repository.get_plan(linked_plan_id)
            if plan is None:
                self._logger.warning(f"Plan {linked_plan_id} not found")
            else:
                self._repository.update_plan(record_purchase(plan))

        self._sync()
        return entry

    def update(
        self,
        transaction: Transaction,
        update_linked: bool = True,
    ) -> Transaction | None:
        """Persist an edited row and carry the change to its paired row.

        Returns:
            Transaction | None: The updated counterpart, if any.
        """
        self._repository.update_transactions([transaction])
        counterpart = None
        if update_linked and transaction.linked_transaction_id:
            counterpart = self._amend_counterpart(transaction)
        self._logger.info(f"Updated transaction {transaction.id}")
        self._sync()
        return counterpart

    def delete(self, transaction_id: str, delete_linked: bool = True) -> None:
        """Delete a row and, by default, its paired row."""
        transaction = self._repository.get_transaction(transaction_id)
        if transaction is None:
            self._logger.warning(f"Transaction {transaction_id} not found")
            return
        ids = [transaction.id]
        if delete_linked and transaction.linked_transaction_id:
            counterpart = self._repository.get_transaction(
                transaction.linked_transaction_id
            )
            if counterpart is not None:
                ids.append(counterpart.id)
        self._repository.delete_transactions(ids)
        self._logger.info(f"Deleted {len(ids)} transaction(s)")
        self._sync()

    def _amend_counterpart(self, transaction: Transaction) -> Transaction | None:
        counterpart = self._repository.get_transaction(
            transaction.linked_transaction_id
        )
        if counterpart is None:
            self._logger.warning(
                f"Linked transaction {transaction.linked_transaction_id} "
                "not found"
            )
            return None
        asset = self._repository.get_asset(transaction.asset_id)
        counterpart_asset = self._repository.get_asset(counterpart.asset_id)
        counterpart_is_cash = (
            counterpart_asset.is_cash if counterpart_asset else True
        )
        symbol = asset.symbol if asset and not asset.is_cash else None
        amended = amend_counterpart(
            transaction,
            counterpart,
            symbol,
            counterpart_is_cash=counterpart_is_cash,
        )
        self._repository.update_transactions([amended])
        return amended

    def _require_asset(self, asset_id: str) -> Asset:
        asset = self._repository.get_asset(asset_id)
        if asset is None:
            raise LookupError(f"Asset {asset_id} not found")
        return asset

    def _cash_asset(self) -> Asset | None:
        return next(
            (asset for asset in self._repository.list_assets() if asset.is_cash),
            None,
        )

    def _sync(self) -> None:
        if self._snapshot_sync is not None:
            self._snapshot_sync.execute()


__all__ = ["RecordTransactionUseCase"]
