"""Typed ledger entries and balanced journal entries.

A stored ``Transaction`` overloads ``shares`` as a dollar amount when it
belongs to the cash asset. The entry types below keep the two shapes apart:
``PositionEntry`` carries shares and a unit price, ``CashEntry`` carries a
single amount.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Union

from .portfolio import Transaction, TransactionType


@dataclass(frozen=True)
class PositionEntry:
    """Share-based movement on a tradable asset."""

    transaction_id: str
    transaction_type: TransactionType
    date: date
    shares: Decimal
    price_per_share: Decimal
    created_at: datetime

    @property
    def amount(self) -> Decimal:
        return self.shares * self.price_per_share


@dataclass(frozen=True)
class CashEntry:
    """Dollar movement on the cash asset."""

    transaction_id: str
    transaction_type: TransactionType
    date: date
    amount: Decimal
    created_at: datetime


Entry = Union[PositionEntry, CashEntry]


def to_entry(transaction: Transaction, is_cash: bool) -> Entry:
    """Convert a stored row into its typed entry.

    Args:
        transaction: Stored ledger row.
        is_cash: Whether the owning asset is the cash asset.

    Returns:
        Entry: ``CashEntry`` for cash assets, ``PositionEntry`` otherwise.
    """
    if is_cash:
        return CashEntry(
            transaction_id=transaction.id,
            transaction_type=transaction.transaction_type,
            date=transaction.date,
            amount=transaction.total_amount,
            created_at=transaction.created_at,
        )
    return PositionEntry(
        transaction_id=transaction.id,
        transaction_type=transaction.transaction_type,
        date=transaction.date,
        shares=transaction.shares,
        price_per_share=transaction.price_per_share,
        created_at=transaction.created_at,
    )


_POSTING_SIGNS = {
    TransactionType.BUY: Decimal("1"),
    TransactionType.SELL: Decimal("-1"),
    TransactionType.DIVIDEND: Decimal("-1"),
    TransactionType.INTEREST: Decimal("-1"),
    TransactionType.DEPOSIT: Decimal("1"),
    TransactionType.WITHDRAWAL: Decimal("-1"),
}


def posting_value(transaction: Transaction) -> Decimal:
    """Return the signed value of a row as a double-entry posting."""
    return _POSTING_SIGNS[transaction.transaction_type] * (
        transaction.total_amount
    )


@dataclass(frozen=True)
class JournalEntry:
    """One logical trade and the rows it produces.

    Attributes:
        position: Row recorded against the traded asset.
        cash: Paired row on the cash asset, when one exists.
    """

    position: Transaction
    cash: Transaction | None = None

    @property
    def postings(self) -> tuple[Transaction, ...]:
        if self.cash is None:
            return (self.position,)
        return (self.position, self.cash)

    @property
    def is_balanced(self) -> bool:
        """Return True when the postings net to zero."""
        if self.cash is None:
            return True
        total = sum(
            (posting_value(row) for row in self.postings),
            Decimal("0"),
        )
        return total == 0


__all__ = [
    "PositionEntry",
    "CashEntry",
    "Entry",
    "to_entry",
    "posting_value",
    "JournalEntry",
]
