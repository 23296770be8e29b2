"""Fold an asset's ledger into its position figures.

Rows are walked in date order using the average-cost method: a sale removes
cost basis in proportion to the shares sold. Income rows (dividends and
interest) never touch shares or cost. Deposits and withdrawals move the
balance by their dollar amount. The fold never raises; malformed input flows
straight through the arithmetic.
"""

from collections.abc import Iterable
from decimal import Decimal

from asset_monitor.domain.models import (
    CashEntry,
    Entry,
    PositionEntry,
    Transaction,
    TransactionSummary,
    TransactionType,
    to_entry,
)
from asset_monitor.utils.time_utils import as_utc


def summarize_entries(
    entries: Iterable[Entry],
    is_cash: bool = False,
) -> TransactionSummary:
    """Compute the position summary from typed ledger entries.

    Args:
        entries: Entries for a single asset, in any order.
        is_cash: Whether the asset is the cash asset.

    Returns:
        TransactionSummary: Shares (clamped at zero), average cost, remaining
        cost basis, income and realized gains.
    """
    shares = Decimal("0")
    total_cost = Decimal("0")
    total_dividends = Decimal("0")
    realized_gains = Decimal("0")

    for entry in sorted(entries, key=_chronological_key):
        kind = entry.transaction_type
        amount = entry.amount
        if kind == TransactionType.BUY:
            total_cost += amount
            shares += _units(entry)
        elif kind == TransactionType.SELL:
            units = _units(entry)
            cost_basis = (
                (total_cost / shares) * units if shares > 0 else Decimal("0")
            )
            realized_gains += amount - cost_basis
            total_cost -= cost_basis
            shares -= units
        elif kind in (TransactionType.DIVIDEND, TransactionType.INTEREST):
            total_dividends += amount
        elif kind == TransactionType.DEPOSIT:
            shares += amount
            total_cost += amount
        elif kind == TransactionType.WITHDRAWAL:
            shares -= amount
            total_cost -= amount

    if is_cash:
        average_cost = Decimal("1")
    elif shares > 0:
        average_cost = total_cost / shares
    else:
        average_cost = Decimal("0")

    return TransactionSummary(
        total_shares=max(shares, Decimal("0")),
        average_cost=average_cost,
        total_invested=total_cost,
        total_dividends=total_dividends,
        realized_gains=realized_gains,
    )


def summarize_transactions(
    transactions: Iterable[Transaction],
    is_cash: bool = False,
) -> TransactionSummary:
    """Compute the position summary from stored rows."""
    return summarize_entries(
        (to_entry(transaction, is_cash) for transaction in transactions),
        is_cash=is_cash,
    )


def _units(entry: Entry) -> Decimal:
    if isinstance(entry, PositionEntry):
        return entry.shares
    return entry.amount


def _chronological_key(entry: PositionEntry | CashEntry):
    # Same-day rows keep their recording order.
    return (entry.date, as_utc(entry.created_at))


__all__ = ["summarize_entries", "summarize_transactions"]
