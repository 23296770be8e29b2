"""Paired position/cash bookkeeping.

Trading rows on a non-cash asset are mirrored on the cash asset: a buy is
funded by a withdrawal, a sale or income lands as a deposit. Both rows store
each other's id in ``linked_transaction_id``.
"""

from dataclasses import replace
from datetime import date
from decimal import Decimal

from asset_monitor.domain.models import (
    Asset,
    AssetType,
    JournalEntry,
    Transaction,
    TransactionType,
    new_id,
)


LEGACY_MATCH_TOLERANCE = Decimal("0.01")

_CASH_LEG_TYPES = {
    TransactionType.BUY: TransactionType.WITHDRAWAL,
    TransactionType.SELL: TransactionType.DEPOSIT,
    TransactionType.DIVIDEND: TransactionType.DEPOSIT,
    TransactionType.INTEREST: TransactionType.DEPOSIT,
}


def cash_leg_type(
    transaction_type: TransactionType,
) -> TransactionType | None:
    """Return the cash row type paired with a trading row, if any."""
    return _CASH_LEG_TYPES.get(transaction_type)


def cash_leg_note(transaction_type: TransactionType, symbol: str) -> str:
    """Return the note written on the cash leg of a trade."""
    if transaction_type == TransactionType.BUY:
        return f"Purchase: {symbol}"
    if transaction_type == TransactionType.SELL:
        return f"Sale: {symbol}"
    return f"{transaction_type.display_name}: {symbol}"


def cash_transaction(
    cash_asset: Asset,
    transaction_type: TransactionType,
    transaction_date: date,
    amount: Decimal,
    notes: str | None = None,
    linked_transaction_id: str | None = None,
) -> Transaction:
    """Build a row on the cash asset moving ``amount`` dollars."""
    return Transaction(
        asset_id=cash_asset.id,
        transaction_type=transaction_type,
        date=transaction_date,
        shares=amount,
        price_per_share=Decimal("1"),
        notes=notes,
        linked_transaction_id=linked_transaction_id,
    )


def post_trade(
    asset: Asset,
    transaction_type: TransactionType,
    transaction_date: date,
    shares: Decimal,
    price_per_share: Decimal,
    *,
    notes: str | None = None,
    linked_plan_id: str | None = None,
    cash_asset: Asset | None = None,
) -> JournalEntry:
    """Build the rows for one logical trade.

    Args:
        asset: Asset the trade is recorded against.
        transaction_type: Kind of row.
        transaction_date: Trade date.
        shares: Quantity (dollars when ``asset`` is cash).
        price_per_share: Unit price (1 when ``asset`` is cash).
        notes: Optional free text.
        linked_plan_id: Plan the purchase belongs to.
        cash_asset: Cash asset funding the trade; no cash leg when None.

    Returns:
        JournalEntry: The position row and, where applicable, its cash leg.
    """
    position = Transaction(
        asset_id=asset.id,
        transaction_type=transaction_type,
        date=transaction_date,
        shares=shares,
        price_per_share=price_per_share,
        notes=notes,
        linked_plan_id=linked_plan_id,
    )
    leg_type = cash_leg_type(transaction_type)
    if cash_asset is None or asset.asset_type == AssetType.CASH or leg_type is None:
        return JournalEntry(position=position)

    cash_id = new_id()
    position = replace(position, linked_transaction_id=cash_id)
    cash = replace(
        cash_transaction(
            cash_asset,
            leg_type,
            transaction_date,
            position.total_amount,
            notes=cash_leg_note(transaction_type, asset.symbol),
            linked_transaction_id=position.id,
        ),
        id=cash_id,
    )
    return JournalEntry(position=position, cash=cash)


def amend_counterpart(
    transaction: Transaction,
    counterpart: Transaction,
    symbol: str | None,
    counterpart_is_cash: bool = True,
) -> Transaction:
    """Carry an edited row's date and amount to its paired row.

    When the counterpart is the cash leg it also receives the standard note
    for the trade. When the edited row is the cash leg, the trading row keeps
    its share count and absorbs the new amount in its unit price.

    Args:
        transaction: The edited row.
        counterpart: Its paired row.
        symbol: Symbol of the trading asset, used for the cash-leg note.
        counterpart_is_cash: Whether ``counterpart`` lives on the cash asset.

    Returns:
        Transaction: Updated counterpart.
    """
    if not counterpart_is_cash:
        price = counterpart.price_per_share
        if counterpart.shares > 0:
            price = transaction.total_amount / counterpart.shares
        return replace(
            counterpart,
            date=transaction.date,
            price_per_share=price,
        )

    notes = counterpart.notes
    if symbol is not None and cash_leg_type(transaction.transaction_type):
        notes = cash_leg_note(transaction.transaction_type, symbol)
    return replace(
        counterpart,
        date=transaction.date,
        shares=transaction.total_amount,
        price_per_share=Decimal("1"),
        notes=notes,
    )


def link_legacy_pairs(
    transactions: list[Transaction],
    assets: list[Asset],
) -> list[tuple[Transaction, Transaction]]:
    """Pair unlinked buys with the withdrawals that funded them.

    A withdrawal matches when it sits on the cash asset, is unlinked, falls
    on the same day, moves the same amount within one cent, and its note
    mentions the bought symbol. Each withdrawal is used at most once.

    Returns:
        list[tuple[Transaction, Transaction]]: Updated (buy, withdrawal)
        pairs, already cross-linked.
    """
    cash_asset = next((a for a in assets if a.is_cash), None)
    if cash_asset is None:
        return []
    assets_by_id = {asset.id: asset for asset in assets}
    available = [
        tx
        for tx in transactions
        if tx.transaction_type == TransactionType.WITHDRAWAL
        and tx.asset_id == cash_asset.id
        and tx.linked_transaction_id is None
    ]
    pairs: list[tuple[Transaction, Transaction]] = []
    for buy in transactions:
        if (
            buy.transaction_type != TransactionType.BUY
            or buy.linked_transaction_id is not None
        ):
            continue
        asset = assets_by_id.get(buy.asset_id)
        if asset is None:
            continue
        match = next(
            (
                tx
                for tx in available
                if tx.date == buy.date
                and abs(tx.total_amount - buy.total_amount)
                < LEGACY_MATCH_TOLERANCE
                and asset.symbol in (tx.notes or "")
            ),
            None,
        )
        if match is None:
            continue
        available.remove(match)
        pairs.append(
            (
                replace(buy, linked_transaction_id=match.id),
                replace(match, linked_transaction_id=buy.id),
            )
        )
    return pairs


__all__ = [
    "cash_leg_type",
    "cash_leg_note",
    "cash_transaction",
    "post_trade",
    "amend_counterpart",
    "link_legacy_pairs",
]
