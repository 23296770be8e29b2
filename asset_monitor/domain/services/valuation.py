"""Domain services for holdings, totals and allocations."""

from collections import defaultdict
from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal

from asset_monitor.domain.models import (
    AllocationItem,
    Asset,
    AssetType,
    HistoricalPrice,
    Holding,
    PeriodChange,
    PortfolioTotals,
    PriceQuote,
    Transaction,
)
from asset_monitor.domain.services.aggregation import summarize_transactions
from asset_monitor.utils.decimal_utils import percent_of


CASH_PRICE = Decimal("1")

TYPE_LABELS = {
    AssetType.STOCK: "Stocks",
    AssetType.ETF: "ETFs",
    AssetType.TREASURY: "Treasury",
    AssetType.CD: "CDs",
    AssetType.CASH: "Cash",
}


def build_holdings(
    assets: Iterable[Asset],
    transactions: Iterable[Transaction],
    prices: Mapping[str, PriceQuote],
) -> list[Holding]:
    """Recompute every asset's derived figures.

    Args:
        assets: All assets.
        transactions: All stored rows.
        prices: Latest known quotes keyed by symbol.

    Returns:
        list[Holding]: One holding per asset, in the input asset order.
    """
    by_asset: dict[str, list[Transaction]] = defaultdict(list)
    for transaction in transactions:
        by_asset[transaction.asset_id].append(transaction)

    holdings = []
    for asset in assets:
        summary = summarize_transactions(
            by_asset.get(asset.id, []),
            is_cash=asset.is_cash,
        )
        if asset.is_cash:
            current, previous = CASH_PRICE, CASH_PRICE
        else:
            quote = prices.get(asset.symbol)
            current = quote.price if quote else None
            previous = quote.previous_close if quote else None
        holdings.append(
            Holding(
                asset=asset,
                summary=summary,
                current_price=current,
                previous_close=previous,
            )
        )
    return holdings


def type_value(holding: Holding, today: date | None = None) -> Decimal:
    """Value used for per-type totals; CDs count accrued interest."""
    if holding.asset.asset_type == AssetType.CD:
        accrued = holding.cd_current_value(today)
        return holding.total_cost if accrued is None else accrued
    return holding.total_value


def compute_totals(
    holdings: Iterable[Holding],
    today: date | None = None,
) -> PortfolioTotals:
    """Aggregate value, cost and daily change across holdings."""
    total_value = Decimal("0")
    total_cost = Decimal("0")
    daily_change = Decimal("0")
    value_by_type = {asset_type: Decimal("0") for asset_type in AssetType}
    for holding in holdings:
        total_value += holding.total_value
        total_cost += holding.total_cost
        daily_change += holding.total_shares * holding.daily_change
        value_by_type[holding.asset.asset_type] += type_value(holding, today)
    return PortfolioTotals(
        total_value=total_value,
        total_cost=total_cost,
        daily_change=daily_change,
        value_by_type=value_by_type,
    )


def allocation_by_asset(holdings: Iterable[Holding]) -> list[AllocationItem]:
    """Return each holding's share of total value, largest first."""
    holdings = list(holdings)
    total = sum((h.total_value for h in holdings), Decimal("0"))
    if total <= 0:
        return []
    ordered = sorted(holdings, key=lambda h: h.total_value, reverse=True)
    return [
        AllocationItem(
            name=holding.asset.symbol,
            value=holding.total_value,
            percentage=percent_of(holding.total_value, total),
            asset_type=holding.asset.asset_type,
        )
        for holding in ordered
    ]


def allocation_by_type(totals: PortfolioTotals) -> list[AllocationItem]:
    """Return each asset type's share of total value, largest first."""
    total = totals.total_value
    if total <= 0:
        return []
    items = [
        AllocationItem(
            name=TYPE_LABELS[asset_type],
            value=value,
            percentage=percent_of(value, total),
            asset_type=asset_type,
        )
        for asset_type, value in totals.value_by_type.items()
        if value > 0
    ]
    return sorted(items, key=lambda item: item.value, reverse=True)


def top_holdings(holdings: Iterable[Holding], limit: int) -> list[Holding]:
    return sorted(holdings, key=lambda h: h.total_value, reverse=True)[:limit]


def period_change(history: Iterable[HistoricalPrice]) -> PeriodChange | None:
    """Return the move from the first to the last bar, None when empty."""
    bars = sorted(history, key=lambda bar: bar.date)
    if not bars:
        return None
    first, last = bars[0], bars[-1]
    return PeriodChange(
        start_price=first.close,
        end_price=last.close,
        start_date=first.date,
        end_date=last.date,
    )


__all__ = [
    "CASH_PRICE",
    "TYPE_LABELS",
    "build_holdings",
    "type_value",
    "compute_totals",
    "allocation_by_asset",
    "allocation_by_type",
    "top_holdings",
    "period_change",
]
