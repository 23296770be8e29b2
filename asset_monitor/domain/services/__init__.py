"""Domain services package."""

from .aggregation import summarize_entries, summarize_transactions
from .ledger import (
    amend_counterpart,
    cash_leg_note,
    cash_leg_type,
    cash_transaction,
    link_legacy_pairs,
    post_trade,
)
from .timing import analyze_timing
from .valuation import (
    allocation_by_asset,
    allocation_by_type,
    build_holdings,
    compute_totals,
    period_change,
    top_holdings,
)

__all__ = [
    "summarize_entries",
    "summarize_transactions",
    "amend_counterpart",
    "cash_leg_note",
    "cash_leg_type",
    "cash_transaction",
    "link_legacy_pairs",
    "post_trade",
    "analyze_timing",
    "allocation_by_asset",
    "allocation_by_type",
    "build_holdings",
    "compute_totals",
    "top_holdings",
    "period_change",
]
