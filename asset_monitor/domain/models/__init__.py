"""Domain models package."""

from .finance import (
    EMPTY_SUMMARY,
    AllocationItem,
    Holding,
    PeriodChange,
    PortfolioAnalysis,
    PortfolioTotals,
    TimingAnalysis,
    TimingRecommendation,
    TransactionSummary,
)
from .ledger import (
    CashEntry,
    Entry,
    JournalEntry,
    PositionEntry,
    posting_value,
    to_entry,
)
from .portfolio import (
    Asset,
    AssetType,
    HistoricalPrice,
    InvestmentPlan,
    NewsItem,
    PlanFrequency,
    PlanScheduleItem,
    PlanStatus,
    PriceQuote,
    Transaction,
    TransactionType,
    WatchlistItem,
    new_id,
)

__all__ = [
    "Asset",
    "AssetType",
    "Transaction",
    "TransactionType",
    "InvestmentPlan",
    "PlanFrequency",
    "PlanStatus",
    "PlanScheduleItem",
    "PriceQuote",
    "HistoricalPrice",
    "NewsItem",
    "WatchlistItem",
    "new_id",
    "PositionEntry",
    "CashEntry",
    "Entry",
    "JournalEntry",
    "posting_value",
    "to_entry",
    "TransactionSummary",
    "EMPTY_SUMMARY",
    "Holding",
    "AllocationItem",
    "PortfolioTotals",
    "TimingRecommendation",
    "TimingAnalysis",
    "PortfolioAnalysis",
    "PeriodChange",
]
