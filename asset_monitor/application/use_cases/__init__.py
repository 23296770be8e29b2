"""Application use cases package."""

from .analyze_portfolio import AnalysisResult, AnalyzePortfolioUseCase
from .analyze_purchase_timing import AnalyzePurchaseTimingUseCase
from .export_portfolio import ExportPortfolioUseCase, ExportResult
from .get_portfolio_overview import GetPortfolioOverviewUseCase, PortfolioOverview
from .manage_assets import HousekeepingResult, ManageAssetsUseCase
from .manage_plans import ManagePlansUseCase
from .monitor import (
    GetPriceHistoryUseCase,
    ManageWatchlistUseCase,
    PriceHistoryResult,
    WatchlistRow,
)
from .record_transaction import RecordTransactionUseCase
from .refresh_market_data import (
    NewsRefreshResult,
    PriceRefreshResult,
    RefreshNewsUseCase,
    RefreshPricesUseCase,
)
from .sync_widget_snapshot import SyncWidgetSnapshotUseCase

__all__ = [
    "AnalysisResult",
    "AnalyzePortfolioUseCase",
    "AnalyzePurchaseTimingUseCase",
    "ExportPortfolioUseCase",
    "ExportResult",
    "GetPortfolioOverviewUseCase",
    "PortfolioOverview",
    "HousekeepingResult",
    "ManageAssetsUseCase",
    "ManagePlansUseCase",
    "GetPriceHistoryUseCase",
    "ManageWatchlistUseCase",
    "PriceHistoryResult",
    "WatchlistRow",
    "RecordTransactionUseCase",
    "NewsRefreshResult",
    "PriceRefreshResult",
    "RefreshNewsUseCase",
    "RefreshPricesUseCase",
    "SyncWidgetSnapshotUseCase",
]
