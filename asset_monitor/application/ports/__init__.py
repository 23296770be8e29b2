"""Application ports package."""

from .analysis import AnalysisProviderPort
from .database import DatabaseEnginePort
from .market_data import NewsProviderPort, QuoteProviderPort
from .portfolio_repository import PortfolioRepositoryPort
from .snapshot_store import SnapshotStorePort

__all__ = [
    "AnalysisProviderPort",
    "DatabaseEnginePort",
    "NewsProviderPort",
    "QuoteProviderPort",
    "PortfolioRepositoryPort",
    "SnapshotStorePort",
]
