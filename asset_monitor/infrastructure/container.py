"""Composition root for wiring infrastructure adapters."""

from dataclasses import dataclass

from asset_monitor.application.ports.analysis import AnalysisProviderPort
from asset_monitor.application.ports.database import DatabaseEnginePort
from asset_monitor.application.ports.market_data import (
    NewsProviderPort,
    QuoteProviderPort,
)
from asset_monitor.application.ports.portfolio_repository import (
    PortfolioRepositoryPort,
)
from asset_monitor.application.ports.snapshot_store import SnapshotStorePort
from asset_monitor.application.use_cases import (
    AnalyzePortfolioUseCase,
    AnalyzePurchaseTimingUseCase,
    ExportPortfolioUseCase,
    GetPortfolioOverviewUseCase,
    GetPriceHistoryUseCase,
    ManageAssetsUseCase,
    ManagePlansUseCase,
    ManageWatchlistUseCase,
    RecordTransactionUseCase,
    RefreshNewsUseCase,
    RefreshPricesUseCase,
    SyncWidgetSnapshotUseCase,
)
from asset_monitor.infrastructure.analysis import OpenAIAnalysisProvider
from asset_monitor.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from asset_monitor.infrastructure.news import GoogleNewsProvider
from asset_monitor.infrastructure.portfolio_repository import (
    SqlAlchemyPortfolioRepository,
)
from asset_monitor.infrastructure.quotes import YahooQuoteProvider
from asset_monitor.infrastructure.settings import AppSettings
from asset_monitor.infrastructure.snapshot_store import JsonSnapshotStore


def build_settings() -> AppSettings:
    """Return settings read from the environment."""
    return AppSettings.from_env()


def build_database_adapter(
    settings: AppSettings | None = None,
) -> DatabaseEnginePort:
    """Return the database adapter instance."""
    if settings is None:
        return SqlAlchemyDatabaseEngineAdapter()
    return SqlAlchemyDatabaseEngineAdapter(settings.db_path)


def build_portfolio_repository(
    db_port: DatabaseEnginePort | None = None,
) -> PortfolioRepositoryPort:
    """Return the portfolio repository with its schema prepared."""
    resolved_db = db_port or build_database_adapter()
    repository = SqlAlchemyPortfolioRepository(resolved_db)
    repository.prepare()
    return repository


def build_quote_provider() -> QuoteProviderPort:
    return YahooQuoteProvider()


def build_news_provider() -> NewsProviderPort:
    return GoogleNewsProvider()


def build_analysis_provider(
    settings: AppSettings | None = None,
) -> AnalysisProviderPort:
    """Return the chat-completion provider configured from settings."""
    resolved = settings or build_settings()
    return OpenAIAnalysisProvider(
        api_key=resolved.openai_api_key,
        model=resolved.openai_model,
    )


def build_snapshot_store(
    settings: AppSettings | None = None,
) -> SnapshotStorePort:
    resolved = settings or build_settings()
    return JsonSnapshotStore(resolved.shared_dir)


@dataclass(frozen=True)
class Services:
    """Use cases wired against the same repository and snapshot store."""

    settings: AppSettings
    repository: PortfolioRepositoryPort
    snapshot_store: SnapshotStorePort
    overview: GetPortfolioOverviewUseCase
    snapshot_sync: SyncWidgetSnapshotUseCase
    assets: ManageAssetsUseCase
    transactions: RecordTransactionUseCase
    plans: ManagePlansUseCase
    refresh_prices: RefreshPricesUseCase
    refresh_news: RefreshNewsUseCase
    analysis: AnalyzePortfolioUseCase
    timing: AnalyzePurchaseTimingUseCase
    export: ExportPortfolioUseCase
    price_history: GetPriceHistoryUseCase
    watchlist: ManageWatchlistUseCase


def build_services(settings: AppSettings | None = None) -> Services:
    """Return every use case wired to the configured adapters."""
    resolved = settings or build_settings()
    repository = build_portfolio_repository(build_database_adapter(resolved))
    snapshot_store = build_snapshot_store(resolved)
    quotes = build_quote_provider()
    overview = GetPortfolioOverviewUseCase(repository)
    snapshot_sync = SyncWidgetSnapshotUseCase(overview, snapshot_store)
    return Services(
        settings=resolved,
        repository=repository,
        snapshot_store=snapshot_store,
        overview=overview,
        snapshot_sync=snapshot_sync,
        assets=ManageAssetsUseCase(repository, quotes, snapshot_sync),
        transactions=RecordTransactionUseCase(repository, snapshot_sync),
        plans=ManagePlansUseCase(repository, snapshot_sync),
        refresh_prices=RefreshPricesUseCase(repository, quotes, snapshot_sync),
        refresh_news=RefreshNewsUseCase(
            repository,
            build_news_provider(),
            snapshot_sync,
            limit=resolved.news_limit,
        ),
        analysis=AnalyzePortfolioUseCase(
            repository,
            overview,
            build_analysis_provider(resolved),
        ),
        timing=AnalyzePurchaseTimingUseCase(quotes),
        export=ExportPortfolioUseCase(repository, overview),
        price_history=GetPriceHistoryUseCase(quotes),
        watchlist=ManageWatchlistUseCase(repository, quotes),
    )


__all__ = [
    "Services",
    "build_settings",
    "build_database_adapter",
    "build_portfolio_repository",
    "build_quote_provider",
    "build_news_provider",
    "build_analysis_provider",
    "build_snapshot_store",
    "build_services",
]
