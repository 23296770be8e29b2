"""Use case writing the shared snapshot read by the widget CLI.

The snapshot mirrors what the dashboard shows: portfolio totals with the
largest holdings, active plans with their next purchase, and the latest
headlines.
"""

from collections.abc import Iterable, Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from asset_monitor.application.ports.snapshot_store import SnapshotStorePort
from asset_monitor.application.use_cases.get_portfolio_overview import (
    GetPortfolioOverviewUseCase,
    PortfolioOverview,
)
from asset_monitor.domain.constants import WIDGET_NEWS_ITEMS, WIDGET_TOP_HOLDINGS
from asset_monitor.domain.models import (
    Holding,
    InvestmentPlan,
    NewsItem,
    TimingAnalysis,
)
from asset_monitor.domain.services.plans import is_overdue, next_purchase_date
from asset_monitor.domain.services.valuation import top_holdings
from asset_monitor.infrastructure.logging.logger import get_app_logger


class SyncWidgetSnapshotUseCase:
    """Serialize overview figures into the shared snapshot store."""

    def __init__(
        self,
        overview_use_case: GetPortfolioOverviewUseCase,
        snapshot_store: SnapshotStorePort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            overview_use_case: Use case computing the current overview.
            snapshot_store: Port persisting the shared snapshot.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._overview_use_case = overview_use_case
        self._store = snapshot_store
        self._logger = logger or get_app_logger()

    def execute(
        self,
        news: Iterable[NewsItem] | None = None,
        timings: Mapping[str, TimingAnalysis] | None = None,
        today: date | None = None,
    ) -> PortfolioOverview:
        """Write portfolio, plan and (when given) news sections.

        Args:
            news: Latest headlines; the news section is left untouched when
                None or empty.
            timings: Timing verdicts keyed by symbol for plan entries.
            today: Reference date for overdue checks.

        Returns:
            PortfolioOverview: The overview that was serialized.
        """
        today = today or date.today()
        overview = self._overview_use_case.execute(today)
        self._store.write_portfolio(portfolio_payload(overview))
        self._store.write_plans(plans_payload(overview, timings or {}, today))
        items = list(news or [])
        if items:
            self.sync_news(items)
        self._logger.info(
            f"Snapshot synced: {len(overview.holdings)} holdings, "
            f"{len(overview.active_plans)} active plans"
        )
        return overview

    def sync_news(self, news: Iterable[NewsItem]) -> None:
        """Write only the news section."""
        self._store.write_news(news_payload(news))


def portfolio_payload(overview: PortfolioOverview) -> dict[str, Any]:
    totals = overview.totals
    return {
        "total_value": _number(totals.total_value),
        "daily_change": _number(totals.daily_change),
        "daily_change_percent": _number(totals.daily_change_percent),
        "top_holdings": [
            _holding_entry(holding)
            for holding in top_holdings(overview.holdings, WIDGET_TOP_HOLDINGS)
        ],
        "last_updated": datetime.now().isoformat(timespec="seconds"),
    }


def plans_payload(
    overview: PortfolioOverview,
    timings: Mapping[str, TimingAnalysis],
    today: date,
) -> list[dict[str, Any]]:
    entries = []
    for plan in overview.active_plans:
        holding = overview.holding_for(plan.asset_id)
        if holding is None:
            continue
        entries.append(
            _plan_entry(plan, holding, timings.get(holding.asset.symbol), today)
        )
    return entries


def news_payload(news: Iterable[NewsItem]) -> list[dict[str, Any]]:
    return [
        {
            "id": item.id,
            "symbol": item.symbol,
            "title": item.title,
            "publisher": item.publisher,
            "published_at": item.published_at.isoformat(),
            "link": item.link,
        }
        for item in list(news)[:WIDGET_NEWS_ITEMS]
    ]


def _holding_entry(holding: Holding) -> dict[str, Any]:
    return {
        "symbol": holding.asset.symbol,
        "price": _number(holding.display_price),
        "change_percent": _number(holding.daily_change_percent),
        "value": _number(holding.total_value),
    }


def _plan_entry(
    plan: InvestmentPlan,
    holding: Holding,
    timing: TimingAnalysis | None,
    today: date,
) -> dict[str, Any]:
    due = next_purchase_date(plan)
    entry = {
        "id": plan.id,
        "symbol": holding.asset.symbol,
        "asset_name": holding.asset.name,
        "current_holdings": _number(holding.total_value),
        "current_shares": _number(holding.total_shares),
        "current_price": _number(holding.display_price),
        "daily_change_percent": _number(holding.daily_change_percent),
        "total_plan_amount": _number(plan.total_amount),
        "completed_purchases": plan.completed_purchases,
        "total_purchases": plan.number_of_purchases,
        "next_purchase_amount": _number(plan.amount_per_purchase),
        "next_purchase_date": due.isoformat() if due else None,
        "is_overdue": is_overdue(plan, today),
        "timing": None,
    }
    if timing is not None:
        entry["timing"] = {
            "recommendation": timing.recommendation.value,
            "reason": timing.reason,
            "percent_from_average": (
                None
                if timing.percent_from_average is None
                else _number(timing.percent_from_average)
            ),
        }
    return entry


def _number(value: Decimal) -> float:
    return float(round(value, 4))


__all__ = [
    "SyncWidgetSnapshotUseCase",
    "portfolio_payload",
    "plans_payload",
    "news_payload",
]
