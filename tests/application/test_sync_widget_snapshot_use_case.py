"""Tests for the SyncWidgetSnapshotUseCase."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from asset_monitor.application.use_cases import (
    GetPortfolioOverviewUseCase,
    SyncWidgetSnapshotUseCase,
)
from asset_monitor.domain.models import (
    Asset,
    AssetType,
    InvestmentPlan,
    NewsItem,
    PlanFrequency,
    PriceQuote,
    TimingAnalysis,
    TimingRecommendation,
    Transaction,
    TransactionType,
)


def _seed(repository) -> tuple[Asset, InvestmentPlan]:
    asset = Asset(symbol="VTI", asset_type=AssetType.ETF, name="Total Market")
    repository.add_asset(asset)
    repository.add_transactions(
        [
            Transaction(
                asset_id=asset.id,
                transaction_type=TransactionType.BUY,
                date=date(2024, 1, 1),
                shares=Decimal("10"),
                price_per_share=Decimal("100"),
            )
        ]
    )
    repository.cache_price(
        PriceQuote(
            symbol="VTI",
            price=Decimal("110"),
            previous_close=Decimal("100"),
        )
    )
    plan = InvestmentPlan(
        asset_id=asset.id,
        total_amount=Decimal("1200"),
        number_of_purchases=12,
        amount_per_purchase=Decimal("100"),
        frequency=PlanFrequency.MONTHLY,
        start_date=date(2024, 1, 1),
        completed_purchases=1,
    )
    repository.add_plan(plan)
    return asset, plan


def _use_case(repository, snapshot_store, logger):
    overview = GetPortfolioOverviewUseCase(repository, logger=logger)
    return SyncWidgetSnapshotUseCase(overview, snapshot_store, logger=logger)


def _news(count):
    published = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return [
        NewsItem(
            symbol="VTI",
            title=f"Headline {i}",
            publisher="Wire",
            link=f"https://example.com/{i}",
            published_at=published + timedelta(hours=i),
        )
        for i in range(count)
    ]


def test_execute_writes_portfolio_section(
    repository,
    snapshot_store,
    fake_logger,
):
    _seed(repository)
    use_case = _use_case(repository, snapshot_store, fake_logger)

    use_case.execute(today=date(2024, 3, 1))

    data = snapshot_store.read()
    assert data["total_value"] == 1100.0
    assert data["daily_change"] == 100.0
    assert data["daily_change_percent"] == 10.0
    assert data["top_holdings"] == [
        {
            "symbol": "VTI",
            "price": 110.0,
            "change_percent": 10.0,
            "value": 1100.0,
        }
    ]
    assert "last_updated" in data


def test_execute_writes_plan_with_timing(
    repository,
    snapshot_store,
    fake_logger,
):
    _, plan = _seed(repository)
    use_case = _use_case(repository, snapshot_store, fake_logger)
    timing = TimingAnalysis(
        recommendation=TimingRecommendation.WAIT,
        reason="Price is 6.0% above 20-day avg",
        percent_from_average=Decimal("6"),
    )

    use_case.execute(timings={"VTI": timing}, today=date(2024, 3, 1))

    (entry,) = snapshot_store.read()["dca_plans"]
    assert entry["id"] == plan.id
    assert entry["symbol"] == "VTI"
    assert entry["completed_purchases"] == 1
    assert entry["total_purchases"] == 12
    assert entry["next_purchase_amount"] == 100.0
    assert entry["next_purchase_date"] == "2024-01-31"
    assert entry["is_overdue"] is True
    assert entry["timing"] == {
        "recommendation": "wait",
        "reason": "Price is 6.0% above 20-day avg",
        "percent_from_average": 6.0,
    }


def test_news_section_left_alone_without_headlines(
    repository,
    snapshot_store,
    fake_logger,
):
    _seed(repository)
    snapshot_store.data["stock_news"] = [{"title": "old"}]
    use_case = _use_case(repository, snapshot_store, fake_logger)

    use_case.execute(news=[])

    assert snapshot_store.read()["stock_news"] == [{"title": "old"}]


def test_news_section_keeps_ten_items(
    repository,
    snapshot_store,
    fake_logger,
):
    _seed(repository)
    use_case = _use_case(repository, snapshot_store, fake_logger)
    items = _news(12)

    use_case.execute(news=items)

    news = snapshot_store.read()["stock_news"]
    assert len(news) == 10
    assert news[0] == {
        "id": items[0].id,
        "symbol": "VTI",
        "title": "Headline 0",
        "publisher": "Wire",
        "published_at": "2024-01-01T00:00:00+00:00",
        "link": "https://example.com/0",
    }
