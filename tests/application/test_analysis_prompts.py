"""Tests for the analysis prompt builders."""

from datetime import date, timedelta
from decimal import Decimal

from asset_monitor.application.use_cases.analysis_prompts import (
    build_asset_prompt,
    build_portfolio_prompt,
)
from asset_monitor.domain.models import (
    Asset,
    AssetType,
    Holding,
    InvestmentPlan,
    PlanFrequency,
    PlanStatus,
    Transaction,
    TransactionSummary,
    TransactionType,
)


def _holding(symbol, shares, cost, price, asset_type=AssetType.STOCK):
    asset = Asset(symbol=symbol, asset_type=asset_type, name=f"{symbol} Inc")
    summary = TransactionSummary(
        total_shares=Decimal(shares),
        average_cost=Decimal(cost),
        total_invested=Decimal(shares) * Decimal(cost),
        total_dividends=Decimal("0"),
        realized_gains=Decimal("0"),
    )
    return Holding(asset=asset, summary=summary, current_price=Decimal(price))


def test_portfolio_prompt_lists_holdings_by_value():
    small = _holding("AAA", "1", "100", "100")
    large = _holding("BBB", "3", "100", "100", AssetType.ETF)

    prompt = build_portfolio_prompt([small, large], [])

    assert "- Total Value: $400.00" in prompt
    assert "- Total Gain/Loss: $0.00 (0.0%)" in prompt
    assert prompt.index("BBB (ETF)") < prompt.index("AAA (Stock)")
    assert "BBB (ETF): $300.00 (75.0% of portfolio), Gain: 0.0%" in prompt
    assert "## Active Investment Plans" not in prompt


def test_portfolio_prompt_lists_only_active_plans():
    holding = _holding("VTI", "2", "200", "220")
    active = InvestmentPlan(
        asset_id=holding.asset.id,
        total_amount=Decimal("1200"),
        number_of_purchases=12,
        amount_per_purchase=Decimal("100"),
        frequency=PlanFrequency.MONTHLY,
        start_date=date(2024, 1, 1),
        completed_purchases=3,
    )
    paused = InvestmentPlan(
        asset_id=holding.asset.id,
        total_amount=Decimal("500"),
        number_of_purchases=5,
        amount_per_purchase=Decimal("100"),
        frequency=PlanFrequency.WEEKLY,
        start_date=date(2024, 1, 1),
        status=PlanStatus.PAUSED,
    )

    prompt = build_portfolio_prompt([holding], [active, paused])

    assert "- VTI: $1200.00 over 12 purchases (3/12 complete)" in prompt
    assert "$500.00" not in prompt


def test_asset_prompt_keeps_five_newest_transactions():
    holding = _holding("AAPL", "7", "100", "110")
    start = date(2024, 1, 1)
    transactions = [
        Transaction(
            asset_id=holding.asset.id,
            transaction_type=TransactionType.BUY,
            date=start + timedelta(days=i),
            shares=Decimal("1"),
            price_per_share=Decimal("100"),
        )
        for i in range(7)
    ]

    prompt = build_asset_prompt(holding, transactions)

    assert "- Current Price: $110.00" in prompt
    assert "- 01/07/24: Buy 1.00 @ $100.00" in prompt
    assert "- 01/03/24:" in prompt
    assert "- 01/02/24:" not in prompt
