"""Tests for the AnalyzePortfolioUseCase."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from asset_monitor.application.errors import (
    AnalysisError,
    AnalysisNotConfiguredError,
    RateLimitedError,
)
from asset_monitor.application.use_cases import (
    AnalyzePortfolioUseCase,
    GetPortfolioOverviewUseCase,
)
from asset_monitor.application.use_cases.analysis_prompts import (
    FINANCIAL_ANALYST_PROMPT,
    INVESTMENT_ADVISOR_PROMPT,
)
from asset_monitor.domain.models import (
    Asset,
    AssetType,
    Transaction,
    TransactionType,
)


def _provider(reply="Looks diversified.", configured=True):
    provider = MagicMock()
    provider.is_configured = configured
    provider.complete.return_value = reply
    return provider


def _use_case(repository, provider, logger):
    overview = GetPortfolioOverviewUseCase(repository, logger=logger)
    return AnalyzePortfolioUseCase(
        repository,
        overview,
        provider,
        logger=logger,
    )


def _seed(repository) -> Asset:
    asset = Asset(symbol="AAPL", asset_type=AssetType.STOCK, name="Apple")
    repository.add_asset(asset)
    repository.add_transactions(
        [
            Transaction(
                asset_id=asset.id,
                transaction_type=TransactionType.BUY,
                date=date(2024, 1, 2),
                shares=Decimal("10"),
                price_per_share=Decimal("150"),
            )
        ]
    )
    return asset


def test_analyze_portfolio_returns_text_and_totals(repository, fake_logger):
    _seed(repository)
    provider = _provider()
    use_case = _use_case(repository, provider, fake_logger)

    result = use_case.analyze_portfolio()

    assert result.ok
    assert result.text == "Looks diversified."
    assert result.analysis.number_of_holdings == 1
    assert result.analysis.totals.total_value == Decimal("1500")
    prompt = provider.complete.call_args.args[0]
    assert "AAPL (Stock): $1500.00" in prompt
    assert provider.complete.call_args.kwargs["system_prompt"] == (
        FINANCIAL_ANALYST_PROMPT
    )
    assert not use_case.is_analyzing


def test_unconfigured_provider_returns_message(repository, fake_logger):
    _seed(repository)
    provider = _provider(configured=False)
    use_case = _use_case(repository, provider, fake_logger)

    result = use_case.analyze_portfolio()

    assert not result.ok
    assert result.error_message == str(AnalysisNotConfiguredError())
    assert not use_case.is_configured
    provider.complete.assert_not_called()


def test_provider_error_becomes_message(repository, fake_logger):
    _seed(repository)
    provider = _provider()
    provider.complete.side_effect = RateLimitedError()
    use_case = _use_case(repository, provider, fake_logger)

    result = use_case.analyze_portfolio()

    assert result.error_message == (
        "Rate limited. Please wait a moment and try again."
    )
    assert result.analysis is None
    fake_logger.error.assert_called_once()
    assert not use_case.is_analyzing


def test_generic_error_uses_default_message(repository, fake_logger):
    asset = _seed(repository)
    provider = _provider()
    provider.complete.side_effect = AnalysisError()
    use_case = _use_case(repository, provider, fake_logger)

    result = use_case.analyze_asset(asset.id)

    assert result.error_message == "Request failed. Please try again."


def test_analyze_asset_includes_recent_transactions(repository, fake_logger):
    asset = _seed(repository)
    provider = _provider("Hold.")
    use_case = _use_case(repository, provider, fake_logger)

    result = use_case.analyze_asset(asset.id)

    assert result.text == "Hold."
    prompt = provider.complete.call_args.args[0]
    assert "Please analyze my position in Apple (AAPL):" in prompt
    assert "- 01/02/24: Buy 10.00 @ $150.00" in prompt


def test_unknown_asset_is_reported(repository, fake_logger):
    provider = _provider()
    use_case = _use_case(repository, provider, fake_logger)

    assert use_case.analyze_asset("missing").error_message == (
        "Asset missing not found"
    )
    assert use_case.suggest_plan("missing", Decimal("100")).error_message == (
        "Asset missing not found"
    )
    provider.complete.assert_not_called()


def test_suggest_plan_uses_advisor_prompt(repository, fake_logger):
    asset = _seed(repository)
    provider = _provider("Buy monthly.")
    use_case = _use_case(repository, provider, fake_logger)

    result = use_case.suggest_plan(asset.id, Decimal("5000"))

    assert result.text == "Buy monthly."
    prompt = provider.complete.call_args.args[0]
    assert prompt.startswith("I'm planning to invest $5000.00 in Apple (AAPL).")
    assert provider.complete.call_args.kwargs["system_prompt"] == (
        INVESTMENT_ADVISOR_PROMPT
    )
