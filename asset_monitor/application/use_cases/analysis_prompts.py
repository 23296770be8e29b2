"""Prompt builders for the portfolio analysis requests."""

from collections.abc import Iterable
from decimal import Decimal

from asset_monitor.domain.models import (
    Holding,
    InvestmentPlan,
    PlanStatus,
    Transaction,
)
from asset_monitor.utils.decimal_utils import percent_of


FINANCIAL_ANALYST_PROMPT = """\
You are a knowledgeable financial analyst assistant. Provide clear, actionable investment analysis.

Guidelines:
- Be concise but thorough
- Use bullet points for clarity
- Provide specific, actionable recommendations
- Always mention relevant risks
- Use plain language, avoid jargon
- Do not provide specific price targets or guarantees
- Remind the user that past performance doesn't guarantee future results
- This is for informational purposes only, not financial advice"""

INVESTMENT_ADVISOR_PROMPT = """\
You are an investment planning assistant specializing in dollar-cost averaging strategies.

Guidelines:
- Focus on practical DCA implementation
- Consider market volatility in your recommendations
- Provide specific numbers and timelines
- Explain the reasoning behind your suggestions
- This is for informational purposes only, not financial advice"""

RECENT_TRANSACTIONS = 5


def build_portfolio_prompt(
    holdings: list[Holding],
    plans: Iterable[InvestmentPlan],
) -> str:
    """Describe totals, holdings and active plans."""
    total_value = sum((h.total_value for h in holdings), Decimal("0"))
    total_cost = sum((h.total_cost for h in holdings), Decimal("0"))
    total_gain = total_value - total_cost
    gain_percent = percent_of(total_gain, total_cost)

    lines = [
        "Please analyze my investment portfolio:",
        "",
        "## Portfolio Summary",
        f"- Total Value: ${total_value:.2f}",
        f"- Total Invested: ${total_cost:.2f}",
        f"- Total Gain/Loss: ${total_gain:.2f} ({gain_percent:.1f}%)",
        "",
        "## Holdings",
    ]
    for holding in sorted(holdings, key=lambda h: h.total_value, reverse=True):
        allocation = percent_of(holding.total_value, total_value)
        lines.append(
            f"- {holding.asset.symbol} ({holding.asset.asset_type.display_name}): "
            f"${holding.total_value:.2f} ({allocation:.1f}% of portfolio), "
            f"Gain: {holding.gain_loss_percent:.1f}%"
        )

    symbols = {h.asset.id: h.asset.symbol for h in holdings}
    active = [
        plan
        for plan in plans
        if plan.status == PlanStatus.ACTIVE and plan.asset_id in symbols
    ]
    if active:
        lines += ["", "## Active Investment Plans"]
        for plan in active:
            lines.append(
                f"- {symbols[plan.asset_id]}: ${plan.total_amount:.2f} over "
                f"{plan.number_of_purchases} purchases "
                f"({plan.completed_purchases}/{plan.number_of_purchases} complete)"
            )

    lines += [
        "",
        "Please provide:",
        "1. Overall portfolio health assessment",
        "2. Diversification analysis (by asset type, sector, risk level)",
        "3. Top 3 strengths and weaknesses",
        "4. Specific actionable recommendations",
        "5. Risk assessment (1-10 scale with explanation)",
        "",
        "Keep the analysis concise but insightful.",
    ]
    return "\n".join(lines)


def build_asset_prompt(
    holding: Holding,
    transactions: list[Transaction],
) -> str:
    """Describe one position and its most recent transactions."""
    asset = holding.asset
    price = holding.current_price or Decimal("0")
    lines = [
        f"Please analyze my position in {asset.name} ({asset.symbol}):",
        "",
        f"- Type: {asset.asset_type.display_name}",
        f"- Shares: {holding.total_shares:.4f}",
        f"- Average Cost: ${holding.average_cost:.2f}",
        f"- Current Price: ${price:.2f}",
        f"- Total Value: ${holding.total_value:.2f}",
        f"- Gain/Loss: {holding.gain_loss_percent:.1f}%",
    ]
    recent = sorted(transactions, key=lambda tx: tx.date, reverse=True)
    recent = recent[:RECENT_TRANSACTIONS]
    if recent:
        lines += ["", "Recent Transactions:"]
        for tx in recent:
            lines.append(
                f"- {tx.date:%m/%d/%y}: {tx.transaction_type.display_name} "
                f"{tx.shares:.2f} @ ${tx.price_per_share:.2f}"
            )
    lines += [
        "",
        "Please provide:",
        "1. Position assessment",
        "2. Whether to hold, add more, or reduce position",
        "3. Key factors to watch",
        "4. Risk level for this holding",
    ]
    return "\n".join(lines)


def build_plan_suggestion_prompt(holding: Holding, amount: Decimal) -> str:
    """Ask for a dollar-cost averaging strategy for ``amount`` dollars."""
    asset = holding.asset
    price = holding.current_price or Decimal("0")
    return "\n".join(
        [
            f"I'm planning to invest ${amount:.2f} in {asset.name} ({asset.symbol}).",
            "",
            f"Current price: ${price:.2f}",
            f"Asset type: {asset.asset_type.display_name}",
            "",
            "Please suggest an optimal dollar-cost averaging (DCA) strategy including:",
            "1. Recommended number of purchases",
            "2. Suggested frequency (weekly, bi-weekly, monthly)",
            "3. Amount per purchase",
            "4. Any market timing considerations",
            "5. Risk factors to consider",
            "",
            "Keep the response concise and actionable.",
        ]
    )


__all__ = [
    "FINANCIAL_ANALYST_PROMPT",
    "INVESTMENT_ADVISOR_PROMPT",
    "build_portfolio_prompt",
    "build_asset_prompt",
    "build_plan_suggestion_prompt",
]
