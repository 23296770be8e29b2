"""Domain models for derived portfolio figures."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from asset_monitor.utils.decimal_utils import percent_of
from asset_monitor.utils.time_utils import utc_now

from .portfolio import Asset, AssetType


@dataclass(frozen=True)
class TransactionSummary:
    """Result of folding an asset's ledger.

    Attributes:
        total_shares: Shares held, or the balance for the cash asset.
        average_cost: Blended cost per share (1 for cash).
        total_invested: Remaining cost basis.
        total_dividends: Dividend and interest income.
        realized_gains: Gains recognized on sales.
    """

    total_shares: Decimal
    average_cost: Decimal
    total_invested: Decimal
    total_dividends: Decimal
    realized_gains: Decimal


EMPTY_SUMMARY = TransactionSummary(
    total_shares=Decimal("0"),
    average_cost=Decimal("0"),
    total_invested=Decimal("0"),
    total_dividends=Decimal("0"),
    realized_gains=Decimal("0"),
)


@dataclass(frozen=True)
class Holding:
    """An asset together with its derived position figures."""

    asset: Asset
    summary: TransactionSummary
    current_price: Decimal | None = None
    previous_close: Decimal | None = None

    @property
    def total_shares(self) -> Decimal:
        return self.summary.total_shares

    @property
    def average_cost(self) -> Decimal:
        return self.summary.average_cost

    @property
    def total_value(self) -> Decimal:
        if self.asset.is_cash:
            return self.total_shares
        if self.current_price is None:
            return self.total_shares * self.average_cost
        return self.total_shares * self.current_price

    @property
    def total_cost(self) -> Decimal:
        return self.total_shares * self.average_cost

    @property
    def gain_loss(self) -> Decimal:
        return self.total_value - self.total_cost

    @property
    def gain_loss_percent(self) -> Decimal:
        return percent_of(self.gain_loss, self.total_cost)

    @property
    def daily_change(self) -> Decimal:
        if self.current_price is None or self.previous_close is None:
            return Decimal("0")
        return self.current_price - self.previous_close

    @property
    def daily_change_percent(self) -> Decimal:
        if self.current_price is None or self.previous_close is None:
            return Decimal("0")
        return percent_of(self.daily_change, self.previous_close)

    @property
    def display_price(self) -> Decimal:
        """Quote when known, otherwise the average cost."""
        if self.current_price is None:
            return self.average_cost
        return self.current_price

    def cd_current_value(self, today: date | None = None) -> Decimal | None:
        """Return the principal plus interest accrued to ``today``.

        Interest accrues linearly between creation and maturity and stops at
        maturity. Returns None for non-CD assets or missing terms.
        """
        asset = self.asset
        if (
            asset.asset_type != AssetType.CD
            or asset.cd_interest_rate is None
            or asset.cd_maturity_date is None
        ):
            return None
        principal = self.total_cost
        today = today or date.today()
        start = asset.created_at.astimezone().date()
        total_days = (asset.cd_maturity_date - start).days
        if total_days <= 0:
            return principal
        elapsed_days = (today - start).days
        progress = min(
            Decimal(elapsed_days) / Decimal(total_days),
            Decimal("1"),
        )
        earned = principal * (asset.cd_interest_rate / Decimal("100")) * progress
        return principal + earned


@dataclass(frozen=True)
class AllocationItem:
    """Share of the portfolio held in one asset or asset type."""

    name: str
    value: Decimal
    percentage: Decimal
    asset_type: AssetType


@dataclass(frozen=True)
class PortfolioTotals:
    """Aggregated portfolio figures."""

    total_value: Decimal
    total_cost: Decimal
    daily_change: Decimal
    value_by_type: dict[AssetType, Decimal]

    @property
    def gain_loss(self) -> Decimal:
        return self.total_value - self.total_cost

    @property
    def gain_loss_percent(self) -> Decimal:
        return percent_of(self.gain_loss, self.total_cost)

    @property
    def daily_change_percent(self) -> Decimal:
        previous_value = self.total_value - self.daily_change
        return percent_of(self.daily_change, previous_value)

    @property
    def cash_balance(self) -> Decimal:
        return self.value_by_type.get(AssetType.CASH, Decimal("0"))


class TimingRecommendation(str, Enum):
    """Purchase timing verdict."""

    GOOD = "good"
    NEUTRAL = "neutral"
    WAIT = "wait"

    @property
    def display_text(self) -> str:
        return _TIMING_LABELS[self]


_TIMING_LABELS = {
    TimingRecommendation.GOOD: "Good Time",
    TimingRecommendation.NEUTRAL: "Neutral",
    TimingRecommendation.WAIT: "Consider Waiting",
}


@dataclass(frozen=True)
class TimingAnalysis:
    """Whether the current price looks favourable for a scheduled buy."""

    recommendation: TimingRecommendation
    reason: str
    percent_from_average: Decimal | None = None
    trend: str | None = None


@dataclass(frozen=True)
class PortfolioAnalysis:
    """Text analysis returned by the chat-completion endpoint."""

    summary: str
    totals: PortfolioTotals
    number_of_holdings: int
    created_at: datetime = field(default_factory=utc_now)


@dataclass(frozen=True)
class PeriodChange:
    """Price move between the first and last bar of a chart range.

    Attributes:
        start_price: Close of the first bar.
        end_price: Close of the last bar.
        start_date: Date of the first bar.
        end_date: Date of the last bar.
    """

    start_price: Decimal
    end_price: Decimal
    start_date: date
    end_date: date

    @property
    def change(self) -> Decimal:
        return self.end_price - self.start_price

    @property
    def change_percent(self) -> Decimal:
        return percent_of(self.change, self.start_price)


__all__ = [
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
