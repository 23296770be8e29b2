"""Domain models for assets, transactions and investment plans."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from uuid import uuid4

from asset_monitor.utils.time_utils import utc_now


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return str(uuid4())


class AssetType(str, Enum):
    """Kinds of holdings tracked by the portfolio."""

    STOCK = "stock"
    ETF = "etf"
    TREASURY = "treasury"
    CD = "cd"
    CASH = "cash"

    @property
    def display_name(self) -> str:
        return _ASSET_TYPE_LABELS[self]

    @property
    def is_quoted(self) -> bool:
        """Return True when the type has a market quote."""
        return self in (AssetType.STOCK, AssetType.ETF, AssetType.TREASURY)

    @classmethod
    def tradable_types(cls) -> tuple["AssetType", ...]:
        return (cls.STOCK, cls.ETF, cls.TREASURY, cls.CD)


_ASSET_TYPE_LABELS = {
    AssetType.STOCK: "Stock",
    AssetType.ETF: "ETF",
    AssetType.TREASURY: "Treasury",
    AssetType.CD: "CD",
    AssetType.CASH: "Cash",
}


class TransactionType(str, Enum):
    """Kinds of ledger rows."""

    BUY = "buy"
    SELL = "sell"
    DIVIDEND = "dividend"
    INTEREST = "interest"
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def trading_types(cls) -> tuple["TransactionType", ...]:
        return (cls.BUY, cls.SELL, cls.DIVIDEND, cls.INTEREST)

    @classmethod
    def cash_types(cls) -> tuple["TransactionType", ...]:
        return (cls.DEPOSIT, cls.WITHDRAWAL)


class PlanFrequency(str, Enum):
    """Cadence of a dollar-cost averaging plan."""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"

    @property
    def display_name(self) -> str:
        return _FREQUENCY_LABELS[self]

    @property
    def days_between(self) -> int:
        """Return the fixed day count (0 for custom cadences)."""
        return _FREQUENCY_DAYS[self]


_FREQUENCY_LABELS = {
    PlanFrequency.WEEKLY: "Weekly",
    PlanFrequency.BIWEEKLY: "Bi-weekly",
    PlanFrequency.MONTHLY: "Monthly",
    PlanFrequency.CUSTOM: "Custom",
}

_FREQUENCY_DAYS = {
    PlanFrequency.WEEKLY: 7,
    PlanFrequency.BIWEEKLY: 14,
    PlanFrequency.MONTHLY: 30,
    PlanFrequency.CUSTOM: 0,
}


class PlanStatus(str, Enum):
    """Lifecycle state of an investment plan."""

    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def is_terminal(self) -> bool:
        return self in (PlanStatus.COMPLETED, PlanStatus.CANCELLED)


@dataclass(frozen=True)
class Asset:
    """A tracked holding.

    Attributes:
        id: Opaque identifier.
        symbol: Ticker symbol, upper-cased.
        asset_type: Kind of holding.
        name: Display name.
        cd_maturity_date: Maturity date (certificates of deposit only).
        cd_interest_rate: Annual rate in percent (certificates of deposit only).
        created_at: Creation timestamp.
    """

    symbol: str
    asset_type: AssetType
    name: str
    cd_maturity_date: date | None = None
    cd_interest_rate: Decimal | None = None
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        object.__setattr__(self, "symbol", self.symbol.strip().upper())

    @property
    def is_cash(self) -> bool:
        return self.asset_type == AssetType.CASH


@dataclass(frozen=True)
class Transaction:
    """A stored ledger row.

    For cash assets ``shares`` holds a dollar amount and ``price_per_share``
    is 1, so ``total_amount`` is the cash moved.
    """

    asset_id: str
    transaction_type: TransactionType
    date: date
    shares: Decimal
    price_per_share: Decimal
    notes: str | None = None
    linked_plan_id: str | None = None
    linked_transaction_id: str | None = None
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)

    @property
    def total_amount(self) -> Decimal:
        return self.shares * self.price_per_share


@dataclass(frozen=True)
class InvestmentPlan:
    """A dollar-cost averaging schedule for one asset."""

    asset_id: str
    total_amount: Decimal
    number_of_purchases: int
    amount_per_purchase: Decimal
    frequency: PlanFrequency
    start_date: date
    custom_days_between: int | None = None
    completed_purchases: int = 0
    status: PlanStatus = PlanStatus.ACTIVE
    notes: str | None = None
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)

    @property
    def days_between(self) -> int:
        if self.frequency == PlanFrequency.CUSTOM:
            return self.custom_days_between or 0
        return self.frequency.days_between


@dataclass(frozen=True)
class PlanScheduleItem:
    """One scheduled purchase of a plan."""

    purchase_number: int
    scheduled_date: date
    amount: Decimal
    is_completed: bool
    is_overdue: bool


@dataclass(frozen=True)
class PriceQuote:
    """Latest market quote for a symbol."""

    symbol: str
    price: Decimal
    previous_close: Decimal | None = None
    name: str | None = None
    change_percent: Decimal | None = None
    day_high: Decimal | None = None
    day_low: Decimal | None = None
    currency: str = "USD"
    exchange: str = ""
    updated_at: datetime = field(default_factory=utc_now)

    @property
    def change(self) -> Decimal:
        if self.previous_close is None:
            return Decimal("0")
        return self.price - self.previous_close


@dataclass(frozen=True)
class HistoricalPrice:
    """Daily bar from the quote history endpoint."""

    date: date
    close: Decimal
    open: Decimal | None = None
    high: Decimal | None = None
    low: Decimal | None = None
    volume: int | None = None


@dataclass(frozen=True)
class NewsItem:
    """Headline returned by the news feed."""

    symbol: str
    title: str
    publisher: str
    link: str
    published_at: datetime
    id: str = field(default_factory=new_id)


@dataclass(frozen=True)
class WatchlistItem:
    """A symbol followed on the Monitor page without being held."""

    symbol: str
    name: str
    id: str = field(default_factory=new_id)
    added_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        object.__setattr__(self, "symbol", self.symbol.strip().upper())


__all__ = [
    "new_id",
    "AssetType",
    "TransactionType",
    "PlanFrequency",
    "PlanStatus",
    "Asset",
    "Transaction",
    "InvestmentPlan",
    "PlanScheduleItem",
    "PriceQuote",
    "HistoricalPrice",
    "NewsItem",
    "WatchlistItem",
]
