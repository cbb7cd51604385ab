"""Domain model entities for saloonlite.

These are pure data classes representing business concepts, independent of
database schema. The storage layer converts to and from them through the
mappers in ``saloonlite.database.mappers``.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Optional


class TransactionType(str, Enum):
    """Discriminant of the transaction union."""

    SALE = "sale"
    EXPENSE = "expense"


class PaymentMethod(str, Enum):
    """How an expense was paid."""

    CASH = "cash"
    MOBILE_MONEY = "mobile-money"
    BANK_TRANSFER = "bank-transfer"
    CREDIT_CARD = "credit-card"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str) -> "PaymentMethod":
        """Parse a payment method, accepting 'mobile money' style spellings."""
        normalized = value.strip().lower().replace(" ", "-").replace("_", "-")
        return cls(normalized)


@dataclass(frozen=True)
class Transaction:
    """Base transaction entity. Use Sale or Expense."""

    type: ClassVar[TransactionType]

    id: str
    amount: Decimal
    datetime: datetime
    date_key: str


@dataclass(frozen=True)
class Sale(Transaction):
    """A sale of a service to a customer."""

    type: ClassVar[TransactionType] = TransactionType.SALE

    customer: str = ""
    service: str = ""


@dataclass(frozen=True)
class Expense(Transaction):
    """Money spent by the business.

    The vendor is persisted in the same column a sale uses for its service.
    """

    type: ClassVar[TransactionType] = TransactionType.EXPENSE

    category: str = ""
    vendor: str = ""
    description: str = ""
    payment_method: PaymentMethod = PaymentMethod.CASH


@dataclass(frozen=True)
class DailySummary:
    """Aggregated totals for one calendar day."""

    date_key: str
    date: date
    total_sales: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    net_profit: Decimal = Decimal("0")
    transaction_count: int = 0

    @classmethod
    def empty(cls, date_key: str) -> "DailySummary":
        """Zeroed summary for a day without transactions."""
        return cls(date_key=date_key, date=date.fromisoformat(date_key))


@dataclass(frozen=True)
class Service:
    """Catalog entry for something the business sells."""

    id: str
    name: str
    price: Decimal
    is_active: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class PinSettings:
    """Singleton record holding the entry PIN and lockout bookkeeping."""

    pin: str
    is_enabled: bool
    created_at: datetime
    last_modified: datetime
    failed_attempts: int = 0
    last_attempt: Optional[datetime] = None
    lock_until: Optional[datetime] = None
    is_locked: bool = False


@dataclass(frozen=True)
class UserPreferences:
    """Business preferences shown across the app."""

    theme: str = "light"
    currency: str = "GHS"
    business_name: str = "My Saloon"
    business_type: str = "Barber Shop"
    default_categories: tuple[str, ...] = ("Haircut", "Beard Trim", "Hair Color", "Styling")
    notification_enabled: bool = True
    id: str = "default"


@dataclass(frozen=True)
class AppSettings:
    """Application level settings."""

    version: str = "1.0.0"
    first_launch: bool = True
    onboarding_completed: bool = False
    data_export_format: str = "json"
    id: str = "appSettings"


@dataclass(frozen=True)
class PeriodTotals:
    """Totals over a set of daily summaries."""

    total_revenue: Decimal
    total_expenses: Decimal
    total_profit: Decimal
    total_transactions: int


@dataclass(frozen=True)
class PerformanceTrend:
    """Week-over-week revenue comparison."""

    current_week_revenue: float = 0.0
    previous_week_revenue: float = 0.0
    growth_percentage: float = 0.0
    consistency_score: float = 0.0


@dataclass(frozen=True)
class ServiceDistribution:
    """Share of sale revenue earned by one service bucket."""

    service: str
    revenue: float
    percentage: float
    average_revenue: float
    transaction_count: int


@dataclass(frozen=True)
class DashboardMetrics:
    """Everything the dashboard shows for an analytics window."""

    weekly_growth: float = 0.0
    revenue_consistency: float = 0.0
    best_performing_day: Optional[str] = None
    average_service_value: float = 0.0
    service_distribution: tuple[ServiceDistribution, ...] = field(default_factory=tuple)
    peak_hours: tuple[str, ...] = field(default_factory=tuple)
    daily_transaction_average: float = 0.0
    expense_ratio: float = 0.0
    profit_margin: float = 0.0
    monthly_growth: Optional[float] = None
    performance_trend: PerformanceTrend = field(default_factory=PerformanceTrend)


@dataclass(frozen=True)
class PinVerification:
    """Outcome of a PIN entry attempt."""

    success: bool
    locked: bool
    remaining_attempts: int
    lock_until: Optional[datetime]
    message: str
