"""Domain model entities for fincontrol.

These are pure data classes representing business concepts, independent of
database schema. Status, type and period values are closed enums; parsing an
unknown value raises ValueError instead of passing free-form text through.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


class _ParseableEnum(str, Enum):
    """String enum with strict parsing of external values."""

    @classmethod
    def parse(cls, value: str) -> "_ParseableEnum":
        """Parse a string into an enum member.

        Raises:
            ValueError: If value is not one of the recognized members
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        allowed = ", ".join(m.value for m in cls)
        raise ValueError(f"Invalid {cls.label()} '{value}'. Expected one of: {allowed}")

    @classmethod
    def label(cls) -> str:
        return cls.__name__

    def __str__(self) -> str:
        return self.value


class PayableStatus(_ParseableEnum):
    """Stored status of an account payable."""

    PENDING = "pending"
    PAID = "paid"

    @classmethod
    def label(cls) -> str:
        return "payable status"


class ReceivableStatus(_ParseableEnum):
    """Stored status of an account receivable."""

    PENDING = "pending"
    RECEIVED = "received"

    @classmethod
    def label(cls) -> str:
        return "receivable status"


class CategoryType(_ParseableEnum):
    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def label(cls) -> str:
        return "category type"


class DRECategory(_ParseableEnum):
    """Income statement line a category rolls up into."""

    REVENUE = "revenue"
    DEDUCTIONS = "deductions"
    COSTS = "costs"
    OPERATIONAL_EXPENSES = "operational_expenses"

    @classmethod
    def label(cls) -> str:
        return "DRE category"


class Recurrence(_ParseableEnum):
    NONE = "none"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @classmethod
    def label(cls) -> str:
        return "recurrence"


class CashFlowPeriod(_ParseableEnum):
    """Cash-flow view selector; each maps to a half-window in days."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @classmethod
    def label(cls) -> str:
        return "cash-flow period"

    @property
    def window_days(self) -> int:
        return _PERIOD_WINDOWS[self]


_PERIOD_WINDOWS = {
    CashFlowPeriod.DAILY: 7,
    CashFlowPeriod.WEEKLY: 28,
    CashFlowPeriod.MONTHLY: 90,
}


@dataclass(frozen=True)
class Client:
    """Client (customer) domain entity."""

    id: int
    name: str
    document: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


@dataclass(frozen=True)
class Supplier:
    """Supplier domain entity."""

    id: int
    name: str
    document: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


@dataclass(frozen=True)
class CostCenter:
    """Cost center domain entity."""

    id: int
    name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class Category:
    """Category domain entity.

    dre_category is the only field the income statement looks at; categories
    without it never reach any DRE line.
    """

    id: int
    name: str
    category_type: CategoryType
    dre_category: Optional[DRECategory] = None


@dataclass(frozen=True)
class AccountPayable:
    """Account payable domain entity."""

    id: int
    description: str
    amount: Decimal
    due_date: date
    status: PayableStatus = PayableStatus.PENDING
    payment_date: Optional[date] = None
    supplier_id: Optional[int] = None
    category_id: Optional[int] = None
    cost_center_id: Optional[int] = None
    notes: Optional[str] = None
    recurrence: Optional[Recurrence] = None
    attachment_url: Optional[str] = None

    @property
    def is_settled(self) -> bool:
        return self.status == PayableStatus.PAID

    @property
    def settlement_date(self) -> Optional[date]:
        return self.payment_date


@dataclass(frozen=True)
class AccountReceivable:
    """Account receivable domain entity."""

    id: int
    description: str
    amount: Decimal
    due_date: date
    status: ReceivableStatus = ReceivableStatus.PENDING
    received_date: Optional[date] = None
    client_id: Optional[int] = None
    category_id: Optional[int] = None
    notes: Optional[str] = None

    @property
    def is_settled(self) -> bool:
        return self.status == ReceivableStatus.RECEIVED

    @property
    def settlement_date(self) -> Optional[date]:
        return self.received_date


@dataclass(frozen=True)
class DashboardStats:
    """Dashboard KPIs derived from payables and receivables."""

    total_revenue: Decimal
    total_expenses: Decimal
    balance: Decimal
    projected_balance: Decimal
    overdue_payables: int
    overdue_receivables: int
    due_today_count: int
    due_this_week_count: int


@dataclass(frozen=True)
class CashFlowData:
    """One day of the cash-flow series."""

    date: date
    income: Decimal
    expense: Decimal
    balance: Decimal
    projected: bool

    @property
    def date_str(self) -> str:
        return self.date.isoformat()


@dataclass(frozen=True)
class CashFlowSummary:
    total_income: Decimal
    total_expense: Decimal
    net_flow: Decimal
    projected_balance: Decimal
    current_balance: Decimal


@dataclass(frozen=True)
class CategoryExpense:
    category_id: int
    category_name: str
    amount: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class DREData:
    """Income statement (DRE) for one month."""

    gross_revenue: Decimal
    deductions: Decimal
    net_revenue: Decimal
    costs: Decimal
    gross_profit: Decimal
    operational_expenses: Decimal
    operational_profit: Decimal
    net_profit: Decimal
    contribution_margin: Decimal


@dataclass(frozen=True)
class DREPercentageChange:
    gross_revenue: Decimal
    net_profit: Decimal


@dataclass(frozen=True)
class DREComparison:
    """DRE for a month next to the month before it."""

    year: int
    month: int
    current: DREData
    previous: DREData
    percentage_change: DREPercentageChange
