"""Financial aggregation engine.

Pure functions deriving dashboard statistics, the cash-flow series, the
category expense breakdown and the month-over-month income statement (DRE)
from payable and receivable snapshots. Nothing here reads the clock or
touches storage; callers pass ``today`` explicitly.

All money is Decimal. Dates are ``datetime.date`` values; the ISO string form
only appears at the edges (parsing and display).
"""

import calendar
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence, Union

from fincontrol.domain.entities import (
    AccountPayable,
    AccountReceivable,
    CashFlowData,
    CashFlowPeriod,
    CashFlowSummary,
    Category,
    CategoryExpense,
    CategoryType,
    DashboardStats,
    DRECategory,
    DREComparison,
    DREData,
    DREPercentageChange,
    PayableStatus,
    ReceivableStatus,
)
from fincontrol.domain.errors import ValidationError, invalid_month

ZERO = Decimal("0")
HUNDRED = Decimal("100")
DUE_SOON_DAYS = 7

Account = Union[AccountPayable, AccountReceivable]


def _sum(amounts: Iterable[Decimal]) -> Decimal:
    return sum(amounts, ZERO)


def effective_date(account: Account) -> date:
    """Date an account lands on in the cash-flow series.

    The settlement date when the account is settled, otherwise the due date.
    """
    if account.is_settled and account.settlement_date is not None:
        return account.settlement_date
    return account.due_date


def dre_date(account: Account) -> date:
    """Date used for DRE bucketing: settlement date if recorded, else due date."""
    return account.settlement_date or account.due_date


def is_overdue(account: Account, today: date) -> bool:
    """Derived display state; never stored."""
    return not account.is_settled and account.due_date < today


def month_range(year: int, month: int) -> tuple[date, date]:
    """Return the first and last day of a calendar month."""
    if not 1 <= month <= 12:
        raise ValidationError(invalid_month(month))
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def previous_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) of the month before, rolling back at January."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def get_dashboard_stats(
    payables: Sequence[AccountPayable],
    receivables: Sequence[AccountReceivable],
    today: date,
) -> DashboardStats:
    """Compute dashboard KPIs as of ``today``."""
    total_expenses = _sum(p.amount for p in payables if p.status == PayableStatus.PAID)
    total_revenue = _sum(r.amount for r in receivables if r.status == ReceivableStatus.RECEIVED)
    pending_payables = _sum(p.amount for p in payables if p.status == PayableStatus.PENDING)
    pending_receivables = _sum(
        r.amount for r in receivables if r.status == ReceivableStatus.PENDING
    )

    overdue_payables = sum(1 for p in payables if is_overdue(p, today))
    overdue_receivables = sum(1 for r in receivables if is_overdue(r, today))

    week_end = today + timedelta(days=DUE_SOON_DAYS)
    open_due_dates = [a.due_date for a in (*payables, *receivables) if not a.is_settled]
    due_today_count = sum(1 for d in open_due_dates if d == today)
    due_this_week_count = sum(1 for d in open_due_dates if today <= d <= week_end)

    balance = total_revenue - total_expenses
    return DashboardStats(
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        balance=balance,
        projected_balance=balance + pending_receivables - pending_payables,
        overdue_payables=overdue_payables,
        overdue_receivables=overdue_receivables,
        due_today_count=due_today_count,
        due_this_week_count=due_this_week_count,
    )


def _amounts_by_date(accounts: Iterable[Account], start: date, end: date) -> dict[date, Decimal]:
    totals: dict[date, Decimal] = {}
    for account in accounts:
        day = effective_date(account)
        if start <= day <= end:
            totals[day] = totals.get(day, ZERO) + account.amount
    return totals


def get_cash_flow_series(
    payables: Sequence[AccountPayable],
    receivables: Sequence[AccountReceivable],
    period: Union[CashFlowPeriod, str],
    today: date,
) -> list[CashFlowData]:
    """Build the day-by-day cash-flow series around ``today``.

    The window spans ``period.window_days`` on each side of today, inclusive,
    so it always has ``2 * window + 1`` entries in ascending date order.
    ``balance`` is the running total of income minus expense from the first
    day of the window.
    """
    period = CashFlowPeriod.parse(period)
    window = period.window_days
    start = today - timedelta(days=window)
    end = today + timedelta(days=window)

    income_by_date = _amounts_by_date(receivables, start, end)
    expense_by_date = _amounts_by_date(payables, start, end)

    series: list[CashFlowData] = []
    running_balance = ZERO
    for offset in range(2 * window + 1):
        day = start + timedelta(days=offset)
        income = income_by_date.get(day, ZERO)
        expense = expense_by_date.get(day, ZERO)
        running_balance += income - expense
        series.append(
            CashFlowData(
                date=day,
                income=income,
                expense=expense,
                balance=running_balance,
                projected=day > today,
            )
        )
    return series


def get_cash_flow_summary(
    payables: Sequence[AccountPayable],
    receivables: Sequence[AccountReceivable],
    period: Union[CashFlowPeriod, str],
    today: date,
) -> CashFlowSummary:
    """Totals of the cash-flow series plus the dashboard balances for the same day."""
    series = get_cash_flow_series(payables, receivables, period, today)
    stats = get_dashboard_stats(payables, receivables, today)

    total_income = _sum(d.income for d in series)
    total_expense = _sum(d.expense for d in series)
    return CashFlowSummary(
        total_income=total_income,
        total_expense=total_expense,
        net_flow=total_income - total_expense,
        projected_balance=stats.projected_balance,
        current_balance=stats.balance,
    )


def get_category_expenses(
    payables: Sequence[AccountPayable],
    categories: Sequence[Category],
) -> list[CategoryExpense]:
    """Break down payable amounts by expense category.

    Pending and paid payables both count. The percentage denominator is the
    total over every categorized payable, whatever the category type.
    Categories with nothing booked are left out; order follows ``categories``.
    """
    categorized = [p for p in payables if p.category_id is not None]
    total = _sum(p.amount for p in categorized)

    totals_by_category: dict[int, Decimal] = {}
    for payable in categorized:
        totals_by_category[payable.category_id] = (
            totals_by_category.get(payable.category_id, ZERO) + payable.amount
        )

    result = []
    for category in categories:
        if category.category_type != CategoryType.EXPENSE:
            continue
        amount = totals_by_category.get(category.id, ZERO)
        if amount <= 0:
            continue
        percentage = amount / total * HUNDRED if total > 0 else ZERO
        result.append(
            CategoryExpense(
                category_id=category.id,
                category_name=category.name,
                amount=amount,
                percentage=percentage,
            )
        )
    return result


def _dre_lookup(categories: Iterable[Category]) -> dict[int, Optional[DRECategory]]:
    return {c.id: c.dre_category for c in categories}


def calculate_dre(
    receivables: Sequence[AccountReceivable],
    payables: Sequence[AccountPayable],
    categories: Sequence[Category],
    year: int,
    month: int,
) -> DREData:
    """Compute the income statement for one calendar month.

    Accounts whose category is missing or carries no DRE line are ignored.
    """
    start, end = month_range(year, month)
    dre_lines = _dre_lookup(categories)

    totals = {line: ZERO for line in DRECategory}
    for account in (*receivables, *payables):
        if not start <= dre_date(account) <= end:
            continue
        line = dre_lines.get(account.category_id)
        if line is None:
            continue
        # Receivables only feed revenue lines and payables only feed expense lines.
        if isinstance(account, AccountReceivable) and line in (
            DRECategory.REVENUE,
            DRECategory.DEDUCTIONS,
        ):
            totals[line] += account.amount
        elif isinstance(account, AccountPayable) and line in (
            DRECategory.COSTS,
            DRECategory.OPERATIONAL_EXPENSES,
        ):
            totals[line] += account.amount

    gross_revenue = totals[DRECategory.REVENUE]
    deductions = totals[DRECategory.DEDUCTIONS]
    costs = totals[DRECategory.COSTS]
    operational_expenses = totals[DRECategory.OPERATIONAL_EXPENSES]

    net_revenue = gross_revenue - deductions
    gross_profit = net_revenue - costs
    operational_profit = gross_profit - operational_expenses
    return DREData(
        gross_revenue=gross_revenue,
        deductions=deductions,
        net_revenue=net_revenue,
        costs=costs,
        gross_profit=gross_profit,
        operational_expenses=operational_expenses,
        operational_profit=operational_profit,
        net_profit=operational_profit,
        # Same as gross_profit until categories distinguish variable and fixed costs.
        contribution_margin=net_revenue - costs,
    )


def percentage_change(current: Decimal, previous: Decimal, signed: bool = False) -> Decimal:
    """Relative change from ``previous`` to ``current`` in percent.

    Unsigned metrics only compare against a positive previous value. Signed
    metrics (profit) compare against any non-zero previous value and divide
    by its magnitude so the sign of the change stays meaningful.
    """
    if signed:
        if previous != 0:
            return (current - previous) / abs(previous) * HUNDRED
        return ZERO
    if previous > 0:
        return (current - previous) / previous * HUNDRED
    return ZERO


def get_dre_comparison(
    receivables: Sequence[AccountReceivable],
    payables: Sequence[AccountPayable],
    categories: Sequence[Category],
    year: int,
    month: int,
) -> DREComparison:
    """DRE for (year, month) next to the previous calendar month."""
    current = calculate_dre(receivables, payables, categories, year, month)
    prev_year, prev_month = previous_month(year, month)
    previous = calculate_dre(receivables, payables, categories, prev_year, prev_month)

    return DREComparison(
        year=year,
        month=month,
        current=current,
        previous=previous,
        percentage_change=DREPercentageChange(
            gross_revenue=percentage_change(current.gross_revenue, previous.gross_revenue),
            net_profit=percentage_change(current.net_profit, previous.net_profit, signed=True),
        ),
    )
