"""Report domain service.

Reads fresh snapshots from the database on every call and hands them to the
aggregation engine. Nothing is cached between calls.
"""

import logging
from datetime import date
from typing import Optional, Union

from fincontrol.database.base import Database
from fincontrol.domain import aggregation
from fincontrol.domain.entities import (
    CashFlowData,
    CashFlowPeriod,
    CashFlowSummary,
    CategoryExpense,
    DashboardStats,
    DREComparison,
)
from fincontrol.domain.validation import coerce_enum
from fincontrol.utils.date_parser import today_in_timezone

logger = logging.getLogger(__name__)


class ReportService:
    """Service for dashboard, cash-flow and DRE reports."""

    def __init__(
        self,
        db: Database,
        today: Optional[date] = None,
        timezone: Optional[str] = None,
    ):
        """Initialize report service.

        Args:
            db: Database instance
            today: Fixed reference date. If None, the current date in ``timezone``
                is used on every call.
            timezone: Timezone name used to resolve today (defaults to UTC)
        """
        self.db = db
        self._today = today
        self.timezone = timezone

    def today(self) -> date:
        """Return the reference date for reports."""
        if self._today is not None:
            return self._today
        return today_in_timezone(self.timezone)

    def _snapshot(self):
        payables = self.db.list_payables()
        receivables = self.db.list_receivables()
        logger.debug(f"Loaded {len(payables)} payables and {len(receivables)} receivables")
        return payables, receivables

    def dashboard_stats(self, today: Optional[date] = None) -> DashboardStats:
        """Dashboard KPIs as of today."""
        payables, receivables = self._snapshot()
        return aggregation.get_dashboard_stats(payables, receivables, today or self.today())

    def cash_flow(
        self,
        period: Union[CashFlowPeriod, str] = CashFlowPeriod.DAILY,
        today: Optional[date] = None,
    ) -> list[CashFlowData]:
        """Day-by-day cash-flow series for the selected period."""
        period = coerce_enum(CashFlowPeriod, period)
        payables, receivables = self._snapshot()
        return aggregation.get_cash_flow_series(payables, receivables, period, today or self.today())

    def cash_flow_summary(
        self,
        period: Union[CashFlowPeriod, str] = CashFlowPeriod.DAILY,
        today: Optional[date] = None,
    ) -> CashFlowSummary:
        """Totals of the cash-flow series with current and projected balance."""
        period = coerce_enum(CashFlowPeriod, period)
        payables, receivables = self._snapshot()
        return aggregation.get_cash_flow_summary(
            payables, receivables, period, today or self.today()
        )

    def category_expenses(self) -> list[CategoryExpense]:
        """Share of each expense category in categorized payables."""
        payables = self.db.list_payables()
        categories = self.db.list_categories()
        return aggregation.get_category_expenses(payables, categories)

    def dre(self, year: Optional[int] = None, month: Optional[int] = None) -> DREComparison:
        """DRE for a month compared with the previous month.

        Year and month default to the current ones.
        """
        if year is None or month is None:
            today = self.today()
            year = year if year is not None else today.year
            month = month if month is not None else today.month

        payables, receivables = self._snapshot()
        categories = self.db.list_categories()
        return aggregation.get_dre_comparison(receivables, payables, categories, year, month)
