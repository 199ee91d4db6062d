"""Tests for the aggregation engine."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from fincontrol.domain.aggregation import (
    calculate_dre,
    effective_date,
    get_cash_flow_series,
    get_cash_flow_summary,
    get_category_expenses,
    get_dashboard_stats,
    get_dre_comparison,
    is_overdue,
    month_range,
    percentage_change,
    previous_month,
)
from fincontrol.domain.entities import (
    AccountPayable,
    AccountReceivable,
    CashFlowPeriod,
    Category,
    CategoryType,
    DRECategory,
    PayableStatus,
    ReceivableStatus,
)
from fincontrol.domain.errors import ValidationError

TODAY = date(2024, 6, 10)

CATEGORIES = [
    Category(1, "Vendas", CategoryType.INCOME, DRECategory.REVENUE),
    Category(2, "Impostos", CategoryType.INCOME, DRECategory.DEDUCTIONS),
    Category(3, "CMV", CategoryType.EXPENSE, DRECategory.COSTS),
    Category(4, "Aluguel", CategoryType.EXPENSE, DRECategory.OPERATIONAL_EXPENSES),
    Category(5, "Diversos", CategoryType.EXPENSE, None),
]


def payable(id, amount, due, status=PayableStatus.PENDING, paid_on=None, category_id=None):
    return AccountPayable(
        id=id,
        description=f"Payable {id}",
        amount=Decimal(amount),
        due_date=due,
        status=status,
        payment_date=paid_on,
        category_id=category_id,
    )


def receivable(id, amount, due, status=ReceivableStatus.PENDING, received_on=None, category_id=None):
    return AccountReceivable(
        id=id,
        description=f"Receivable {id}",
        amount=Decimal(amount),
        due_date=due,
        status=status,
        received_date=received_on,
        category_id=category_id,
    )


def days(n):
    return TODAY + timedelta(days=n)


class TestDashboardStats:
    def test_empty_input_is_all_zero(self):
        stats = get_dashboard_stats([], [], TODAY)
        assert stats.total_revenue == 0
        assert stats.total_expenses == 0
        assert stats.balance == 0
        assert stats.projected_balance == 0
        assert stats.overdue_payables == 0
        assert stats.overdue_receivables == 0
        assert stats.due_today_count == 0
        assert stats.due_this_week_count == 0

    def test_overdue_pending_payable(self):
        """A pending payable due two days ago is overdue and lowers the projection."""
        stats = get_dashboard_stats([payable(1, "100", date(2024, 6, 8))], [], TODAY)
        assert stats.overdue_payables == 1
        assert stats.balance == 0
        assert stats.projected_balance == Decimal("-100")

    def test_receivable_due_today(self):
        stats = get_dashboard_stats([], [receivable(1, "500", TODAY)], TODAY)
        assert stats.due_today_count == 1
        assert stats.due_this_week_count == 1
        assert stats.overdue_receivables == 0
        assert stats.projected_balance == Decimal("500")

    def test_balance_is_revenue_minus_expenses(self):
        payables = [
            payable(1, "0.10", days(-5), PayableStatus.PAID, days(-5)),
            payable(2, "0.20", days(-4), PayableStatus.PAID, days(-4)),
            payable(3, "99.99", days(3)),
        ]
        receivables = [
            receivable(1, "0.30", days(-1), ReceivableStatus.RECEIVED, days(-1)),
            receivable(2, "1000", days(20)),
        ]
        stats = get_dashboard_stats(payables, receivables, TODAY)
        assert stats.total_revenue == Decimal("0.30")
        assert stats.total_expenses == Decimal("0.30")
        assert stats.balance == stats.total_revenue - stats.total_expenses == Decimal("0")
        assert stats.projected_balance == Decimal("1000") - Decimal("99.99")

    def test_settled_accounts_are_never_overdue_or_due(self):
        payables = [payable(1, "10", days(-3), PayableStatus.PAID, days(-3))]
        receivables = [receivable(1, "10", TODAY, ReceivableStatus.RECEIVED, TODAY)]
        stats = get_dashboard_stats(payables, receivables, TODAY)
        assert stats.overdue_payables == 0
        assert stats.due_today_count == 0
        assert stats.due_this_week_count == 0

    def test_due_this_week_window_is_inclusive(self):
        payables = [payable(1, "1", days(7)), payable(2, "1", days(8)), payable(3, "1", days(-1))]
        stats = get_dashboard_stats(payables, [], TODAY)
        assert stats.due_this_week_count == 1
        assert stats.overdue_payables == 1


class TestCashFlow:
    def test_series_length_and_order(self):
        for period, window in [("daily", 7), ("weekly", 28), ("monthly", 90)]:
            series = get_cash_flow_series([], [], period, TODAY)
            assert len(series) == 2 * window + 1
            assert series[0].date == days(-window)
            assert series[-1].date == days(window)
            assert [d.date for d in series] == sorted(d.date for d in series)

    def test_settled_on_day_minus_three(self):
        receivables = [receivable(1, "200", days(-5), ReceivableStatus.RECEIVED, days(-3))]
        payables = [payable(1, "50", days(-4), PayableStatus.PAID, days(-3))]
        series = get_cash_flow_series(payables, receivables, CashFlowPeriod.DAILY, TODAY)

        by_date = {d.date: d for d in series}
        assert by_date[days(-4)].balance == 0
        assert by_date[days(-3)].income == Decimal("200")
        assert by_date[days(-3)].expense == Decimal("50")
        for offset in range(-3, 8):
            assert by_date[days(offset)].balance == Decimal("150")

    def test_pending_accounts_use_due_date(self):
        series = get_cash_flow_series([payable(1, "80", days(2))], [], "daily", TODAY)
        entry = next(d for d in series if d.date == days(2))
        assert entry.expense == Decimal("80")
        assert entry.projected is True

    def test_projected_flag(self):
        series = get_cash_flow_series([], [], "daily", TODAY)
        assert [d.projected for d in series] == [d.date > TODAY for d in series]

    def test_last_balance_is_sum_of_flows(self):
        payables = [payable(i, str(10 * i), days(i - 5)) for i in range(1, 8)]
        receivables = [receivable(i, str(15 * i), days(3 - i)) for i in range(1, 6)]
        series = get_cash_flow_series(payables, receivables, "daily", TODAY)
        assert series[-1].balance == sum((d.income - d.expense for d in series), Decimal("0"))

    def test_records_outside_window_are_excluded(self):
        series = get_cash_flow_series([payable(1, "999", days(8))], [], "daily", TODAY)
        assert all(d.expense == 0 for d in series)

    def test_unknown_period_is_rejected(self):
        with pytest.raises(ValueError):
            get_cash_flow_series([], [], "yearly", TODAY)

    def test_summary_totals(self):
        receivables = [
            receivable(1, "200", days(-3), ReceivableStatus.RECEIVED, days(-3)),
            receivable(2, "300", days(4)),
        ]
        payables = [payable(1, "50", days(-3), PayableStatus.PAID, days(-3))]
        summary = get_cash_flow_summary(payables, receivables, "daily", TODAY)
        assert summary.total_income == Decimal("500")
        assert summary.total_expense == Decimal("50")
        assert summary.net_flow == Decimal("450")
        assert summary.current_balance == Decimal("150")
        assert summary.projected_balance == Decimal("450")


class TestCategoryExpenses:
    def test_percentages_sum_to_hundred(self):
        payables = [
            payable(1, "300", days(1), category_id=3),
            payable(2, "200", days(2), PayableStatus.PAID, days(2), category_id=4),
            payable(3, "500", days(3), category_id=5),
            payable(4, "1000", days(3)),
        ]
        rows = get_category_expenses(payables, CATEGORIES)
        assert [r.category_name for r in rows] == ["CMV", "Aluguel", "Diversos"]
        assert [r.amount for r in rows] == [Decimal("300"), Decimal("200"), Decimal("500")]
        assert rows[0].percentage == Decimal("30")
        assert abs(sum(r.percentage for r in rows) - 100) < Decimal("0.0001")

    def test_empty_without_categorized_payables(self):
        assert get_category_expenses([payable(1, "10", TODAY)], CATEGORIES) == []
        assert get_category_expenses([], CATEGORIES) == []

    def test_zero_amount_categories_are_dropped(self):
        rows = get_category_expenses([payable(1, "0", TODAY, category_id=3)], CATEGORIES)
        assert rows == []

    def test_income_categories_are_skipped(self):
        rows = get_category_expenses(
            [payable(1, "50", TODAY, category_id=1), payable(2, "50", TODAY, category_id=4)],
            CATEGORIES,
        )
        assert [r.category_name for r in rows] == ["Aluguel"]
        assert rows[0].percentage == Decimal("50")


class TestDRE:
    def _june_accounts(self):
        receivables = [
            receivable(1, "1000", date(2024, 6, 5), ReceivableStatus.RECEIVED, date(2024, 6, 6), 1),
            receivable(2, "100", date(2024, 6, 20), category_id=2),
        ]
        payables = [
            payable(1, "300", date(2024, 6, 15), category_id=3),
            payable(2, "200", date(2024, 5, 28), PayableStatus.PAID, date(2024, 6, 1), 4),
        ]
        return receivables, payables

    def test_income_statement_lines(self):
        receivables, payables = self._june_accounts()
        dre = calculate_dre(receivables, payables, CATEGORIES, 2024, 6)
        assert dre.gross_revenue == Decimal("1000")
        assert dre.deductions == Decimal("100")
        assert dre.costs == Decimal("300")
        assert dre.operational_expenses == Decimal("200")
        assert dre.net_revenue == Decimal("900")
        assert dre.gross_profit == Decimal("600")
        assert dre.operational_profit == Decimal("400")
        assert dre.net_profit == Decimal("400")
        assert dre.contribution_margin == Decimal("600")
        assert dre.net_profit == dre.gross_revenue - dre.deductions - dre.costs - dre.operational_expenses

    def test_settlement_date_decides_the_month(self):
        receivables, payables = self._june_accounts()
        may = calculate_dre(receivables, payables, CATEGORIES, 2024, 5)
        assert may.operational_expenses == 0

    def test_uncategorized_and_unmapped_accounts_are_ignored(self):
        receivables = [receivable(1, "700", date(2024, 6, 3)), receivable(2, "50", date(2024, 6, 3), category_id=99)]
        payables = [payable(1, "40", date(2024, 6, 3), category_id=5)]
        dre = calculate_dre(receivables, payables, CATEGORIES, 2024, 6)
        assert dre.gross_revenue == 0
        assert dre.net_profit == 0

    def test_accounts_only_feed_their_own_side(self):
        receivables = [receivable(1, "70", date(2024, 6, 3), category_id=3)]
        payables = [payable(1, "40", date(2024, 6, 3), category_id=1)]
        dre = calculate_dre(receivables, payables, CATEGORIES, 2024, 6)
        assert dre.gross_revenue == 0
        assert dre.costs == 0

    def test_comparison_with_zero_previous_revenue(self):
        receivables, payables = self._june_accounts()
        comparison = get_dre_comparison(receivables, payables, CATEGORIES, 2024, 6)
        assert comparison.previous.gross_revenue == 0
        assert comparison.percentage_change.gross_revenue == 0
        assert comparison.percentage_change.net_profit == 0

    def test_comparison_percentages(self):
        receivables = [
            receivable(1, "1000", date(2024, 5, 10), category_id=1),
            receivable(2, "1500", date(2024, 6, 10), category_id=1),
        ]
        comparison = get_dre_comparison(receivables, [], CATEGORIES, 2024, 6)
        assert comparison.percentage_change.gross_revenue == Decimal("50")
        assert comparison.percentage_change.net_profit == Decimal("50")

    def test_net_profit_change_uses_previous_magnitude(self):
        """A loss of 200 turning into a profit of 100 is a +150% change."""
        receivables = [receivable(1, "100", date(2024, 6, 10), category_id=1)]
        payables = [payable(1, "200", date(2024, 5, 10), category_id=4)]
        comparison = get_dre_comparison(receivables, payables, CATEGORIES, 2024, 6)
        assert comparison.previous.net_profit == Decimal("-200")
        assert comparison.percentage_change.net_profit == Decimal("150")

    def test_january_compares_with_previous_december(self):
        receivables = [receivable(1, "400", date(2023, 12, 31), category_id=1)]
        comparison = get_dre_comparison(receivables, [], CATEGORIES, 2024, 1)
        assert comparison.previous.gross_revenue == Decimal("400")
        assert comparison.current.gross_revenue == 0
        assert comparison.percentage_change.gross_revenue == Decimal("-100")

    def test_invalid_month(self):
        with pytest.raises(ValidationError):
            get_dre_comparison([], [], CATEGORIES, 2024, 13)
        with pytest.raises(ValidationError):
            calculate_dre([], [], CATEGORIES, 2024, 0)

    def test_functions_are_repeatable(self):
        receivables, payables = self._june_accounts()
        first = get_dre_comparison(receivables, payables, CATEGORIES, 2024, 6)
        second = get_dre_comparison(receivables, payables, CATEGORIES, 2024, 6)
        assert first == second
        assert get_cash_flow_series(payables, receivables, "weekly", TODAY) == get_cash_flow_series(
            payables, receivables, "weekly", TODAY
        )


class TestHelpers:
    def test_month_range(self):
        assert month_range(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
        assert month_range(2023, 12) == (date(2023, 12, 1), date(2023, 12, 31))

    def test_previous_month(self):
        assert previous_month(2024, 1) == (2023, 12)
        assert previous_month(2024, 6) == (2024, 5)

    def test_effective_date(self):
        assert effective_date(payable(1, "1", days(-2), PayableStatus.PAID, days(-1))) == days(-1)
        assert effective_date(payable(1, "1", days(-2))) == days(-2)
        # Settled without a recorded date falls back to the due date
        assert effective_date(payable(1, "1", days(-2), PayableStatus.PAID)) == days(-2)

    def test_is_overdue(self):
        assert is_overdue(payable(1, "1", days(-1)), TODAY)
        assert not is_overdue(payable(1, "1", TODAY), TODAY)
        assert not is_overdue(payable(1, "1", days(-1), PayableStatus.PAID, days(-1)), TODAY)

    def test_percentage_change(self):
        assert percentage_change(Decimal("150"), Decimal("100")) == Decimal("50")
        assert percentage_change(Decimal("150"), Decimal("0")) == 0
        assert percentage_change(Decimal("150"), Decimal("-100")) == 0
        assert percentage_change(Decimal("-50"), Decimal("-100"), signed=True) == Decimal("50")
