"""Tests for domain entities."""

import pytest
from dataclasses import FrozenInstanceError
from datetime import date
from decimal import Decimal

from fincontrol.domain.entities import (
    AccountPayable,
    AccountReceivable,
    CashFlowData,
    CashFlowPeriod,
    Category,
    CategoryType,
    DRECategory,
    PayableStatus,
    ReceivableStatus,
)


class TestEnums:
    def test_parse_known_values(self):
        assert PayableStatus.parse("paid") is PayableStatus.PAID
        assert ReceivableStatus.parse(" Received ") is ReceivableStatus.RECEIVED
        assert DRECategory.parse("operational_expenses") is DRECategory.OPERATIONAL_EXPENSES
        assert CashFlowPeriod.parse(CashFlowPeriod.WEEKLY) is CashFlowPeriod.WEEKLY

    def test_overdue_is_not_a_status(self):
        with pytest.raises(ValueError, match="payable status"):
            PayableStatus.parse("overdue")
        with pytest.raises(ValueError, match="receivable status"):
            ReceivableStatus.parse("overdue")

    def test_unknown_value_lists_allowed(self):
        with pytest.raises(ValueError, match="income, expense"):
            CategoryType.parse("transfer")

    def test_period_windows(self):
        assert CashFlowPeriod.DAILY.window_days == 7
        assert CashFlowPeriod.WEEKLY.window_days == 28
        assert CashFlowPeriod.MONTHLY.window_days == 90

    def test_str_is_value(self):
        assert str(PayableStatus.PENDING) == "pending"


class TestAccounts:
    def test_payable_defaults(self):
        payable = AccountPayable(id=1, description="Aluguel", amount=Decimal("5000"), due_date=date(2024, 6, 5))
        assert payable.status is PayableStatus.PENDING
        assert payable.is_settled is False
        assert payable.settlement_date is None

    def test_receivable_settlement(self):
        receivable = AccountReceivable(
            id=1,
            description="Consultoria",
            amount=Decimal("8500"),
            due_date=date(2024, 6, 9),
            status=ReceivableStatus.RECEIVED,
            received_date=date(2024, 6, 10),
        )
        assert receivable.is_settled is True
        assert receivable.settlement_date == date(2024, 6, 10)

    def test_immutability(self):
        category = Category(id=1, name="Vendas", category_type=CategoryType.INCOME)
        with pytest.raises(FrozenInstanceError):
            category.name = "Outro"

    def test_cash_flow_date_str(self):
        entry = CashFlowData(
            date=date(2024, 6, 3),
            income=Decimal("0"),
            expense=Decimal("0"),
            balance=Decimal("0"),
            projected=False,
        )
        assert entry.date_str == "2024-06-03"
