"""Tests for CLI date helpers."""

from datetime import date
from decimal import Decimal

import click
import pytest

from fincontrol.cli.date_filters import resolve_cli_date, resolve_cli_month, resolve_cli_today
from fincontrol.cli.formatting import display_status, format_money, format_percent, format_share
from fincontrol.domain.entities import AccountPayable, PayableStatus

TODAY = date(2024, 6, 10)


def _ctx(timezone: str = "UTC") -> click.Context:
    return click.Context(click.Command("test"), obj={"timezone": timezone})


def test_resolve_cli_today_uses_override():
    assert resolve_cli_today(_ctx(), "2024-06-10") == TODAY


def test_resolve_cli_today_defaults_to_current_date():
    assert isinstance(resolve_cli_today(_ctx("America/Sao_Paulo"), None), date)


def test_resolve_cli_today_rejects_unknown_timezone(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_today(_ctx("Nowhere/Land"), None)

    assert excinfo.value.exit_code == 1
    assert "Unknown timezone" in capsys.readouterr().err


def test_resolve_cli_date_relative_to_today():
    assert resolve_cli_date(_ctx(), "in 7 days", "due date", TODAY) == date(2024, 6, 17)


def test_resolve_cli_date_invalid(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date(_ctx(), "not-a-date", "due date", TODAY)

    assert excinfo.value.exit_code == 1
    assert "Invalid due date" in capsys.readouterr().err


def test_resolve_cli_month_defaults():
    assert resolve_cli_month(_ctx(), None, None, TODAY) == (2024, 6)
    assert resolve_cli_month(_ctx(), 2023, None, TODAY) == (2023, 6)
    assert resolve_cli_month(_ctx(), None, 1, TODAY) == (2024, 1)


def test_resolve_cli_month_out_of_range(capsys):
    with pytest.raises(click.exceptions.Exit):
        resolve_cli_month(_ctx(), 2024, 0, TODAY)
    assert "between 1 and 12" in capsys.readouterr().err


def test_formatting_helpers():
    assert format_money(Decimal("1234.5")) == "1,234.50"
    assert format_money(Decimal("-20")) == "-20.00"
    assert format_percent(Decimal("150")) == "+150.0%"
    assert format_percent(Decimal("-33.333")) == "-33.3%"
    assert format_share(Decimal("12.345")) == "12.3%"


def test_display_status_shows_overdue():
    payable = AccountPayable(id=1, description="X", amount=1, due_date=date(2024, 6, 1))
    assert display_status(payable, TODAY) == "overdue"
    paid = AccountPayable(
        id=2, description="X", amount=1, due_date=date(2024, 6, 1),
        status=PayableStatus.PAID, payment_date=date(2024, 6, 2),
    )
    assert display_status(paid, TODAY) == "paid"
