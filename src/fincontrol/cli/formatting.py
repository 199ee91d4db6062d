"""Output formatting helpers for CLI commands."""

from decimal import Decimal, ROUND_HALF_UP

from fincontrol.domain.aggregation import is_overdue
from fincontrol.utils.date_parser import format_date


def format_money(amount: Decimal) -> str:
    """Format an amount as ``1,234.56`` (negative values keep their sign)."""
    rounded = Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{rounded:,.2f}"


def format_percent(value: Decimal) -> str:
    rounded = Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{rounded:+.1f}%"


def format_share(value: Decimal) -> str:
    rounded = Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{rounded:.1f}%"


def display_status(account, today) -> str:
    """Stored status, or 'overdue' for unsettled accounts past due."""
    if is_overdue(account, today):
        return "overdue"
    return account.status.value


def format_account_row(account, today, party_name: str = "") -> str:
    """One table row for a payable or receivable."""
    settled_on = format_date(account.settlement_date)
    return (
        f"ID: {account.id:3d} | {format_date(account.due_date)} | "
        f"{account.description[:30]:30s} | {format_money(account.amount):>12s} | "
        f"{display_status(account, today):8s} | {settled_on:10s} | {party_name}"
    )
