"""CLI helpers for resolving today's date and report months."""

from datetime import date

import click

from fincontrol.utils.date_parser import parse_date, today_in_timezone


def resolve_cli_today(ctx, today: str | None) -> date:
    """Resolve the reference date from --today or the configured timezone."""
    try:
        current = today_in_timezone(ctx.obj.get("timezone"))
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    if not today:
        return current

    try:
        return parse_date(today, today=current)
    except ValueError as e:
        click.echo(f"Error: Invalid today date: {e}", err=True)
        ctx.exit(1)


def resolve_cli_date(ctx, value: str, label: str, today: date) -> date:
    """Parse a date option (absolute or relative to ``today``), exiting on error."""
    try:
        return parse_date(value, today=today)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def resolve_cli_month(
    ctx, year: int | None, month: int | None, today: date
) -> tuple[int, int]:
    """Resolve --year/--month, defaulting to the month containing ``today``."""
    resolved_year = year if year is not None else today.year
    resolved_month = month if month is not None else today.month
    if not 1 <= resolved_month <= 12:
        click.echo("Error: --month must be between 1 and 12.", err=True)
        ctx.exit(1)
    return resolved_year, resolved_month
