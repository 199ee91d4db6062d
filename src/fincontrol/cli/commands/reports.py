"""Report commands: dashboard, cash flow, category expenses and DRE."""

import click
from fincontrol.cli.date_filters import resolve_cli_month, resolve_cli_today
from fincontrol.cli.error_handling import handle_domain_error
from fincontrol.cli.formatting import format_money, format_percent, format_share
from fincontrol.domain.entities import CashFlowPeriod
from fincontrol.domain.reports import ReportService

PERIODS = [p.value for p in CashFlowPeriod]

DRE_LINES = [
    ("Gross revenue", "gross_revenue"),
    ("(-) Deductions", "deductions"),
    ("Net revenue", "net_revenue"),
    ("(-) Costs", "costs"),
    ("Gross profit", "gross_profit"),
    ("(-) Operational expenses", "operational_expenses"),
    ("Operational profit", "operational_profit"),
    ("Net profit", "net_profit"),
    ("Contribution margin", "contribution_margin"),
]


def _report_service(ctx, reference) -> ReportService:
    return ReportService(ctx.obj["db"], today=reference, timezone=ctx.obj.get("timezone"))


@click.command("dashboard")
@click.option("--today", help="Reference date (defaults to today)")
@click.pass_context
def dashboard(ctx, today: str | None):
    """Show the dashboard KPIs."""
    reference = resolve_cli_today(ctx, today)
    try:
        stats = _report_service(ctx, reference).dashboard_stats()
    except (ValueError, OverflowError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nDashboard as of {reference.isoformat()}")
    click.echo("=" * 50)
    click.echo(f"{'Total revenue (received)':32s} {format_money(stats.total_revenue):>16s}")
    click.echo(f"{'Total expenses (paid)':32s} {format_money(stats.total_expenses):>16s}")
    click.echo(f"{'Balance':32s} {format_money(stats.balance):>16s}")
    click.echo(f"{'Projected balance':32s} {format_money(stats.projected_balance):>16s}")
    click.echo("-" * 50)
    click.echo(f"{'Overdue payables':32s} {stats.overdue_payables:>16d}")
    click.echo(f"{'Overdue receivables':32s} {stats.overdue_receivables:>16d}")
    click.echo(f"{'Due today':32s} {stats.due_today_count:>16d}")
    click.echo(f"{'Due within 7 days':32s} {stats.due_this_week_count:>16d}")


@click.command("cash-flow")
@click.option(
    "--period",
    type=click.Choice(PERIODS, case_sensitive=False),
    default=CashFlowPeriod.DAILY.value,
    show_default=True,
    help="Window size around today (daily=±7, weekly=±28, monthly=±90 days)",
)
@click.option("--summary", is_flag=True, help="Only print totals for the window")
@click.option("--today", help="Reference date (defaults to today)")
@click.pass_context
def cash_flow(ctx, period: str, summary: bool, today: str | None):
    """Show the day-by-day cash flow around today.

    Each account lands on its effective date: the settlement date when it is
    settled, otherwise its due date, so pending accounts already past due
    show up on their due day. Days after today are marked as projected.
    """
    reference = resolve_cli_today(ctx, today)
    service = _report_service(ctx, reference)

    try:
        if summary:
            totals = service.cash_flow_summary(period)
            click.echo(f"\nCash flow summary ({period}) as of {reference.isoformat()}")
            click.echo("=" * 50)
            click.echo(f"{'Total income':32s} {format_money(totals.total_income):>16s}")
            click.echo(f"{'Total expense':32s} {format_money(totals.total_expense):>16s}")
            click.echo(f"{'Net flow':32s} {format_money(totals.net_flow):>16s}")
            click.echo(f"{'Current balance':32s} {format_money(totals.current_balance):>16s}")
            click.echo(f"{'Projected balance':32s} {format_money(totals.projected_balance):>16s}")
            return

        series = service.cash_flow(period)
    except (ValueError, OverflowError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nCash flow ({period}) as of {reference.isoformat()}")
    click.echo("-" * 70)
    click.echo(f"{'Date':10s} | {'Income':>14s} | {'Expense':>14s} | {'Balance':>14s} |")
    click.echo("-" * 70)
    for day in series:
        marker = "projected" if day.projected else ""
        click.echo(
            f"{day.date_str} | {format_money(day.income):>14s} | "
            f"{format_money(day.expense):>14s} | {format_money(day.balance):>14s} | {marker}"
        )


@click.command("category-expenses")
@click.pass_context
def category_expenses(ctx):
    """Show how categorized payables split across expense categories."""
    rows = ReportService(ctx.obj["db"]).category_expenses()
    if not rows:
        click.echo("No categorized expenses found.")
        return

    click.echo("\nExpenses by category:")
    click.echo("-" * 70)
    for row in rows:
        click.echo(
            f"{row.category_name[:35]:35s} | {format_money(row.amount):>16s} | "
            f"{format_share(row.percentage):>7s}"
        )


@click.command("dre")
@click.option("--year", type=int, help="Year (defaults to the current year)")
@click.option("--month", type=int, help="Month 1-12 (defaults to the current month)")
@click.option("--today", help="Reference date used for the default month")
@click.pass_context
def dre(ctx, year: int | None, month: int | None, today: str | None):
    """Show the income statement (DRE) for a month next to the previous one."""
    reference = resolve_cli_today(ctx, today)
    year, month = resolve_cli_month(ctx, year, month, reference)

    try:
        comparison = _report_service(ctx, reference).dre(year, month)
    except (ValueError, OverflowError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nDRE {comparison.year}-{comparison.month:02d}")
    click.echo("=" * 70)
    click.echo(f"{'':32s} {'Current':>16s} {'Previous':>16s}")
    for label, field in DRE_LINES:
        current = getattr(comparison.current, field)
        previous = getattr(comparison.previous, field)
        click.echo(f"{label:32s} {format_money(current):>16s} {format_money(previous):>16s}")
    click.echo("-" * 70)
    change = comparison.percentage_change
    click.echo(f"{'Gross revenue change':32s} {format_percent(change.gross_revenue):>16s}")
    click.echo(f"{'Net profit change':32s} {format_percent(change.net_profit):>16s}")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(dashboard)
    cli.add_command(cash_flow)
    cli.add_command(category_expenses)
    cli.add_command(dre)
