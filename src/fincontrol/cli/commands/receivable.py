"""Accounts receivable commands."""

from decimal import Decimal

import click
from fincontrol.cli.date_filters import resolve_cli_date, resolve_cli_today
from fincontrol.cli.error_handling import handle_domain_error
from fincontrol.cli.formatting import format_account_row, format_money
from fincontrol.domain.entities import ReceivableStatus
from fincontrol.domain.receivable import ReceivableService

STATUS_FILTERS = [s.value for s in ReceivableStatus] + ["overdue"]


def _print_receivables(db, receivables, today) -> None:
    clients = {c.id: c.name for c in db.list_clients()}
    click.echo("\nAccounts receivable:")
    click.echo("-" * 110)
    for r in receivables:
        click.echo(format_account_row(r, today, clients.get(r.client_id, "")))
    click.echo("-" * 110)
    total = sum((r.amount for r in receivables), Decimal("0"))
    click.echo(f"{len(receivables)} receivable(s), total {format_money(total)}")


@click.group()
def receivable_group():
    """Manage accounts receivable."""
    pass


@receivable_group.command("add")
@click.option("--description", "-d", required=True, help="What is being charged")
@click.option("--amount", "-a", required=True, help="Amount (e.g. 1500.00 or 'R$ 1.500,00')")
@click.option("--due-date", required=True, help="Due date (YYYY-MM-DD or relative like 'in 5 days')")
@click.option("--client", "client_id", type=int, help="Client ID")
@click.option("--category", "category_id", type=int, help="Category ID")
@click.option("--notes", help="Free-form notes")
@click.option("--received-on", help="Record as already received on this date")
@click.option("--today", help="Reference date for relative dates (defaults to today)")
@click.pass_context
def add_receivable(
    ctx, description: str, amount: str, due_date: str, client_id, category_id, notes, received_on, today
):
    """Add an account receivable.

    Examples:
        fincontrol receivable add -d "Consultoria" -a 8500 --due-date 2024-06-12 --client 1
    """
    reference = resolve_cli_today(ctx, today)
    due = resolve_cli_date(ctx, due_date, "due date", reference)
    received_date = (
        resolve_cli_date(ctx, received_on, "received date", reference) if received_on else None
    )

    service = ReceivableService(ctx.obj["db"])
    try:
        receivable_id = service.create_receivable(
            description=description,
            amount=amount,
            due_date=due,
            status=ReceivableStatus.RECEIVED if received_date else ReceivableStatus.PENDING,
            received_date=received_date,
            client_id=client_id,
            category_id=category_id,
            notes=notes,
        )
        click.echo(f"Created receivable '{description}' (ID: {receivable_id}) due {due.isoformat()}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@receivable_group.command("list")
@click.option("--status", type=click.Choice(STATUS_FILTERS, case_sensitive=False), help="Filter by status")
@click.option("--today", help="Reference date for overdue status (defaults to today)")
@click.pass_context
def list_receivables(ctx, status: str | None, today: str | None):
    """List accounts receivable."""
    reference = resolve_cli_today(ctx, today)
    service = ReceivableService(ctx.obj["db"])

    if status == "overdue":
        receivables = service.list_receivables(overdue_as_of=reference)
    else:
        receivables = service.list_receivables(status=status)

    if not receivables:
        click.echo("No receivables found.")
        return
    _print_receivables(ctx.obj["db"], receivables, reference)


@receivable_group.command("upcoming")
@click.option("--days", type=int, default=7, show_default=True, help="Look-ahead window in days")
@click.option("--today", help="Reference date (defaults to today)")
@click.pass_context
def upcoming_receivables(ctx, days: int, today: str | None):
    """List pending receivables due soon, including overdue ones."""
    reference = resolve_cli_today(ctx, today)
    try:
        receivables = ReceivableService(ctx.obj["db"]).list_upcoming(reference, days=days)
    except (ValueError, OverflowError) as e:
        handle_domain_error(ctx, e)
    if not receivables:
        click.echo("No upcoming receivables.")
        return
    _print_receivables(ctx.obj["db"], receivables, reference)


@receivable_group.command("update")
@click.argument("receivable_id", type=int)
@click.option("--description", "-d", help="New description")
@click.option("--amount", "-a", help="New amount")
@click.option("--due-date", help="New due date")
@click.option(
    "--status", type=click.Choice([s.value for s in ReceivableStatus], case_sensitive=False), help="New status"
)
@click.option("--received-on", help="Received date")
@click.option("--client", "client_id", type=int, help="Client ID")
@click.option("--category", "category_id", type=int, help="Category ID")
@click.option("--notes", help="Free-form notes")
@click.option("--today", help="Reference date for relative dates (defaults to today)")
@click.pass_context
def update_receivable(
    ctx, receivable_id: int, description, amount, due_date, status, received_on, client_id, category_id, notes, today
):
    """Update an account receivable."""
    updates = {
        name: value
        for name, value in (
            ("description", description),
            ("amount", amount),
            ("status", status),
            ("client_id", client_id),
            ("category_id", category_id),
            ("notes", notes),
        )
        if value is not None
    }
    if due_date or received_on:
        reference = resolve_cli_today(ctx, today)
        if due_date:
            updates["due_date"] = resolve_cli_date(ctx, due_date, "due date", reference)
        if received_on:
            updates["received_date"] = resolve_cli_date(ctx, received_on, "received date", reference)

    if not updates:
        click.echo("Nothing to update.")
        return
    try:
        receivable = ReceivableService(ctx.obj["db"]).update_receivable(receivable_id, **updates)
        click.echo(f"Updated receivable '{receivable.description}' (ID: {receivable.id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@receivable_group.command("receive")
@click.argument("receivable_id", type=int)
@click.option("--date", "received_date", help="Date the money came in (defaults to today)")
@click.pass_context
def receive_receivable(ctx, receivable_id: int, received_date: str | None):
    """Mark a receivable as received."""
    reference = resolve_cli_today(ctx, None)
    received_on = (
        resolve_cli_date(ctx, received_date, "received date", reference) if received_date else reference
    )
    try:
        receivable = ReceivableService(ctx.obj["db"]).mark_as_received(receivable_id, received_on)
        click.echo(
            f"Marked receivable '{receivable.description}' as received on {received_on.isoformat()}"
        )
    except ValueError as e:
        handle_domain_error(ctx, e)


@receivable_group.command("delete")
@click.argument("receivable_id", type=int)
@click.pass_context
def delete_receivable(ctx, receivable_id: int):
    """Delete an account receivable."""
    try:
        ReceivableService(ctx.obj["db"]).delete_receivable(receivable_id)
        click.echo(f"Deleted receivable {receivable_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register receivable commands with main CLI."""
    cli.add_command(receivable_group, name="receivable")
