"""Accounts payable commands."""

from decimal import Decimal

import click
from fincontrol.cli.date_filters import resolve_cli_date, resolve_cli_today
from fincontrol.cli.error_handling import handle_domain_error
from fincontrol.cli.formatting import format_account_row, format_money
from fincontrol.domain.entities import PayableStatus, Recurrence
from fincontrol.domain.payable import PayableService

STATUS_FILTERS = [s.value for s in PayableStatus] + ["overdue"]


def _print_payables(db, payables, today) -> None:
    suppliers = {s.id: s.name for s in db.list_suppliers()}
    click.echo("\nAccounts payable:")
    click.echo("-" * 110)
    total = sum((p.amount for p in payables), Decimal("0"))
    for p in payables:
        click.echo(format_account_row(p, today, suppliers.get(p.supplier_id, "")))
    click.echo("-" * 110)
    click.echo(f"{len(payables)} payable(s), total {format_money(total)}")


@click.group()
def payable_group():
    """Manage accounts payable."""
    pass


@payable_group.command("add")
@click.option("--description", "-d", required=True, help="What the payment is for")
@click.option("--amount", "-a", required=True, help="Amount (e.g. 1500.00 or 'R$ 1.500,00')")
@click.option("--due-date", required=True, help="Due date (YYYY-MM-DD or relative like 'in 5 days')")
@click.option("--supplier", "supplier_id", type=int, help="Supplier ID")
@click.option("--category", "category_id", type=int, help="Category ID")
@click.option("--cost-center", "cost_center_id", type=int, help="Cost center ID")
@click.option("--recurrence", type=click.Choice([r.value for r in Recurrence], case_sensitive=False), help="Recurrence")
@click.option("--notes", help="Free-form notes")
@click.option("--attachment-url", help="Link to invoice or receipt")
@click.option("--paid-on", help="Record as already paid on this date")
@click.option("--today", help="Reference date for relative dates (defaults to today)")
@click.pass_context
def add_payable(
    ctx,
    description: str,
    amount: str,
    due_date: str,
    supplier_id,
    category_id,
    cost_center_id,
    recurrence,
    notes,
    attachment_url,
    paid_on,
    today,
):
    """Add an account payable.

    Examples:
        fincontrol payable add -d "Aluguel" -a 5000 --due-date 2024-06-10 --category 7
        fincontrol payable add -d "Energia" -a 850,00 --due-date "in 3 days"
    """
    reference = resolve_cli_today(ctx, today)
    due = resolve_cli_date(ctx, due_date, "due date", reference)
    payment_date = resolve_cli_date(ctx, paid_on, "payment date", reference) if paid_on else None

    service = PayableService(ctx.obj["db"])
    try:
        payable_id = service.create_payable(
            description=description,
            amount=amount,
            due_date=due,
            status=PayableStatus.PAID if payment_date else PayableStatus.PENDING,
            payment_date=payment_date,
            supplier_id=supplier_id,
            category_id=category_id,
            cost_center_id=cost_center_id,
            notes=notes,
            recurrence=recurrence,
            attachment_url=attachment_url,
        )
        click.echo(f"Created payable '{description}' (ID: {payable_id}) due {due.isoformat()}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@payable_group.command("list")
@click.option("--status", type=click.Choice(STATUS_FILTERS, case_sensitive=False), help="Filter by status")
@click.option("--today", help="Reference date for overdue status (defaults to today)")
@click.pass_context
def list_payables(ctx, status: str | None, today: str | None):
    """List accounts payable."""
    reference = resolve_cli_today(ctx, today)
    service = PayableService(ctx.obj["db"])

    if status == "overdue":
        payables = service.list_payables(overdue_as_of=reference)
    else:
        payables = service.list_payables(status=status)

    if not payables:
        click.echo("No payables found.")
        return
    _print_payables(ctx.obj["db"], payables, reference)


@payable_group.command("upcoming")
@click.option("--days", type=int, default=7, show_default=True, help="Look-ahead window in days")
@click.option("--today", help="Reference date (defaults to today)")
@click.pass_context
def upcoming_payables(ctx, days: int, today: str | None):
    """List pending payables due soon, including overdue ones."""
    reference = resolve_cli_today(ctx, today)
    try:
        payables = PayableService(ctx.obj["db"]).list_upcoming(reference, days=days)
    except (ValueError, OverflowError) as e:
        handle_domain_error(ctx, e)
    if not payables:
        click.echo("No upcoming payables.")
        return
    _print_payables(ctx.obj["db"], payables, reference)


@payable_group.command("update")
@click.argument("payable_id", type=int)
@click.option("--description", "-d", help="New description")
@click.option("--amount", "-a", help="New amount")
@click.option("--due-date", help="New due date")
@click.option("--status", type=click.Choice([s.value for s in PayableStatus], case_sensitive=False), help="New status")
@click.option("--paid-on", help="Payment date")
@click.option("--supplier", "supplier_id", type=int, help="Supplier ID")
@click.option("--category", "category_id", type=int, help="Category ID")
@click.option("--cost-center", "cost_center_id", type=int, help="Cost center ID")
@click.option("--recurrence", type=click.Choice([r.value for r in Recurrence], case_sensitive=False), help="Recurrence")
@click.option("--notes", help="Free-form notes")
@click.option("--attachment-url", help="Link to invoice or receipt")
@click.option("--today", help="Reference date for relative dates (defaults to today)")
@click.pass_context
def update_payable(
    ctx,
    payable_id: int,
    description,
    amount,
    due_date,
    status,
    paid_on,
    supplier_id,
    category_id,
    cost_center_id,
    recurrence,
    notes,
    attachment_url,
    today,
):
    """Update an account payable.

    A payable can only be marked paid together with a payment date, either
    given here with --paid-on or already recorded.
    """
    updates = {
        name: value
        for name, value in (
            ("description", description),
            ("amount", amount),
            ("status", status),
            ("supplier_id", supplier_id),
            ("category_id", category_id),
            ("cost_center_id", cost_center_id),
            ("recurrence", recurrence),
            ("notes", notes),
            ("attachment_url", attachment_url),
        )
        if value is not None
    }
    if due_date or paid_on:
        reference = resolve_cli_today(ctx, today)
        if due_date:
            updates["due_date"] = resolve_cli_date(ctx, due_date, "due date", reference)
        if paid_on:
            updates["payment_date"] = resolve_cli_date(ctx, paid_on, "payment date", reference)

    if not updates:
        click.echo("Nothing to update.")
        return
    try:
        payable = PayableService(ctx.obj["db"]).update_payable(payable_id, **updates)
        click.echo(f"Updated payable '{payable.description}' (ID: {payable.id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@payable_group.command("pay")
@click.argument("payable_id", type=int)
@click.option("--date", "payment_date", help="Payment date (defaults to today)")
@click.pass_context
def pay_payable(ctx, payable_id: int, payment_date: str | None):
    """Mark a payable as paid."""
    reference = resolve_cli_today(ctx, None)
    paid_on = resolve_cli_date(ctx, payment_date, "payment date", reference) if payment_date else reference
    try:
        payable = PayableService(ctx.obj["db"]).mark_as_paid(payable_id, paid_on)
        click.echo(f"Marked payable '{payable.description}' as paid on {paid_on.isoformat()}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@payable_group.command("delete")
@click.argument("payable_id", type=int)
@click.pass_context
def delete_payable(ctx, payable_id: int):
    """Delete an account payable."""
    try:
        PayableService(ctx.obj["db"]).delete_payable(payable_id)
        click.echo(f"Deleted payable {payable_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register payable commands with main CLI."""
    cli.add_command(payable_group, name="payable")
