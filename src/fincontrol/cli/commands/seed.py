"""Seed a fresh database with default data."""

import click
from fincontrol.cli.date_filters import resolve_cli_today
from fincontrol.cli.error_handling import handle_domain_error
from fincontrol.domain.seed import DEFAULT_CATEGORIES, DEFAULT_COST_CENTERS, seed_default_data


@click.command("seed")
@click.option("--no-samples", is_flag=True, help="Only create categories and cost centers")
@click.option("--today", help="Date the sample accounts are placed around (defaults to today)")
@click.pass_context
def seed(ctx, no_samples: bool, today: str | None):
    """Create default categories, cost centers and sample accounts."""
    reference = resolve_cli_today(ctx, today)
    try:
        created = seed_default_data(ctx.obj["db"], reference, with_samples=not no_samples)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not created:
        click.echo("Categories already exist. Nothing was seeded.")
        return

    click.echo(
        f"Created {len(DEFAULT_CATEGORIES)} categories and {len(DEFAULT_COST_CENTERS)} cost centers."
    )
    if not no_samples:
        click.echo("Added sample suppliers, clients, payables and receivables.")


def register_commands(cli):
    """Register seed command with main CLI."""
    cli.add_command(seed)
