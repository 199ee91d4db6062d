"""Main CLI entry point."""

import logging

import click
from fincontrol.database.factories import create_database

# Import and register all commands at module level
from fincontrol.cli.commands import (
    category,
    cost_center,
    party,
    payable,
    receivable,
    reports,
    seed,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-url",
    help="Database URL, e.g. sqlite:///path/to.db or memory:// (overrides FINCONTROL_DATABASE_URL)",
    envvar="FINCONTROL_DATABASE_URL",
)
@click.option(
    "--timezone",
    default="UTC",
    show_default=True,
    help="Timezone used to determine today's date",
    envvar="FINCONTROL_TIMEZONE",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="FINCONTROL_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_url: str | None, timezone: str, log_level: str):
    """Fincontrol - Small-business financial control.

    Track accounts payable and receivable, keep client, supplier, category
    and cost center registries, and report the dashboard, cash flow and
    income statement (DRE).
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj["timezone"] = timezone

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None and "db" not in ctx.obj:
        db = create_database(database_url=db_url)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
party.register_commands(cli)
category.register_commands(cli)
cost_center.register_commands(cli)
payable.register_commands(cli)
receivable.register_commands(cli)
reports.register_commands(cli)
seed.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
