"""Cost center management commands."""

import click
from fincontrol.cli.error_handling import handle_domain_error
from fincontrol.domain.cost_center import CostCenterService


@click.group()
def cost_center_group():
    """Manage cost centers."""
    pass


@cost_center_group.command("create")
@click.argument("name")
@click.option("--description", help="What the cost center covers")
@click.pass_context
def create_cost_center(ctx, name: str, description: str | None):
    """Create a new cost center."""
    service = CostCenterService(ctx.obj["db"])
    try:
        cost_center_id = service.create_cost_center(name=name, description=description)
        click.echo(f"Created cost center '{name}' (ID: {cost_center_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@cost_center_group.command("list")
@click.pass_context
def list_cost_centers(ctx):
    """List all cost centers."""
    cost_centers = CostCenterService(ctx.obj["db"]).list_cost_centers()
    if not cost_centers:
        click.echo("No cost centers found.")
        return

    click.echo("\nCost centers:")
    click.echo("-" * 60)
    for cc in cost_centers:
        click.echo(f"ID: {cc.id:3d} | {cc.name:20s} | {cc.description or ''}")


@cost_center_group.command("update")
@click.argument("cost_center_id", type=int)
@click.option("--name", help="New name")
@click.option("--description", help="New description")
@click.pass_context
def update_cost_center(ctx, cost_center_id: int, name, description):
    """Update a cost center."""
    updates = {k: v for k, v in {"name": name, "description": description}.items() if v is not None}
    if not updates:
        click.echo("Nothing to update.")
        return
    try:
        cost_center = CostCenterService(ctx.obj["db"]).update_cost_center(cost_center_id, **updates)
        click.echo(f"Updated cost center '{cost_center.name}' (ID: {cost_center.id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@cost_center_group.command("delete")
@click.argument("cost_center_id", type=int)
@click.pass_context
def delete_cost_center(ctx, cost_center_id: int):
    """Delete a cost center no payable references."""
    try:
        CostCenterService(ctx.obj["db"]).delete_cost_center(cost_center_id)
        click.echo(f"Deleted cost center {cost_center_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register cost center commands with main CLI."""
    cli.add_command(cost_center_group, name="cost-center")
