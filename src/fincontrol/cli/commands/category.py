"""Category management commands."""

import click
from fincontrol.cli.error_handling import handle_domain_error
from fincontrol.domain.category import CategoryService
from fincontrol.domain.entities import CategoryType, DRECategory

CATEGORY_TYPES = [t.value for t in CategoryType]
DRE_CATEGORIES = [d.value for d in DRECategory] + ["none"]


def _dre_option_value(value: str | None):
    """Map the CLI's 'none' to clearing the DRE line."""
    if value is None:
        return None
    return None if value.lower() == "none" else value


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.option("--type", "category_type", type=click.Choice(CATEGORY_TYPES, case_sensitive=False), help="Only show this category type")
@click.pass_context
def list_categories(ctx, category_type: str | None):
    """List categories with their type and DRE line."""
    service = CategoryService(ctx.obj["db"])

    categories = service.list_categories(category_type=category_type)
    if not categories:
        click.echo("No categories found. Run 'seed' to create default categories.")
        return

    click.echo("\nCategories:")
    click.echo("-" * 80)
    for cat in categories:
        dre = cat.dre_category.value if cat.dre_category else "-"
        click.echo(f"ID: {cat.id:3d} | {cat.name:30s} | {cat.category_type.value:8s} | DRE: {dre}")


@category_group.command("create")
@click.argument("name")
@click.option("--type", "category_type", type=click.Choice(CATEGORY_TYPES, case_sensitive=False), default="expense", help="Category type (default: expense)")
@click.option("--dre", "dre_category", type=click.Choice(DRE_CATEGORIES, case_sensitive=False), help="DRE line the category rolls up into")
@click.pass_context
def create_category(ctx, name: str, category_type: str, dre_category: str | None):
    """Create a new category.

    Examples:
        fincontrol category create "Aluguel" --type expense --dre operational_expenses
        fincontrol category create "Vendas" --type income --dre revenue
    """
    service = CategoryService(ctx.obj["db"])

    try:
        category_id = service.create_category(
            name=name,
            category_type=category_type,
            dre_category=_dre_option_value(dre_category),
        )
        click.echo(f"Created category '{name}' (ID: {category_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@category_group.command("update")
@click.argument("category_id", type=int)
@click.option("--name", help="New name")
@click.option("--type", "category_type", type=click.Choice(CATEGORY_TYPES, case_sensitive=False), help="New category type")
@click.option("--dre", "dre_category", type=click.Choice(DRE_CATEGORIES, case_sensitive=False), help="New DRE line ('none' to clear)")
@click.pass_context
def update_category(ctx, category_id: int, name, category_type, dre_category):
    """Update a category."""
    updates = {}
    if name is not None:
        updates["name"] = name
    if category_type is not None:
        updates["category_type"] = category_type
    if dre_category is not None:
        updates["dre_category"] = _dre_option_value(dre_category)

    if not updates:
        click.echo("Nothing to update.")
        return

    try:
        category = CategoryService(ctx.obj["db"]).update_category(category_id, **updates)
        click.echo(f"Updated category '{category.name}' (ID: {category.id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@category_group.command("delete")
@click.argument("category_id", type=int)
@click.pass_context
def delete_category(ctx, category_id: int):
    """Delete a category no account references."""
    service = CategoryService(ctx.obj["db"])
    try:
        service.delete_category(category_id)
        click.echo(f"Deleted category {category_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
