"""Client and supplier management commands."""

import click
from fincontrol.cli.error_handling import handle_domain_error
from fincontrol.domain.party import ClientService, SupplierService


def _party_options(func):
    """Shared contact options for clients and suppliers."""
    func = click.option("--address", help="Street address")(func)
    func = click.option("--phone", help="Phone number")(func)
    func = click.option("--email", help="Contact email")(func)
    func = click.option("--document", help="Tax document (CNPJ/CPF)")(func)
    return func


def _collect_updates(**options) -> dict:
    return {key: value for key, value in options.items() if value is not None}


def _print_parties(title: str, parties) -> None:
    click.echo(f"\n{title}:")
    click.echo("-" * 80)
    for p in parties:
        click.echo(
            f"ID: {p.id:3d} | {p.name:30s} | {p.document or '':20s} | {p.email or ''}"
        )


@click.group()
def client_group():
    """Manage clients."""
    pass


@client_group.command("create")
@click.argument("name")
@_party_options
@click.pass_context
def create_client(ctx, name: str, document, email, phone, address):
    """Create a new client.

    Examples:
        fincontrol client create "Empresa Beta Ltda" --email financeiro@beta.com
    """
    service = ClientService(ctx.obj["db"])
    try:
        client_id = service.create_client(
            name=name, document=document, email=email, phone=phone, address=address
        )
        click.echo(f"Created client '{name}' (ID: {client_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@client_group.command("list")
@click.pass_context
def list_clients(ctx):
    """List all clients."""
    clients = ClientService(ctx.obj["db"]).list_clients()
    if not clients:
        click.echo("No clients found.")
        return
    _print_parties("Clients", clients)


@client_group.command("update")
@click.argument("client_id", type=int)
@click.option("--name", help="New name")
@_party_options
@click.pass_context
def update_client(ctx, client_id: int, name, document, email, phone, address):
    """Update a client's details."""
    updates = _collect_updates(
        name=name, document=document, email=email, phone=phone, address=address
    )
    if not updates:
        click.echo("Nothing to update.")
        return
    try:
        client = ClientService(ctx.obj["db"]).update_client(client_id, **updates)
        click.echo(f"Updated client '{client.name}' (ID: {client.id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@client_group.command("delete")
@click.argument("client_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_client(ctx, client_id: int, yes: bool):
    """Delete a client that has no receivables."""
    service = ClientService(ctx.obj["db"])
    client = service.get_client(client_id)
    if client is None:
        click.echo(f"Error: Client {client_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete client '{client.name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_client(client_id)
        click.echo(f"Deleted client '{client.name}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


@click.group()
def supplier_group():
    """Manage suppliers."""
    pass


@supplier_group.command("create")
@click.argument("name")
@_party_options
@click.pass_context
def create_supplier(ctx, name: str, document, email, phone, address):
    """Create a new supplier.

    Examples:
        fincontrol supplier create "Distribuidora XYZ" --document 98.765.432/0001-10
    """
    service = SupplierService(ctx.obj["db"])
    try:
        supplier_id = service.create_supplier(
            name=name, document=document, email=email, phone=phone, address=address
        )
        click.echo(f"Created supplier '{name}' (ID: {supplier_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@supplier_group.command("list")
@click.pass_context
def list_suppliers(ctx):
    """List all suppliers."""
    suppliers = SupplierService(ctx.obj["db"]).list_suppliers()
    if not suppliers:
        click.echo("No suppliers found.")
        return
    _print_parties("Suppliers", suppliers)


@supplier_group.command("update")
@click.argument("supplier_id", type=int)
@click.option("--name", help="New name")
@_party_options
@click.pass_context
def update_supplier(ctx, supplier_id: int, name, document, email, phone, address):
    """Update a supplier's details."""
    updates = _collect_updates(
        name=name, document=document, email=email, phone=phone, address=address
    )
    if not updates:
        click.echo("Nothing to update.")
        return
    try:
        supplier = SupplierService(ctx.obj["db"]).update_supplier(supplier_id, **updates)
        click.echo(f"Updated supplier '{supplier.name}' (ID: {supplier.id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@supplier_group.command("delete")
@click.argument("supplier_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_supplier(ctx, supplier_id: int, yes: bool):
    """Delete a supplier that has no payables."""
    service = SupplierService(ctx.obj["db"])
    supplier = service.get_supplier(supplier_id)
    if supplier is None:
        click.echo(f"Error: Supplier {supplier_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete supplier '{supplier.name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_supplier(supplier_id)
        click.echo(f"Deleted supplier '{supplier.name}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register client and supplier commands with main CLI."""
    cli.add_command(client_group, name="client")
    cli.add_command(supplier_group, name="supplier")
