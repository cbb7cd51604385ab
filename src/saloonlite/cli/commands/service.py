"""Service catalog commands."""

import click
from saloonlite.domain.catalog import CatalogService
from saloonlite.domain.errors import DomainError, StorageError
from saloonlite.cli.error_handling import handle_domain_error
from saloonlite.utils.amount_parser import parse_amount


def _resolve_service_or_exit(ctx, catalog: CatalogService, identifier: str):
    """Find a service by ID or by name, exiting if neither matches."""
    found = catalog.get_service(identifier) or catalog.find_service_by_name(identifier)
    if found is None:
        click.echo(f"Error: Service '{identifier}' not found", err=True)
        ctx.exit(1)
    return found


def _parse_price_or_exit(ctx, price: str):
    try:
        return parse_amount(price)
    except ValueError as e:
        click.echo(f"Error: Invalid price format: {e}", err=True)
        ctx.exit(1)


@click.group()
def service_group():
    """Manage the service catalog."""
    pass


@service_group.command("list")
@click.option("--active-only", is_flag=True, help="Only list services offered in sale entry")
@click.pass_context
def list_services(ctx, active_only: bool):
    """List services sorted by name."""
    db = ctx.obj["db"]
    catalog = CatalogService(db)

    services = catalog.list_services(active_only=active_only)
    if not services:
        click.echo("No services found. Use 'service add' to create one.")
        return

    click.echo("\nServices:")
    click.echo("-" * 80)
    click.echo(f"{'ID':<34} {'Name':<26} {'Price':>10} {'Status':<8}")
    click.echo("-" * 80)
    for s in services:
        status = "active" if s.is_active else "inactive"
        click.echo(f"{s.id:<34} {s.name[:26]:<26} {s.price:>10,.2f} {status:<8}")


@service_group.command("add")
@click.argument("name")
@click.option("--price", required=True, help="Default price (e.g., 30 or 'GHS 30.00')")
@click.pass_context
def add_service(ctx, name: str, price: str):
    """Add a service to the catalog."""
    db = ctx.obj["db"]
    catalog = CatalogService(db)

    service_price = _parse_price_or_exit(ctx, price)
    try:
        created = catalog.create_service(name=name, price=service_price)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created service '{created.name}' at {created.price:,.2f} (ID: {created.id})")


@service_group.command("update")
@click.argument("service")
@click.option("--name", help="New name")
@click.option("--price", help="New default price")
@click.pass_context
def update_service(ctx, service: str, name: str | None, price: str | None):
    """Rename a service or change its price.

    SERVICE is the service ID or its current name.
    """
    db = ctx.obj["db"]
    catalog = CatalogService(db)

    if name is None and price is None:
        click.echo("Error: Nothing to update; pass --name and/or --price", err=True)
        ctx.exit(1)

    existing = _resolve_service_or_exit(ctx, catalog, service)
    new_price = _parse_price_or_exit(ctx, price) if price is not None else None
    try:
        updated = catalog.update_service(existing.id, name=name, price=new_price)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated service '{updated.name}' at {updated.price:,.2f}")


@service_group.command("activate")
@click.argument("service")
@click.pass_context
def activate_service(ctx, service: str):
    """Show a service in sale entry again."""
    db = ctx.obj["db"]
    catalog = CatalogService(db)

    existing = _resolve_service_or_exit(ctx, catalog, service)
    try:
        catalog.activate_service(existing.id)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Activated service '{existing.name}'")


@service_group.command("deactivate")
@click.argument("service")
@click.pass_context
def deactivate_service(ctx, service: str):
    """Hide a service from sale entry without deleting it."""
    db = ctx.obj["db"]
    catalog = CatalogService(db)

    existing = _resolve_service_or_exit(ctx, catalog, service)
    try:
        catalog.deactivate_service(existing.id)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deactivated service '{existing.name}'")


@service_group.command("delete")
@click.argument("service")
@click.option("--yes", is_flag=True, help="Delete without asking for confirmation")
@click.pass_context
def delete_service(ctx, service: str, yes: bool):
    """Delete a service. Past sales keep their service name."""
    db = ctx.obj["db"]
    catalog = CatalogService(db)

    existing = _resolve_service_or_exit(ctx, catalog, service)
    if not yes:
        click.confirm(f"Delete service '{existing.name}'?", abort=True)
    try:
        catalog.delete_service(existing.id)
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted service '{existing.name}'")


def register_commands(cli):
    """Register service commands with main CLI."""
    cli.add_command(service_group, name="service")
