"""Record sale command."""

import click
from saloonlite.domain.catalog import CatalogService
from saloonlite.domain.errors import DomainError, StorageError
from saloonlite.domain.transaction import TransactionService
from saloonlite.cli.error_handling import handle_domain_error
from saloonlite.utils.amount_parser import parse_amount
from saloonlite.utils.date_parser import parse_datetime


@click.command("sale")
@click.option("--customer", required=True, help="Customer name")
@click.option("--service", "service_name", required=True, help="Service name (e.g., 'Haircut')")
@click.option(
    "--amount",
    help="Amount charged (e.g., 25 or 'GHS 25.00'); defaults to the catalog price of the service",
)
@click.option(
    "--when",
    default="now",
    show_default=True,
    help="Time of the sale (e.g., '2024-01-15 14:30', 'now')",
)
@click.pass_context
def record_sale(ctx, customer: str, service_name: str, amount: str | None, when: str):
    """Record a sale.

    Examples:
        saloonlite sale --customer "Kofi" --service Haircut --amount 30
        saloonlite sale --customer "Ama" --service "Beard Trim" --when "2024-01-15 10:00"
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)
    catalog_service = CatalogService(db)

    try:
        occurred_at = parse_datetime(when)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    catalog_entry = catalog_service.find_service_by_name(service_name)
    if amount is None:
        if catalog_entry is None:
            click.echo(
                f"Error: Service '{service_name}' is not in the catalog; pass --amount", err=True
            )
            ctx.exit(1)
        sale_amount = catalog_entry.price
    else:
        try:
            sale_amount = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    # Use the catalog spelling when the service is known
    if catalog_entry is not None:
        service_name = catalog_entry.name

    try:
        sale = transaction_service.record_sale(
            amount=sale_amount, customer=customer, service=service_name, when=occurred_at
        )
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Recorded sale {sale.id}")
    click.echo(f"  Customer: {sale.customer}")
    click.echo(f"  Service: {sale.service}")
    click.echo(f"  Amount: {sale.amount:,.2f}")
    click.echo(f"  Date: {sale.datetime:%Y-%m-%d %H:%M}")


def register_commands(cli):
    """Register sale command with main CLI."""
    cli.add_command(record_sale)
