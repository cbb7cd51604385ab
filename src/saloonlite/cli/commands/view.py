"""Transaction viewing commands."""

import click
from datetime import date
from saloonlite.domain.entities import Expense, Sale, TransactionType
from saloonlite.domain.transaction import TransactionService
from saloonlite.cli.date_filters import collect_period_flags, period_options, resolve_cli_date_range


def describe_transaction(txn) -> str:
    """One-line description of what a transaction was for."""
    if isinstance(txn, Sale):
        return f"{txn.service} - {txn.customer}"
    if isinstance(txn, Expense):
        return f"{txn.category} - {txn.vendor}" if txn.vendor else txn.category
    return ""


@click.command("view")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.option(
    "--type",
    "transaction_type",
    type=click.Choice([t.value for t in TransactionType], case_sensitive=False),
    help="Show only sales or only expenses",
)
@click.option("--verbose", "-v", is_flag=True, help="Show all fields of each transaction")
@click.pass_context
def view_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    transaction_type: str | None,
    verbose: bool,
    **period_kwargs,
):
    """View transactions, newest first (today's by default)."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(period_kwargs),
    )
    today = date.today()
    if start is None and end is None:
        start = end = today
    start = start or end
    end = end or today

    txn_type = TransactionType(transaction_type.lower()) if transaction_type else None
    transactions = service.transactions_by_range(start, end, transaction_type=txn_type)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")

    if verbose:
        click.echo("=" * 100)
        for txn in transactions:
            click.echo(f"\nTransaction ID: {txn.id}")
            click.echo(f"  Type: {txn.type.value}")
            click.echo(f"  Date: {txn.datetime:%Y-%m-%d %H:%M}")
            click.echo(f"  Amount: {txn.amount:,.2f}")
            if isinstance(txn, Sale):
                click.echo(f"  Customer: {txn.customer}")
                click.echo(f"  Service: {txn.service}")
            else:
                click.echo(f"  Category: {txn.category}")
                if txn.vendor:
                    click.echo(f"  Vendor: {txn.vendor}")
                if txn.description:
                    click.echo(f"  Description: {txn.description}")
                click.echo(f"  Payment: {txn.payment_method.value}")
            click.echo("-" * 100)
    else:
        click.echo("-" * 100)
        click.echo(f"{'Date':<17} {'Type':<8} {'Amount':>12}  {'Details':<60}")
        click.echo("-" * 100)
        for txn in transactions:
            amount_str = f"{txn.amount:,.2f}"
            details = describe_transaction(txn)[:60]
            click.echo(f"{txn.datetime:%Y-%m-%d %H:%M} {txn.type.value:<8} {amount_str:>12}  {details:<60}")


def register_commands(cli):
    """Register view command with main CLI."""
    cli.add_command(view_transactions)
