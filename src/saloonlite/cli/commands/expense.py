"""Record expense command."""

import click
from saloonlite.domain.entities import PaymentMethod
from saloonlite.domain.errors import DomainError, StorageError
from saloonlite.domain.transaction import TransactionService
from saloonlite.cli.error_handling import handle_domain_error
from saloonlite.utils.amount_parser import parse_amount
from saloonlite.utils.date_parser import parse_datetime


@click.command("expense")
@click.option("--category", required=True, help="Expense category (e.g., 'Supplies', 'Rent')")
@click.option("--amount", required=True, help="Amount spent (e.g., 120 or 'GHS 120.00')")
@click.option("--vendor", default="", help="Vendor or supplier")
@click.option("--description", default="", help="What the money was spent on")
@click.option(
    "--payment-method",
    type=click.Choice([m.value for m in PaymentMethod], case_sensitive=False),
    default=PaymentMethod.CASH.value,
    show_default=True,
    help="How the expense was paid",
)
@click.option(
    "--when",
    default="now",
    show_default=True,
    help="Time of the expense (e.g., '2024-01-15 14:30', 'now')",
)
@click.pass_context
def record_expense(
    ctx,
    category: str,
    amount: str,
    vendor: str,
    description: str,
    payment_method: str,
    when: str,
):
    """Record an expense.

    Examples:
        saloonlite expense --category Supplies --amount 120 --vendor "Beauty Depot"
        saloonlite expense --category Rent --amount 800 --payment-method bank-transfer
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    try:
        occurred_at = parse_datetime(when)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        expense_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        expense = service.record_expense(
            amount=expense_amount,
            category=category,
            vendor=vendor,
            description=description,
            payment_method=PaymentMethod.parse(payment_method),
            when=occurred_at,
        )
    except (DomainError, StorageError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Recorded expense {expense.id}")
    click.echo(f"  Category: {expense.category}")
    click.echo(f"  Amount: {expense.amount:,.2f}")
    click.echo(f"  Payment: {expense.payment_method.value}")
    if expense.vendor:
        click.echo(f"  Vendor: {expense.vendor}")
    if expense.description:
        click.echo(f"  Description: {expense.description}")
    click.echo(f"  Date: {expense.datetime:%Y-%m-%d %H:%M}")


def register_commands(cli):
    """Register expense command with main CLI."""
    cli.add_command(record_expense)
