"""Daily summary and sales history commands."""

import click
from datetime import date
from saloonlite.domain.summary import SummaryService
from saloonlite.utils.date_parser import get_date_range, parse_date
from saloonlite.cli.date_filters import collect_period_flags, period_options, resolve_cli_date_range


def _money(value) -> str:
    return f"{value:,.2f}"


@click.command("summary")
@click.option("--date", "day", help="Day to summarize (YYYY-MM-DD or relative like 'yesterday'); defaults to today")
@click.pass_context
def summary(ctx, day: str | None):
    """Show the totals for one day."""
    db = ctx.obj["db"]
    service = SummaryService(db)

    target = date.today()
    if day:
        try:
            target = parse_date(day)
        except ValueError as e:
            click.echo(f"Error: Invalid date: {e}", err=True)
            ctx.exit(1)

    daily = service.get_daily_summary(target)

    click.echo(f"\nSummary for {daily.date_key}:")
    click.echo("-" * 40)
    click.echo(f"{'Sales':<20} {_money(daily.total_sales):>19}")
    click.echo(f"{'Expenses':<20} {_money(daily.total_expenses):>19}")
    click.echo("-" * 40)
    click.echo(f"{'Net profit':<20} {_money(daily.net_profit):>19}")
    click.echo(f"{'Transactions':<20} {daily.transaction_count:>19}")


@click.command("history")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.pass_context
def history(ctx, start_date: str | None, end_date: str | None, **period_kwargs):
    """Show daily summaries for a period, newest first (this week by default)."""
    db = ctx.obj["db"]
    service = SummaryService(db)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(period_kwargs),
        default_range=get_date_range("this-week"),
    )
    start = start or get_date_range("all")[0]
    end = end or date.today()

    summaries = service.summaries_by_range(start, end)
    if not summaries:
        click.echo("No sales history found.")
        return

    click.echo(f"\nSales history {start} to {end}:")
    click.echo("-" * 80)
    click.echo(f"{'Date':<12} {'Sales':>15} {'Expenses':>15} {'Net profit':>15} {'Transactions':>14}")
    click.echo("-" * 80)
    for s in summaries:
        click.echo(
            f"{s.date_key:<12} {_money(s.total_sales):>15} {_money(s.total_expenses):>15} "
            f"{_money(s.net_profit):>15} {s.transaction_count:>14}"
        )

    totals = service.period_totals(summaries)
    click.echo("-" * 80)
    click.echo(
        f"{'TOTAL':<12} {_money(totals.total_revenue):>15} {_money(totals.total_expenses):>15} "
        f"{_money(totals.total_profit):>15} {totals.total_transactions:>14}"
    )

    best = service.best_day(summaries)
    if best is not None and best.total_sales > 0:
        click.echo(f"\nBest day: {best.date_key} ({_money(best.total_sales)} in sales)")


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(summary)
    cli.add_command(history)
