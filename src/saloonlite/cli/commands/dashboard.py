"""Dashboard analytics command."""

import click
from datetime import date
from saloonlite.domain.analytics import DASHBOARD_WINDOW_DAYS, AnalyticsService, consistency_level
from saloonlite.utils.date_parser import parse_date


def _percent(value: float) -> str:
    return f"{value:+.1f}%"


@click.command("dashboard")
@click.option(
    "--days",
    type=click.IntRange(min=1),
    default=DASHBOARD_WINDOW_DAYS,
    show_default=True,
    help="Number of days to analyze",
)
@click.option("--as-of", help="Last day of the window (YYYY-MM-DD); defaults to today")
@click.pass_context
def dashboard(ctx, days: int, as_of: str | None):
    """Show business analytics for recent days."""
    db = ctx.obj["db"]
    service = AnalyticsService(db)

    today = date.today()
    if as_of:
        try:
            today = parse_date(as_of)
        except ValueError as e:
            click.echo(f"Error: Invalid date: {e}", err=True)
            ctx.exit(1)

    metrics = service.calculate_dashboard_metrics(today=today, days=days)
    trend = metrics.performance_trend

    click.echo(f"\nDashboard (last {days} days to {today}):")
    click.echo("-" * 60)
    click.echo(f"{'This week revenue':<30} {trend.current_week_revenue:>29,.2f}")
    click.echo(f"{'Last week revenue':<30} {trend.previous_week_revenue:>29,.2f}")
    click.echo(f"{'Weekly growth':<30} {_percent(metrics.weekly_growth):>29}")
    consistency = f"{metrics.revenue_consistency:.0f}% ({consistency_level(metrics.revenue_consistency)})"
    click.echo(f"{'Revenue consistency':<30} {consistency:>29}")
    monthly = _percent(metrics.monthly_growth) if metrics.monthly_growth is not None else "-"
    click.echo(f"{'Monthly growth':<30} {monthly:>29}")
    click.echo(f"{'Best day':<30} {metrics.best_performing_day or '-':>29}")
    click.echo(f"{'Peak hours':<30} {', '.join(metrics.peak_hours) or '-':>29}")
    click.echo(f"{'Average service value':<30} {metrics.average_service_value:>29,.2f}")
    click.echo(f"{'Transactions per day':<30} {metrics.daily_transaction_average:>29.1f}")
    click.echo(f"{'Expense ratio':<30} {metrics.expense_ratio:>28.1f}%")
    click.echo(f"{'Profit margin':<30} {metrics.profit_margin:>28.1f}%")

    if metrics.service_distribution:
        click.echo("\nService distribution:")
        click.echo("-" * 60)
        click.echo(f"{'Service':<24} {'Share':>8} {'Revenue':>12} {'Avg':>8} {'Count':>5}")
        for row in metrics.service_distribution:
            click.echo(
                f"{row.service[:24]:<24} {row.percentage:>7.1f}% {row.revenue:>12,.2f} "
                f"{row.average_revenue:>8,.2f} {row.transaction_count:>5}"
            )


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)
