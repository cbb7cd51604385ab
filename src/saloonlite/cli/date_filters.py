"""CLI helpers for date range resolution."""

from datetime import date

import click

from saloonlite.utils.date_parser import get_date_range, parse_date

PERIOD_FLAGS = (
    ("--today", "Filter to today"),
    ("--this-week", "Filter to current week (from Sunday)"),
    ("--this-month", "Filter to current month"),
    ("--this-year", "Filter to current year"),
    ("--last-week", "Filter to previous week"),
    ("--last-month", "Filter to previous month"),
    ("--last-year", "Filter to previous year"),
    ("--all", "Include everything recorded"),
)


def period_options(func):
    """Attach the --today/--this-week/... period flags to a command."""
    for flag, help_text in reversed(PERIOD_FLAGS):
        func = click.option(flag, is_flag=True, help=help_text)(func)
    return func


def collect_period_flags(kwargs: dict) -> dict[str, bool]:
    """Pop the period flags added by period_options, keyed by period name."""
    return {flag[2:]: kwargs.pop(flag[2:].replace("-", "_")) for flag, _ in PERIOD_FLAGS}


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
    today: date | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates.

    Period flags are resolved relative to today, or the given reference day.
    """
    period_count = sum(1 for is_set in period_flags.values() if is_set)

    if period_count > 1:
        click.echo(
            "Error: Only one period option (--today, --this-week, --this-month, --this-year, --last-week, --last-month, --last-year, --all) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if period_count > 0 and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-week, --this-month, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    start = None
    end = None

    if period_count == 1:
        for period, is_set in period_flags.items():
            if is_set:
                start, end = get_date_range(period, today=today)
                break
    else:
        if start_date:
            try:
                start = parse_date(start_date)
            except ValueError as e:
                click.echo(f"Error: Invalid start date: {e}", err=True)
                ctx.exit(1)

        if end_date:
            try:
                end = parse_date(end_date)
            except ValueError as e:
                click.echo(f"Error: Invalid end date: {e}", err=True)
                ctx.exit(1)

        if start is None and end is None and default_range is not None:
            start, end = default_range

    return start, end
