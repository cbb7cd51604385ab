"""Date parsing utilities."""

from datetime import date, datetime, time, timedelta
from typing import Optional
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

# Start of the "all" period; nothing was recorded before the app existed.
ALL_TIME_START = date(2020, 1, 1)

PERIODS = (
    "today",
    "this-week",
    "this-month",
    "this-year",
    "last-week",
    "last-month",
    "last-year",
    "all",
)


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "tomorrow"

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_datetime(value: str, now: Optional[datetime] = None) -> datetime:
    """Parse a point in time such as "2024-01-15 14:30" or "now".

    A bare date yields midnight of that day. Time zone aware input is converted
    to naive local time.

    Raises:
        ValueError: If the string cannot be parsed
    """
    value = value.strip().lower()
    if value == "now":
        return now or datetime.now()

    try:
        dt = date_parser.parse(value)
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date/time '{value}': {e}")
    return to_local_naive(dt)


def to_local_naive(dt: datetime) -> datetime:
    """Drop time zone information, converting to local time first."""
    if dt.tzinfo is not None:
        return dt.astimezone().replace(tzinfo=None)
    return dt


def date_key(value: date) -> str:
    """Return the YYYY-MM-DD partition key of a date or datetime (local calendar)."""
    if isinstance(value, datetime):
        value = to_local_naive(value).date()
    return value.isoformat()


def day_bounds(start: date, end: date) -> tuple[datetime, datetime]:
    """Expand a date range to the first and last instant of its days.

    Datetimes are passed through untouched.
    """
    lower = start if isinstance(start, datetime) else datetime.combine(start, time.min)
    upper = end if isinstance(end, datetime) else datetime.combine(end, time.max)
    return to_local_naive(lower), to_local_naive(upper)


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a specified period.

    Weeks start on Sunday, matching the sales history screen.

    Args:
        period: One of PERIODS
        today: Reference day, defaults to the current date

    Returns:
        Tuple of (start_date, end_date) for the specified period

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()
    # date.weekday() is Monday=0; shift so Sunday=0
    days_since_sunday = (today.weekday() + 1) % 7

    if period == "today":
        return (today, today)

    elif period == "this-week":
        return (today - timedelta(days=days_since_sunday), today)

    elif period == "this-month":
        return (today.replace(day=1), today)

    elif period == "this-year":
        return (today.replace(month=1, day=1), today)

    elif period == "last-week":
        start_date = today - timedelta(days=days_since_sunday + 7)
        return (start_date, start_date + timedelta(days=6))

    elif period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        end_date = today.replace(day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "last-year":
        start_date = today.replace(month=1, day=1) - relativedelta(years=1)
        end_date = today.replace(month=1, day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "all":
        return (ALL_TIME_START, today)

    else:
        raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
