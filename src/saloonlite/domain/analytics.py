"""Dashboard analytics.

Everything except AnalyticsService is a pure function of transactions,
summaries and services that were already fetched from the store.
"""

from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from saloonlite.database.base import Database
from saloonlite.domain.catalog import normalize_service_name
from saloonlite.domain.entities import (
    DailySummary,
    DashboardMetrics,
    PerformanceTrend,
    Sale,
    Service,
    ServiceDistribution,
    Transaction,
)
from saloonlite.utils.date_parser import date_key

OTHER_SERVICE = "Other"

WEEKDAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

# (label, first hour after the bucket); hours before 9 all count as morning
HOUR_BUCKETS = (
    ("6-9AM", 9),
    ("9-11AM", 11),
    ("11AM-2PM", 14),
    ("2-4PM", 16),
    ("4-6PM", 18),
    ("6PM+", 24),
)

DASHBOARD_WINDOW_DAYS = 30


def _percentage(part: float, whole: float) -> float:
    return part / whole * 100 if whole else 0.0


def iso_week_key(day: date) -> str:
    """ISO week of a day as 'YYYY-Www' (Monday weeks, Thursday rule for the year)."""
    year, week, _ = day.isocalendar()
    return f"{year}-W{week:02d}"


def group_summaries_by_week(summaries: Sequence[DailySummary]) -> dict[str, dict[str, float]]:
    """Sum sales, expenses and counts per ISO week."""
    weekly: dict[str, dict[str, float]] = defaultdict(
        lambda: {"total_sales": 0.0, "total_expenses": 0.0, "transaction_count": 0}
    )
    for summary in summaries:
        week = weekly[iso_week_key(summary.date)]
        week["total_sales"] += float(summary.total_sales)
        week["total_expenses"] += float(summary.total_expenses)
        week["transaction_count"] += summary.transaction_count
    return dict(weekly)


def growth_percentage(current: float, previous: float) -> float:
    """Relative change from previous to current; 0 when previous is 0."""
    return (current - previous) / previous * 100 if previous else 0.0


def consistency_score(summaries: Sequence[DailySummary]) -> float:
    """Percentage of the given days that had any sales."""
    if not summaries:
        return 0.0
    days_with_sales = sum(1 for s in summaries if s.total_sales > 0)
    return days_with_sales / len(summaries) * 100


def consistency_level(score: float) -> str:
    """Label a consistency score as High, Medium or Low."""
    if score >= 80:
        return "High"
    if score >= 60:
        return "Medium"
    return "Low"


def performance_trend(summaries: Sequence[DailySummary]) -> PerformanceTrend:
    """Compare the two most recent ISO weeks and score consistency.

    Revenue and growth stay 0 unless at least two weeks are present.
    """
    if not summaries:
        return PerformanceTrend()

    weekly = group_summaries_by_week(summaries)
    weeks = sorted(weekly)
    current_revenue = previous_revenue = growth = 0.0
    if len(weeks) >= 2:
        current_revenue = weekly[weeks[-1]]["total_sales"]
        previous_revenue = weekly[weeks[-2]]["total_sales"]
        growth = growth_percentage(current_revenue, previous_revenue)

    return PerformanceTrend(
        current_week_revenue=current_revenue,
        previous_week_revenue=previous_revenue,
        growth_percentage=growth,
        consistency_score=consistency_score(summaries),
    )


def _sales(transactions: Sequence[Transaction]) -> list[Sale]:
    return [t for t in transactions if isinstance(t, Sale)]


def service_distribution(
    transactions: Sequence[Transaction], services: Sequence[Service]
) -> list[ServiceDistribution]:
    """Share of sale revenue per active service, plus an 'Other' bucket.

    Sale service names match catalog names ignoring case and surrounding
    spaces; unknown or empty names go to 'Other'. Buckets without sales are
    left out. Sorted by percentage, highest first.
    """
    buckets: dict[str, dict] = {}
    for service in services:
        if service.is_active:
            key = normalize_service_name(service.name)
            buckets.setdefault(key, {"name": service.name.strip(), "revenue": 0.0, "count": 0})
    other_key = normalize_service_name(OTHER_SERVICE)
    buckets.setdefault(other_key, {"name": OTHER_SERVICE, "revenue": 0.0, "count": 0})

    sales = _sales(transactions)
    for sale in sales:
        key = normalize_service_name(sale.service)
        bucket = buckets.get(key) or buckets[other_key]
        bucket["revenue"] += float(sale.amount)
        bucket["count"] += 1

    total_revenue = sum(float(sale.amount) for sale in sales)
    rows = [
        ServiceDistribution(
            service=bucket["name"],
            revenue=bucket["revenue"],
            percentage=_percentage(bucket["revenue"], total_revenue),
            average_revenue=bucket["revenue"] / bucket["count"],
            transaction_count=bucket["count"],
        )
        for bucket in buckets.values()
        if bucket["count"] > 0
    ]
    return sorted(rows, key=lambda row: row.percentage, reverse=True)


def average_service_value(transactions: Sequence[Transaction]) -> float:
    """Mean sale amount; 0 without sales."""
    sales = _sales(transactions)
    if not sales:
        return 0.0
    return sum(float(sale.amount) for sale in sales) / len(sales)


def weekday_name(day: date) -> str:
    """Weekday name with Sunday first, as used by the dashboard."""
    return WEEKDAYS[(day.weekday() + 1) % 7]


def sales_by_weekday(summaries: Sequence[DailySummary]) -> dict[str, float]:
    """Total sales per weekday name, Sunday first."""
    performance = {day: 0.0 for day in WEEKDAYS}
    for summary in summaries:
        performance[weekday_name(summary.date)] += float(summary.total_sales)
    return performance


def best_performing_day(summaries: Sequence[DailySummary]) -> Optional[str]:
    """Weekday with the highest total sales; earlier weekdays win ties.

    Returns None when there are no summaries.
    """
    if not summaries:
        return None
    performance = sales_by_weekday(summaries)
    best = WEEKDAYS[0]
    for day in WEEKDAYS:
        if performance[day] > performance[best]:
            best = day
    return best


def hour_bucket(hour: int) -> str:
    """Label of the peak-hour bucket an hour falls in."""
    for label, upper in HOUR_BUCKETS:
        if hour < upper:
            return label
    return HOUR_BUCKETS[-1][0]


def peak_hours(transactions: Sequence[Transaction], top: int = 2) -> list[str]:
    """The busiest hour buckets by transaction count.

    Ties keep bucket order; empty buckets are never reported.
    """
    counts = {label: 0 for label, _ in HOUR_BUCKETS}
    for transaction in transactions:
        counts[hour_bucket(transaction.datetime.hour)] += 1
    ranked = sorted((label for label in counts if counts[label] > 0), key=lambda label: -counts[label])
    return ranked[:top]


def expense_ratio(total_revenue: float, total_expenses: float) -> float:
    """Expenses as a percentage of revenue; 0 without revenue."""
    return _percentage(total_expenses, total_revenue)


def profit_margin(total_revenue: float, total_expenses: float) -> float:
    """Profit as a percentage of revenue; 0 without revenue."""
    return _percentage(total_revenue - total_expenses, total_revenue)


def daily_transaction_average(summaries: Sequence[DailySummary]) -> float:
    """Mean transactions per day over the given summaries."""
    if not summaries:
        return 0.0
    return sum(s.transaction_count for s in summaries) / len(summaries)


def monthly_growth(summaries: Sequence[DailySummary]) -> Optional[float]:
    """Growth from the oldest seven to the newest seven summaries.

    Returns None with fewer than seven summaries. The two groups overlap when
    there are fewer than fourteen.
    """
    if len(summaries) < 7:
        return None
    ordered = sorted(summaries, key=lambda s: s.date_key)
    first_week = sum(float(s.total_sales) for s in ordered[:7])
    last_week = sum(float(s.total_sales) for s in ordered[-7:])
    return growth_percentage(last_week, first_week)


def build_dashboard_metrics(
    transactions: Sequence[Transaction],
    summaries: Sequence[DailySummary],
    services: Sequence[Service],
) -> DashboardMetrics:
    """Compute every dashboard figure for one window of data."""
    trend = performance_trend(summaries)
    total_revenue = sum(float(s.total_sales) for s in summaries)
    total_expenses = sum(float(s.total_expenses) for s in summaries)

    return DashboardMetrics(
        weekly_growth=trend.growth_percentage,
        revenue_consistency=trend.consistency_score,
        best_performing_day=best_performing_day(summaries),
        average_service_value=average_service_value(transactions),
        service_distribution=tuple(service_distribution(transactions, services)),
        peak_hours=tuple(peak_hours(transactions)) if summaries else (),
        daily_transaction_average=daily_transaction_average(summaries),
        expense_ratio=expense_ratio(total_revenue, total_expenses),
        profit_margin=profit_margin(total_revenue, total_expenses),
        monthly_growth=monthly_growth(summaries),
        performance_trend=trend,
    )


class AnalyticsService:
    """Loads a window of data from the store and computes dashboard metrics."""

    def __init__(self, db: Database):
        """Initialize analytics service.

        Args:
            db: Database instance
        """
        self.db = db

    def calculate_dashboard_metrics(
        self, today: Optional[date] = None, days: int = DASHBOARD_WINDOW_DAYS
    ) -> DashboardMetrics:
        """Metrics for the last `days` days up to and including today."""
        end = today or date.today()
        start = end - timedelta(days=days)

        transactions = self.db.list_transactions(
            start=datetime.combine(start, datetime.min.time()),
            end=datetime.combine(end, datetime.max.time()),
        )
        summaries = self.db.list_daily_summaries(date_key(start), date_key(end))
        services = self.db.list_services()
        return build_dashboard_metrics(transactions, summaries, services)
