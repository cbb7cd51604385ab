"""Daily summary domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from saloonlite.database.base import Database
from saloonlite.domain.entities import DailySummary, PeriodTotals
from saloonlite.utils.date_parser import date_key, get_date_range


class SummaryService:
    """Service for reading per-day aggregates.

    Summaries are maintained by the store as transactions are added; this
    service only reads them.
    """

    def __init__(self, db: Database):
        """Initialize summary service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_daily_summary(self, day: date) -> DailySummary:
        """Get the summary for a day, zeroed if nothing was recorded."""
        key = date_key(day)
        return self.db.get_daily_summary(key) or DailySummary.empty(key)

    def get_today_summary(self, today: Optional[date] = None) -> DailySummary:
        """Get today's summary."""
        return self.get_daily_summary(today or date.today())

    def summaries_by_range(self, start: date, end: date) -> list[DailySummary]:
        """Summaries for days in [start, end], newest first.

        Days without transactions have no summary and are not included.
        """
        start_key, end_key = date_key(start), date_key(end)
        if start_key > end_key:
            return []
        return self.db.list_daily_summaries(start_key, end_key)

    def summaries_for_period(self, period: str, today: Optional[date] = None) -> list[DailySummary]:
        """Summaries for a named period such as 'this-week' or 'all'."""
        start, end = get_date_range(period, today=today)
        return self.summaries_by_range(start, end)

    def period_totals(self, summaries: Sequence[DailySummary]) -> PeriodTotals:
        """Add up revenue, expenses, profit and transaction counts."""
        total_revenue = sum((s.total_sales for s in summaries), Decimal("0"))
        total_expenses = sum((s.total_expenses for s in summaries), Decimal("0"))
        total_profit = sum((s.net_profit for s in summaries), Decimal("0"))
        return PeriodTotals(
            total_revenue=total_revenue,
            total_expenses=total_expenses,
            total_profit=total_profit,
            total_transactions=sum(s.transaction_count for s in summaries),
        )

    def best_day(self, summaries: Sequence[DailySummary]) -> Optional[DailySummary]:
        """The summary with the highest sales; the first one wins ties."""
        best = None
        for summary in summaries:
            if best is None or summary.total_sales > best.total_sales:
                best = summary
        return best
