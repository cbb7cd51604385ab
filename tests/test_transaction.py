"""Tests for recording and querying transactions."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from saloonlite.domain.entities import Expense, PaymentMethod, Sale, TransactionType
from saloonlite.domain.errors import ValidationError


class TestRecordSale:
    def test_record_sale_returns_stored_sale(self, transaction_service):
        when = datetime(2024, 1, 15, 14, 30)
        sale = transaction_service.record_sale(Decimal("30"), " Kofi ", " Haircut ", when=when)

        assert isinstance(sale, Sale)
        assert sale.type == TransactionType.SALE
        assert sale.customer == "Kofi"
        assert sale.service == "Haircut"
        assert sale.date_key == "2024-01-15"
        assert transaction_service.get_transaction(sale.id) == sale

    def test_amount_is_rounded_to_cents(self, transaction_service):
        sale = transaction_service.record_sale("12.345", "Kofi", "Haircut", when=datetime(2024, 1, 1, 9, 0))
        assert sale.amount == Decimal("12.35")

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5"), "abc", Decimal("NaN"), "0.001"])
    def test_rejects_invalid_amounts(self, transaction_service, amount):
        with pytest.raises(ValidationError):
            transaction_service.record_sale(amount, "Kofi", "Haircut")

    def test_requires_customer_and_service(self, transaction_service):
        with pytest.raises(ValidationError, match="Customer"):
            transaction_service.record_sale(Decimal("10"), "  ", "Haircut")
        with pytest.raises(ValidationError, match="Service"):
            transaction_service.record_sale(Decimal("10"), "Kofi", "")

    def test_rejected_sale_is_not_stored(self, transaction_service, summary_service):
        with pytest.raises(ValidationError):
            transaction_service.record_sale(Decimal("0"), "Kofi", "Haircut")

        assert transaction_service.list_transactions() == []
        assert summary_service.get_today_summary().transaction_count == 0

    def test_defaults_to_now(self, transaction_service):
        before = datetime.now()
        sale = transaction_service.record_sale(Decimal("10"), "Kofi", "Haircut")
        assert before <= sale.datetime <= datetime.now()

    def test_timezone_aware_time_uses_local_day(self, transaction_service):
        when = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
        sale = transaction_service.record_sale(Decimal("10"), "Kofi", "Haircut", when=when)

        local = when.astimezone().replace(tzinfo=None)
        assert sale.datetime == local
        assert sale.date_key == local.date().isoformat()


class TestRecordExpense:
    def test_record_expense_with_all_fields(self, transaction_service):
        expense = transaction_service.record_expense(
            Decimal("120"),
            "Supplies",
            vendor="Beauty Depot",
            description="Clippers",
            payment_method=PaymentMethod.MOBILE_MONEY,
            when=datetime(2024, 1, 15, 9, 0),
        )

        stored = transaction_service.get_transaction(expense.id)
        assert isinstance(stored, Expense)
        assert stored.vendor == "Beauty Depot"
        assert stored.description == "Clippers"
        assert stored.payment_method == PaymentMethod.MOBILE_MONEY

    def test_payment_method_accepts_string_value(self, transaction_service):
        expense = transaction_service.record_expense(Decimal("5"), "Rent", payment_method="bank-transfer")
        assert expense.payment_method == PaymentMethod.BANK_TRANSFER

    def test_requires_category(self, transaction_service):
        with pytest.raises(ValidationError, match="category"):
            transaction_service.record_expense(Decimal("5"), " ")


class TestTransactionQueries:
    def test_transactions_by_date_newest_first(self, sample_transactions, transaction_service):
        found = transaction_service.transactions_by_date(date(2024, 3, 1))
        assert [t.id for t in found] == [sample_transactions[i].id for i in (2, 1, 0)]

    def test_transactions_by_date_with_type_filter(self, sample_transactions, transaction_service):
        found = transaction_service.transactions_by_date(date(2024, 3, 1), transaction_type=TransactionType.EXPENSE)
        assert [t.category for t in found] == ["Supplies"]

    def test_transactions_by_range_covers_whole_days(self, sample_transactions, transaction_service):
        found = transaction_service.transactions_by_range(date(2024, 3, 1), date(2024, 3, 1))
        assert len(found) == 3

    def test_range_equals_union_of_days(self, transaction_service):
        start = datetime(2024, 4, 1, 6, 0)
        for i in range(20):
            transaction_service.record_sale(Decimal("10"), f"C{i}", "Haircut", when=start + timedelta(hours=7 * i))

        first, last = date(2024, 4, 2), date(2024, 4, 5)
        by_range = transaction_service.transactions_by_range(first, last)
        by_days = []
        day = last
        while day >= first:
            by_days.extend(transaction_service.transactions_by_date(day))
            day -= timedelta(days=1)

        assert [t.id for t in by_range] == [t.id for t in by_days]

    def test_inverted_or_empty_range_returns_nothing(self, sample_transactions, transaction_service):
        assert transaction_service.transactions_by_range(date(2024, 3, 2), date(2024, 3, 1)) == []
        assert transaction_service.transactions_by_range(date(2023, 1, 1), date(2023, 1, 31)) == []

    def test_range_accepts_datetimes(self, sample_transactions, transaction_service):
        found = transaction_service.transactions_by_range(datetime(2024, 3, 1, 12, 0), datetime(2024, 3, 2, 9, 15))
        assert [t.customer if isinstance(t, Sale) else t.category for t in found] == ["Yaw", "Supplies", "Ama"]

    def test_today_transactions(self, transaction_service):
        transaction_service.record_sale(Decimal("10"), "Kofi", "Haircut")
        transaction_service.record_sale(
            Decimal("10"), "Ama", "Haircut", when=datetime.now() - timedelta(days=2)
        )
        assert [t.customer for t in transaction_service.today_transactions()] == ["Kofi"]

    def test_get_missing_transaction_returns_none(self, transaction_service):
        assert transaction_service.get_transaction("missing") is None
