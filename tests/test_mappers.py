"""Tests for database mappers."""

import pytest
from datetime import datetime, date
from decimal import Decimal

from saloonlite.database.models import (
    Transaction as ORMTransaction,
    DailySummary as ORMDailySummary,
    Preference as ORMPreference,
)
from saloonlite.database.mappers import (
    preferences_to_domain,
    preferences_to_orm,
    summary_to_domain,
    transaction_to_domain,
    transaction_to_orm,
)
from saloonlite.domain.entities import (
    DailySummary,
    Expense,
    PaymentMethod,
    Sale,
    UserPreferences,
)

WHEN = datetime(2024, 1, 15, 10, 30)


class TestTransactionMapper:
    """Tests for Transaction mapper."""

    def test_sale_to_domain(self):
        orm_transaction = ORMTransaction(
            id="s1",
            type="sale",
            amount=Decimal("30.00"),
            datetime=WHEN,
            date_key="2024-01-15",
            customer="Kofi",
            service="Haircut",
        )

        sale = transaction_to_domain(orm_transaction)

        assert isinstance(sale, Sale)
        assert sale.customer == "Kofi"
        assert sale.service == "Haircut"
        assert sale.amount == Decimal("30.00")

    def test_expense_vendor_lives_in_service_column(self):
        expense = Expense(
            id="e1",
            amount=Decimal("12.00"),
            datetime=WHEN,
            date_key="2024-01-15",
            category="Supplies",
            vendor="Beauty Depot",
            payment_method=PaymentMethod.CREDIT_CARD,
        )

        orm_transaction = transaction_to_orm(expense)

        assert orm_transaction.type == "expense"
        assert orm_transaction.service == "Beauty Depot"
        assert orm_transaction.customer is None
        assert orm_transaction.payment_method == "credit-card"
        assert transaction_to_domain(orm_transaction) == expense

    def test_expense_with_legacy_payment_spelling(self):
        orm_transaction = ORMTransaction(
            id="e1",
            type="expense",
            amount=Decimal("5"),
            datetime=WHEN,
            date_key="2024-01-15",
            category="Rent",
            payment_method="bank transfer",
        )

        expense = transaction_to_domain(orm_transaction)

        assert expense.payment_method == PaymentMethod.BANK_TRANSFER
        assert expense.vendor == ""


class TestSummaryMapper:
    def test_summary_to_domain(self):
        orm_summary = ORMDailySummary(
            date_key="2024-01-15",
            date=date(2024, 1, 15),
            total_sales=Decimal("50"),
            total_expenses=Decimal("20"),
            net_profit=Decimal("30"),
            transaction_count=3,
        )

        summary = summary_to_domain(orm_summary)

        assert isinstance(summary, DailySummary)
        assert summary.net_profit == summary.total_sales - summary.total_expenses
        assert summary.transaction_count == 3


class TestPreferencesMapper:
    def test_round_trip(self):
        preferences = UserPreferences(theme="dark", default_categories=("Fade", "Shave"))

        orm_preference = preferences_to_orm(preferences)

        assert orm_preference.id == "default"
        assert orm_preference.data["default_categories"] == ["Fade", "Shave"]
        assert preferences_to_domain(orm_preference) == preferences

    def test_unknown_stored_keys_are_ignored(self):
        orm_preference = ORMPreference(id="default", data={"theme": "dark", "fontSize": 14})

        preferences = preferences_to_domain(orm_preference)

        assert preferences.theme == "dark"
        assert preferences.currency == "GHS"
