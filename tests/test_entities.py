"""Tests for domain entities."""

import dataclasses

import pytest
from datetime import datetime, date
from decimal import Decimal

from saloonlite.domain.entities import (
    DailySummary,
    Expense,
    PaymentMethod,
    Sale,
    TransactionType,
    UserPreferences,
)


class TestTransactions:
    """Tests for Sale and Expense entities."""

    def test_type_is_fixed_per_variant(self):
        sale = Sale(id="s1", amount=Decimal("10"), datetime=datetime(2024, 1, 1, 9), date_key="2024-01-01")
        expense = Expense(id="e1", amount=Decimal("5"), datetime=datetime(2024, 1, 1, 9), date_key="2024-01-01")

        assert sale.type == TransactionType.SALE
        assert expense.type == TransactionType.EXPENSE
        assert expense.payment_method == PaymentMethod.CASH

    def test_transactions_are_immutable(self):
        sale = Sale(id="s1", amount=Decimal("10"), datetime=datetime(2024, 1, 1, 9), date_key="2024-01-01")
        with pytest.raises(dataclasses.FrozenInstanceError):
            sale.amount = Decimal("20")


class TestPaymentMethod:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("cash", PaymentMethod.CASH),
            ("mobile money", PaymentMethod.MOBILE_MONEY),
            ("Bank_Transfer", PaymentMethod.BANK_TRANSFER),
            (" credit-card ", PaymentMethod.CREDIT_CARD),
        ],
    )
    def test_parse(self, text, expected):
        assert PaymentMethod.parse(text) == expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            PaymentMethod.parse("cheque")


class TestDailySummary:
    def test_empty(self):
        summary = DailySummary.empty("2024-06-01")

        assert summary.date == date(2024, 6, 1)
        assert summary.total_sales == Decimal("0")
        assert summary.net_profit == Decimal("0")
        assert summary.transaction_count == 0


def test_preferences_defaults():
    prefs = UserPreferences()
    assert prefs.id == "default"
    assert prefs.business_type == "Barber Shop"
