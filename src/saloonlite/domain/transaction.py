"""Transaction domain service."""

import uuid
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

from saloonlite.database.base import Database
from saloonlite.domain.entities import (
    Expense,
    PaymentMethod,
    Sale,
    Transaction as TransactionEntity,
    TransactionType,
)
from saloonlite.domain.errors import ValidationError, invalid_amount
from saloonlite.utils.date_parser import date_key, day_bounds, to_local_naive

CENT = Decimal("0.01")


class TransactionService:
    """Service for recording and querying sales and expenses."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def record_sale(
        self,
        amount: Decimal,
        customer: str,
        service: str,
        when: Optional[datetime] = None,
    ) -> Sale:
        """Record a sale.

        Args:
            amount: Amount charged, must be positive
            customer: Customer name
            service: Service name (free text, usually from the catalog)
            when: Time of the sale, defaults to now

        Returns:
            The stored Sale

        Raises:
            ValidationError: If amount, customer or service is invalid
        """
        customer = (customer or "").strip()
        service = (service or "").strip()
        amount = self._validate_amount(amount)
        if not customer:
            raise ValidationError("Customer name is required")
        if not service:
            raise ValidationError("Service is required")

        occurred_at = self._occurred_at(when)
        sale = Sale(
            id=self._new_id(),
            amount=amount,
            datetime=occurred_at,
            date_key=date_key(occurred_at),
            customer=customer,
            service=service,
        )
        self.db.add_transaction(sale)
        return sale

    def record_expense(
        self,
        amount: Decimal,
        category: str,
        vendor: str = "",
        description: str = "",
        payment_method: PaymentMethod = PaymentMethod.CASH,
        when: Optional[datetime] = None,
    ) -> Expense:
        """Record an expense.

        Args:
            amount: Amount spent, must be positive
            category: Expense category (e.g. "Supplies")
            vendor: Optional vendor or supplier
            description: Optional description
            payment_method: How it was paid
            when: Time of the expense, defaults to now

        Returns:
            The stored Expense

        Raises:
            ValidationError: If amount or category is invalid
        """
        category = (category or "").strip()
        amount = self._validate_amount(amount)
        if not category:
            raise ValidationError("Expense category is required")

        occurred_at = self._occurred_at(when)
        expense = Expense(
            id=self._new_id(),
            amount=amount,
            datetime=occurred_at,
            date_key=date_key(occurred_at),
            category=category,
            vendor=(vendor or "").strip(),
            description=(description or "").strip(),
            payment_method=PaymentMethod(payment_method),
        )
        self.db.add_transaction(expense)
        return expense

    def get_transaction(self, transaction_id: str) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def transactions_by_date(
        self, day: date, transaction_type: Optional[TransactionType] = None
    ) -> list[TransactionEntity]:
        """All transactions whose date key is the given day, newest first."""
        return self.db.list_transactions(date_key=date_key(day), transaction_type=transaction_type)

    def transactions_by_range(
        self,
        start: date,
        end: date,
        transaction_type: Optional[TransactionType] = None,
    ) -> list[TransactionEntity]:
        """Transactions with datetime in [start, end], newest first.

        Plain dates cover their whole day. An inverted range matches nothing.
        """
        lower, upper = day_bounds(start, end)
        if lower > upper:
            return []
        return self.db.list_transactions(start=lower, end=upper, transaction_type=transaction_type)

    def today_transactions(self, today: Optional[date] = None) -> list[TransactionEntity]:
        """Transactions recorded for today."""
        return self.transactions_by_date(today or date.today())

    def list_transactions(self, transaction_type: Optional[TransactionType] = None) -> list[TransactionEntity]:
        """Every transaction, newest first."""
        return self.db.list_transactions(transaction_type=transaction_type)

    def _validate_amount(self, amount) -> Decimal:
        """Return the amount as a cent-rounded Decimal, rejecting non-positive values."""
        try:
            value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
        except InvalidOperation:
            raise ValidationError(invalid_amount(amount))
        if not value.is_finite():
            raise ValidationError(invalid_amount(amount))
        value = value.quantize(CENT, rounding=ROUND_HALF_UP)
        if value <= 0:
            raise ValidationError(invalid_amount(amount))
        return value

    def _occurred_at(self, when: Optional[datetime]) -> datetime:
        return to_local_naive(when) if when is not None else datetime.now()

    def _new_id(self) -> str:
        return uuid.uuid4().hex
