"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from dataclasses import asdict
from decimal import Decimal

from saloonlite.domain import entities as domain
from saloonlite.database.models import (
    Service as ORMService,
    Transaction as ORMTransaction,
    DailySummary as ORMDailySummary,
    Preference as ORMPreference,
    Setting as ORMSetting,
    PinSetting as ORMPinSetting,
)


def service_to_domain(orm_service: ORMService) -> domain.Service:
    """Convert SQLAlchemy Service model to domain Service entity."""
    return domain.Service(
        id=orm_service.id,
        name=orm_service.name,
        price=Decimal(orm_service.price),
        is_active=orm_service.is_active,
        created_at=orm_service.created_at,
        updated_at=orm_service.updated_at,
    )


def service_to_orm(service: domain.Service) -> ORMService:
    """Convert domain Service entity to a new SQLAlchemy Service model."""
    return ORMService(
        id=service.id,
        name=service.name,
        price=service.price,
        is_active=service.is_active,
        created_at=service.created_at,
        updated_at=service.updated_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to a domain Sale or Expense."""
    if orm_transaction.type == domain.TransactionType.SALE.value:
        return domain.Sale(
            id=orm_transaction.id,
            amount=Decimal(orm_transaction.amount),
            datetime=orm_transaction.datetime,
            date_key=orm_transaction.date_key,
            customer=orm_transaction.customer or "",
            service=orm_transaction.service or "",
        )
    return domain.Expense(
        id=orm_transaction.id,
        amount=Decimal(orm_transaction.amount),
        datetime=orm_transaction.datetime,
        date_key=orm_transaction.date_key,
        category=orm_transaction.category or "",
        vendor=orm_transaction.service or "",
        description=orm_transaction.description or "",
        payment_method=domain.PaymentMethod.parse(orm_transaction.payment_method or "cash"),
    )


def transaction_to_orm(transaction: domain.Transaction) -> ORMTransaction:
    """Convert a domain Sale or Expense to a new SQLAlchemy Transaction model."""
    orm_transaction = ORMTransaction(
        id=transaction.id,
        type=transaction.type.value,
        amount=transaction.amount,
        datetime=transaction.datetime,
        date_key=transaction.date_key,
    )
    if isinstance(transaction, domain.Sale):
        orm_transaction.customer = transaction.customer
        orm_transaction.service = transaction.service
    elif isinstance(transaction, domain.Expense):
        orm_transaction.service = transaction.vendor
        orm_transaction.category = transaction.category
        orm_transaction.description = transaction.description
        orm_transaction.payment_method = transaction.payment_method.value
    return orm_transaction


def summary_to_domain(orm_summary: ORMDailySummary) -> domain.DailySummary:
    """Convert SQLAlchemy DailySummary model to domain DailySummary entity."""
    return domain.DailySummary(
        date_key=orm_summary.date_key,
        date=orm_summary.date,
        total_sales=Decimal(orm_summary.total_sales),
        total_expenses=Decimal(orm_summary.total_expenses),
        net_profit=Decimal(orm_summary.net_profit),
        transaction_count=orm_summary.transaction_count,
    )


def summary_to_orm(summary: domain.DailySummary) -> ORMDailySummary:
    """Convert domain DailySummary entity to a new SQLAlchemy model."""
    return ORMDailySummary(
        date_key=summary.date_key,
        date=summary.date,
        total_sales=summary.total_sales,
        total_expenses=summary.total_expenses,
        net_profit=summary.net_profit,
        transaction_count=summary.transaction_count,
    )


def preferences_to_domain(orm_preference: ORMPreference) -> domain.UserPreferences:
    """Convert a stored preferences document to a UserPreferences entity."""
    data = dict(orm_preference.data)
    data["default_categories"] = tuple(data.get("default_categories", ()))
    return domain.UserPreferences(id=orm_preference.id, **_known_fields(domain.UserPreferences, data))


def preferences_to_orm(preferences: domain.UserPreferences) -> ORMPreference:
    """Convert a UserPreferences entity to a stored document."""
    data = asdict(preferences)
    data.pop("id")
    data["default_categories"] = list(preferences.default_categories)
    return ORMPreference(id=preferences.id, data=data)


def app_settings_to_domain(orm_setting: ORMSetting) -> domain.AppSettings:
    """Convert a stored settings document to an AppSettings entity."""
    return domain.AppSettings(id=orm_setting.id, **_known_fields(domain.AppSettings, orm_setting.data))


def app_settings_to_orm(settings: domain.AppSettings) -> ORMSetting:
    """Convert an AppSettings entity to a stored document."""
    data = asdict(settings)
    data.pop("id")
    return ORMSetting(id=settings.id, data=data)


def pin_settings_to_domain(orm_pin: ORMPinSetting) -> domain.PinSettings:
    """Convert SQLAlchemy PinSetting model to domain PinSettings entity."""
    return domain.PinSettings(
        pin=orm_pin.pin,
        is_enabled=orm_pin.is_enabled,
        created_at=orm_pin.created_at,
        last_modified=orm_pin.last_modified,
        failed_attempts=orm_pin.failed_attempts,
        last_attempt=orm_pin.last_attempt,
        lock_until=orm_pin.lock_until,
        is_locked=orm_pin.is_locked,
    )


def pin_settings_to_orm(pin_settings: domain.PinSettings, key: str) -> ORMPinSetting:
    """Convert domain PinSettings entity to a new SQLAlchemy model."""
    return ORMPinSetting(
        id=key,
        pin=pin_settings.pin,
        is_enabled=pin_settings.is_enabled,
        created_at=pin_settings.created_at,
        last_modified=pin_settings.last_modified,
        failed_attempts=pin_settings.failed_attempts,
        last_attempt=pin_settings.last_attempt,
        lock_until=pin_settings.lock_until,
        is_locked=pin_settings.is_locked,
    )


def _known_fields(entity_cls, data: dict) -> dict:
    """Drop keys the entity does not declare, so older documents still load."""
    names = set(entity_cls.__dataclass_fields__) - {"id"}
    return {key: value for key, value in data.items() if key in names}
