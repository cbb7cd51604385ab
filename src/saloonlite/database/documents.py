"""Backup document codecs.

Records are written with the camelCase field names the mobile app uses, so
backups can move between the two. Decoders validate every field and raise
ImportFormatError for anything malformed.
"""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from dateutil import parser as date_parser

from saloonlite.domain import entities as domain
from saloonlite.domain.errors import ImportFormatError
from saloonlite.utils.date_parser import date_key, to_local_naive

BACKUP_VERSION = "1.0"
BACKUP_APP = "SaloonLite"

DATE_KEY_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def service_to_document(service: domain.Service) -> dict[str, Any]:
    return {
        "id": service.id,
        "name": service.name,
        "price": float(service.price),
        "isActive": service.is_active,
        "createdAt": service.created_at.isoformat(),
        "updatedAt": service.updated_at.isoformat(),
    }


def transaction_to_document(transaction: domain.Transaction) -> dict[str, Any]:
    document = {
        "id": transaction.id,
        "type": transaction.type.value,
        "amount": float(transaction.amount),
        "datetime": transaction.datetime.isoformat(),
        "dateKey": transaction.date_key,
    }
    if isinstance(transaction, domain.Sale):
        document["customer"] = transaction.customer
        document["service"] = transaction.service
    elif isinstance(transaction, domain.Expense):
        document["category"] = transaction.category
        document["service"] = transaction.vendor
        document["description"] = transaction.description
        document["paymentMethod"] = transaction.payment_method.value
    return document


def summary_to_document(summary: domain.DailySummary) -> dict[str, Any]:
    return {
        "dateKey": summary.date_key,
        "date": summary.date.isoformat(),
        "totalSales": float(summary.total_sales),
        "totalExpenses": float(summary.total_expenses),
        "netProfit": float(summary.net_profit),
        "transactionCount": summary.transaction_count,
    }


def preferences_to_document(preferences: domain.UserPreferences) -> dict[str, Any]:
    return {
        "id": preferences.id,
        "theme": preferences.theme,
        "currency": preferences.currency,
        "businessName": preferences.business_name,
        "businessType": preferences.business_type,
        "defaultCategories": list(preferences.default_categories),
        "notificationEnabled": preferences.notification_enabled,
    }


def app_settings_to_document(settings: domain.AppSettings) -> dict[str, Any]:
    return {
        "id": settings.id,
        "version": settings.version,
        "firstLaunch": settings.first_launch,
        "onboardingCompleted": settings.onboarding_completed,
        "dataExportFormat": settings.data_export_format,
    }


def service_from_document(document: Any) -> domain.Service:
    document = _require_object(document, "service")
    created_at = _datetime(document, "createdAt")
    return domain.Service(
        id=_string(document, "id"),
        name=_string(document, "name"),
        price=_amount(document, "price"),
        is_active=_bool(document, "isActive", default=True),
        created_at=created_at,
        updated_at=_datetime(document, "updatedAt") if "updatedAt" in document else created_at,
    )


def transaction_from_document(document: Any) -> domain.Transaction:
    document = _require_object(document, "transaction")
    when = _datetime(document, "datetime")
    common = {
        "id": _string(document, "id"),
        "amount": _amount(document, "amount"),
        "datetime": when,
        "date_key": _date_key(document, "dateKey") if "dateKey" in document else date_key(when),
    }

    kind = document.get("type")
    if kind == domain.TransactionType.SALE.value:
        return domain.Sale(
            customer=_string(document, "customer", default=""),
            service=_string(document, "service", default=""),
            **common,
        )
    if kind == domain.TransactionType.EXPENSE.value:
        method = _string(document, "paymentMethod", default="cash")
        try:
            payment_method = domain.PaymentMethod.parse(method)
        except ValueError:
            raise ImportFormatError(f"Unknown payment method '{method}' in transaction {common['id']}")
        return domain.Expense(
            category=_string(document, "category", default=""),
            vendor=_string(document, "service", default=""),
            description=_string(document, "description", default=""),
            payment_method=payment_method,
            **common,
        )
    raise ImportFormatError(f"Unknown transaction type {kind!r} in transaction {common['id']}")


def summary_from_document(document: Any) -> domain.DailySummary:
    document = _require_object(document, "summary")
    key = _date_key(document, "dateKey")
    total_sales = _amount(document, "totalSales")
    total_expenses = _amount(document, "totalExpenses")
    return domain.DailySummary(
        date_key=key,
        date=date.fromisoformat(key),
        total_sales=total_sales,
        total_expenses=total_expenses,
        net_profit=total_sales - total_expenses,
        transaction_count=_int(document, "transactionCount"),
    )


def preferences_from_document(document: Any) -> domain.UserPreferences:
    document = _require_object(document, "preferences")
    defaults = domain.UserPreferences()
    categories = document.get("defaultCategories", list(defaults.default_categories))
    if not isinstance(categories, list) or not all(isinstance(c, str) for c in categories):
        raise ImportFormatError("Field 'defaultCategories' must be a list of strings")
    return domain.UserPreferences(
        id=_string(document, "id", default=defaults.id),
        theme=_string(document, "theme", default=defaults.theme),
        currency=_string(document, "currency", default=defaults.currency),
        business_name=_string(document, "businessName", default=defaults.business_name),
        business_type=_string(document, "businessType", default=defaults.business_type),
        default_categories=tuple(categories),
        notification_enabled=_bool(document, "notificationEnabled", default=defaults.notification_enabled),
    )


def app_settings_from_document(document: Any) -> domain.AppSettings:
    document = _require_object(document, "settings")
    defaults = domain.AppSettings()
    return domain.AppSettings(
        id=_string(document, "id", default=defaults.id),
        version=_string(document, "version", default=defaults.version),
        first_launch=_bool(document, "firstLaunch", default=defaults.first_launch),
        onboarding_completed=_bool(document, "onboardingCompleted", default=defaults.onboarding_completed),
        data_export_format=_string(document, "dataExportFormat", default=defaults.data_export_format),
    )


def _require_object(document: Any, kind: str) -> dict[str, Any]:
    if not isinstance(document, dict):
        raise ImportFormatError(f"Expected {kind} record to be an object, got {type(document).__name__}")
    return document


_MISSING = object()


def _field(document: dict, key: str, default: Any) -> Any:
    value = document.get(key, _MISSING)
    if value is _MISSING or value is None:
        if default is _MISSING:
            raise ImportFormatError(f"Missing required field '{key}'")
        return default
    return value


def _string(document: dict, key: str, default: Any = _MISSING) -> str:
    value = _field(document, key, default)
    if not isinstance(value, str):
        raise ImportFormatError(f"Field '{key}' must be a string")
    return value


def _bool(document: dict, key: str, default: Any = _MISSING) -> bool:
    value = _field(document, key, default)
    if not isinstance(value, bool):
        raise ImportFormatError(f"Field '{key}' must be true or false")
    return value


def _int(document: dict, key: str, default: Any = _MISSING) -> int:
    value = _field(document, key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ImportFormatError(f"Field '{key}' must be a non-negative integer")
    return value


def _amount(document: dict, key: str, default: Any = _MISSING) -> Decimal:
    value = _field(document, key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ImportFormatError(f"Field '{key}' must be a number")
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise ImportFormatError(f"Field '{key}' must be a number, got {value!r}")
    if not amount.is_finite() or amount < 0:
        raise ImportFormatError(f"Field '{key}' must be a non-negative number, got {value!r}")
    return amount


def _datetime(document: dict, key: str, default: Any = _MISSING) -> datetime:
    value = _string(document, key, default)
    try:
        return to_local_naive(date_parser.isoparse(value))
    except (ValueError, OverflowError):
        raise ImportFormatError(f"Field '{key}' is not an ISO-8601 date/time: {value!r}")


def _date_key(document: dict, key: str) -> str:
    value = _string(document, key)
    if not DATE_KEY_PATTERN.fullmatch(value):
        raise ImportFormatError(f"Field '{key}' is not a YYYY-MM-DD date key: {value!r}")
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise ImportFormatError(f"Field '{key}' is not a valid calendar date: {value!r}")
    return value
