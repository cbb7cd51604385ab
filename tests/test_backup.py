"""Tests for backup export and import."""

import json
from datetime import date, datetime
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from saloonlite.database import Collection
from saloonlite.domain.entities import Expense, PaymentMethod
from saloonlite.domain.errors import ImportFormatError, StorageIOError


def _snapshot(db):
    """Every backed-up collection, sorted so order does not matter."""
    return {
        "services": sorted(db.get_all(Collection.SERVICES), key=lambda s: s.id),
        "transactions": sorted(db.get_all(Collection.TRANSACTIONS), key=lambda t: t.id),
        "summaries": sorted(db.get_all(Collection.SUMMARIES), key=lambda s: s.date_key),
        "preferences": db.get_user_preferences(),
        "settings": db.get_app_settings(),
    }


@pytest.fixture
def populated_db(temp_db, sample_services, sample_transactions, preferences_service):
    preferences_service.update_preferences(business_name="Fresh Cuts")
    preferences_service.complete_onboarding()
    return temp_db


def test_export_document_shape(populated_db, backup_service):
    document = json.loads(backup_service.export_data())

    assert document["version"] == "1.0"
    assert document["app"] == "SaloonLite"
    assert "exportDate" in document
    assert len(document["services"]) == 3
    assert len(document["transactions"]) == 4
    assert len(document["summaries"]) == 2
    assert document["preferences"][0]["businessName"] == "Fresh Cuts"
    assert document["settings"][0]["onboardingCompleted"] is True

    expense = next(t for t in document["transactions"] if t["type"] == "expense")
    assert expense["service"] == "Beauty Depot"
    assert expense["paymentMethod"] == "cash"
    assert expense["dateKey"] == "2024-03-01"


def test_export_import_round_trip(populated_db, backup_service):
    before = _snapshot(populated_db)
    exported = backup_service.export_data()

    backup_service.clear_all_data()
    assert populated_db.get_all(Collection.TRANSACTIONS) == []

    backup_service.import_data(exported)

    assert _snapshot(populated_db) == before


def test_import_replaces_existing_data(populated_db, backup_service, transaction_service):
    exported = backup_service.export_data()
    extra = transaction_service.record_sale(Decimal("99"), "Esi", "Haircut", when=datetime(2024, 3, 5, 9, 0))

    backup_service.import_data(exported)

    assert populated_db.get_transaction(extra.id) is None
    assert populated_db.get_daily_summary("2024-03-05") is None


def test_export_to_file_and_import_from_file(populated_db, backup_service, tmp_path):
    before = _snapshot(populated_db)
    path = tmp_path / "backup.json"

    backup_service.export_to_file(str(path))
    backup_service.clear_all_data()
    backup_service.import_from_file(str(path))

    assert _snapshot(populated_db) == before


def test_clear_all_keeps_pin(populated_db, backup_service, pin_service):
    pin_service.change_pin("4321", "2580")
    backup_service.clear_all_data()

    assert pin_service.current_pin() == "2580"
    assert populated_db.get_all(Collection.SERVICES) == []


def test_import_accepts_mobile_app_spellings(temp_db, backup_service):
    document = {
        "transactions": [
            {
                "id": "e1",
                "type": "expense",
                "amount": 45,
                "datetime": "2024-03-01T10:00:00",
                "dateKey": "2024-03-01",
                "category": "Supplies",
                "service": "Beauty Depot",
                "paymentMethod": "mobile money",
            }
        ],
        "summaries": [
            {"dateKey": "2024-03-01", "date": "2024-03-01", "totalSales": 0, "totalExpenses": 45,
             "netProfit": -45, "transactionCount": 1}
        ],
    }

    backup_service.import_document(document)

    expense = temp_db.get_transaction("e1")
    assert isinstance(expense, Expense)
    assert expense.vendor == "Beauty Depot"
    assert expense.payment_method == PaymentMethod.MOBILE_MONEY
    assert temp_db.get_daily_summary("2024-03-01").net_profit == Decimal("-45")


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[]",
        '{"app": 5}',
        '{"transactions": {}}',
        '{"transactions": [{"id": "t1", "type": "refund", "amount": 5, "datetime": "2024-01-01T10:00:00"}]}',
        '{"transactions": [{"id": "t1", "type": "sale", "amount": -5, "datetime": "2024-01-01T10:00:00"}]}',
        '{"transactions": [{"id": "t1", "type": "sale", "amount": 5, "datetime": "yesterday-ish"}]}',
        '{"services": [{"id": "s1", "name": "Haircut", "createdAt": "2024-01-01T10:00:00"}]}',
        '{"summaries": [{"dateKey": "2024-1-1", "totalSales": 0, "totalExpenses": 0, "transactionCount": 0}]}',
        '{"summaries": [{"dateKey": "2024-02-30", "totalSales": 0, "totalExpenses": 0, "transactionCount": 0}]}',
        '{"summaries": [{"dateKey": "2024-01-01", "totalSales": 0, "totalExpenses": 0, "transactionCount": 1.5}]}',
        '{"preferences": [{"defaultCategories": "Haircut"}]}',
        '{"settings": [{"firstLaunch": "yes"}]}',
    ],
)
def test_malformed_import_leaves_store_untouched(populated_db, backup_service, text):
    before = _snapshot(populated_db)

    with pytest.raises(ImportFormatError):
        backup_service.import_data(text)

    assert _snapshot(populated_db) == before


def test_import_rejects_week_date_keys(populated_db, backup_service, summary_service, transaction_service):
    before = _snapshot(populated_db)
    document = {
        "summaries": [
            {"dateKey": "2024-W01-1", "totalSales": 50, "totalExpenses": 0, "transactionCount": 1}
        ],
        "transactions": [
            {"id": "t1", "type": "sale", "amount": 50, "datetime": "2024-01-01T10:00:00",
             "dateKey": "2024-W01-1", "customer": "Kofi", "service": "Haircut"}
        ],
    }

    with pytest.raises(ImportFormatError):
        backup_service.import_document(document)

    assert _snapshot(populated_db) == before
    assert transaction_service.transactions_by_date(date(2024, 1, 1)) == []
    assert summary_service.summaries_by_range(date(2024, 1, 1), date(2024, 1, 31)) == []


@pytest.mark.parametrize(
    "collection, record",
    [
        ("services", {"id": "s1", "name": "Haircut", "price": 30,
                      "createdAt": "2024-01-01T10:00:00", "updatedAt": "2024-01-01T10:00:00"}),
        ("transactions", {"id": "t1", "type": "sale", "amount": 5, "datetime": "2024-01-01T10:00:00",
                          "customer": "Ama", "service": "Haircut"}),
        ("summaries", {"dateKey": "2024-01-01", "totalSales": 5, "totalExpenses": 0, "transactionCount": 1}),
    ],
)
def test_import_rejects_repeated_keys(populated_db, backup_service, collection, record):
    before = _snapshot(populated_db)

    with pytest.raises(ImportFormatError, match="Duplicate key"):
        backup_service.import_document({collection: [record, dict(record)]})

    assert _snapshot(populated_db) == before


def test_failed_import_write_rolls_back(populated_db, backup_service, monkeypatch):
    before = _snapshot(populated_db)
    document = json.loads(backup_service.export_data())

    def failing_add_all(self, instances):
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(Session, "add_all", failing_add_all)

    with pytest.raises(StorageIOError):
        backup_service.import_document(document)

    monkeypatch.undo()
    assert _snapshot(populated_db) == before


def test_import_from_file_rejects_non_utf8(populated_db, backup_service, tmp_path):
    before = _snapshot(populated_db)
    path = tmp_path / "backup.json"
    path.write_bytes(b'{"services": "\xff\xfe"}')

    with pytest.raises(ImportFormatError, match="UTF-8"):
        backup_service.import_from_file(str(path))

    assert _snapshot(populated_db) == before
