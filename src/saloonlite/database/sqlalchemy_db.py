"""Generic SQLAlchemy database implementation."""

import logging
from contextlib import contextmanager
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Iterator, NamedTuple, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from saloonlite.database.base import Collection, Database
from saloonlite.database import documents
from saloonlite.database.models import (
    Service,
    Transaction,
    DailySummary,
    Preference,
    Setting,
    PinSetting,
    create_session_factory,
)
from saloonlite.database.mappers import (
    service_to_domain,
    service_to_orm,
    transaction_to_domain,
    transaction_to_orm,
    summary_to_domain,
    summary_to_orm,
    preferences_to_domain,
    preferences_to_orm,
    app_settings_to_domain,
    app_settings_to_orm,
    pin_settings_to_domain,
    pin_settings_to_orm,
)
from saloonlite.domain.entities import (
    AppSettings as DomainAppSettings,
    DailySummary as DomainDailySummary,
    PinSettings as DomainPinSettings,
    Service as DomainService,
    Transaction as DomainTransaction,
    TransactionType,
    UserPreferences as DomainUserPreferences,
)
from saloonlite.domain.errors import ImportFormatError, StorageIOError, StorageUnavailable

logger = logging.getLogger(__name__)

PIN_SETTINGS_KEY = "pinSettings"
PREFERENCES_KEY = "default"
APP_SETTINGS_KEY = "appSettings"


class _CollectionSpec(NamedTuple):
    model: type
    key_column: Any
    to_domain: Callable[[Any], Any]
    to_orm: Callable[[Any], Any]
    indexes: dict[str, Any]


_COLLECTIONS: dict[Collection, _CollectionSpec] = {
    Collection.SERVICES: _CollectionSpec(
        Service, Service.id, service_to_domain, service_to_orm, {"name": Service.name}
    ),
    Collection.TRANSACTIONS: _CollectionSpec(
        Transaction,
        Transaction.id,
        transaction_to_domain,
        transaction_to_orm,
        {"datetime": Transaction.datetime, "date_key": Transaction.date_key},
    ),
    Collection.SUMMARIES: _CollectionSpec(
        DailySummary,
        DailySummary.date_key,
        summary_to_domain,
        summary_to_orm,
        {"date_key": DailySummary.date_key},
    ),
    Collection.PREFERENCES: _CollectionSpec(
        Preference, Preference.id, preferences_to_domain, preferences_to_orm, {}
    ),
    Collection.SETTINGS: _CollectionSpec(
        Setting, Setting.id, app_settings_to_domain, app_settings_to_orm, {}
    ),
    Collection.PIN_SETTINGS: _CollectionSpec(
        PinSetting,
        PinSetting.id,
        pin_settings_to_domain,
        lambda pin_settings: pin_settings_to_orm(pin_settings, PIN_SETTINGS_KEY),
        {},
    ),
}

# Collections included in backups, with their document codecs
_BACKUP_CODECS: dict[Collection, tuple[Callable[[Any], dict], Callable[[Any], Any]]] = {
    Collection.SERVICES: (documents.service_to_document, documents.service_from_document),
    Collection.TRANSACTIONS: (documents.transaction_to_document, documents.transaction_from_document),
    Collection.SUMMARIES: (documents.summary_to_document, documents.summary_from_document),
    Collection.PREFERENCES: (documents.preferences_to_document, documents.preferences_from_document),
    Collection.SETTINGS: (documents.app_settings_to_document, documents.app_settings_from_document),
}


def _record_key(collection: Collection, record: Any) -> str:
    return record.date_key if collection is Collection.SUMMARIES else record.id


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db',
                'sqlite://' for an in-memory store)

        Raises:
            StorageUnavailable: If the database cannot be opened or its schema created
        """
        self.database_url = database_url
        try:
            self.session_factory = create_session_factory(database_url)
        except SQLAlchemyError as e:
            logger.error("Could not open database %s: %s", database_url, e)
            raise StorageUnavailable(f"Could not open database '{database_url}': {e}") from e
        self._session: Optional[Session] = None
        logger.debug("Opened database %s", database_url)

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    @contextmanager
    def _unit_of_work(self) -> Iterator[Session]:
        """Run the enclosed reads and writes as one atomic unit.

        Commits on success. Any failure rolls back every change made inside
        the block; SQLAlchemy errors are re-raised as StorageIOError.
        """
        session = self._get_session()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.warning("Rolled back unit of work: %s", e)
            raise StorageIOError(str(e)) from e
        except Exception:
            session.rollback()
            raise

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    # Generic record store operations
    def _spec(self, collection: Collection) -> _CollectionSpec:
        try:
            return _COLLECTIONS[Collection(collection)]
        except (KeyError, ValueError):
            raise ValueError(f"Unknown collection '{collection}'")

    def put(self, collection: Collection, record: Any) -> None:
        """Insert or replace a record, keyed by the collection's key field."""
        spec = self._spec(collection)
        with self._unit_of_work() as session:
            session.merge(spec.to_orm(record))

    def get(self, collection: Collection, key: str) -> Optional[Any]:
        """Get a record by key, or None if absent."""
        spec = self._spec(collection)
        with self._unit_of_work() as session:
            row = session.get(spec.model, key)
            return spec.to_domain(row) if row is not None else None

    def get_all(self, collection: Collection) -> list[Any]:
        """Get every record in a collection."""
        spec = self._spec(collection)
        with self._unit_of_work() as session:
            rows = session.query(spec.model).order_by(spec.key_column).all()
            return [spec.to_domain(row) for row in rows]

    def delete(self, collection: Collection, key: str) -> None:
        """Delete a record if present."""
        spec = self._spec(collection)
        with self._unit_of_work() as session:
            row = session.get(spec.model, key)
            if row is not None:
                session.delete(row)

    def range_scan(self, collection: Collection, index_name: str, lower: Any, upper: Any) -> list[Any]:
        """Get records whose indexed field lies in [lower, upper], ascending."""
        spec = self._spec(collection)
        column = spec.indexes.get(index_name)
        if column is None:
            raise ValueError(f"Collection '{Collection(collection).value}' has no index '{index_name}'")
        with self._unit_of_work() as session:
            rows = (
                session.query(spec.model)
                .filter(column >= lower, column <= upper)
                .order_by(column, spec.key_column)
                .all()
            )
            return [spec.to_domain(row) for row in rows]

    # Transaction operations
    def add_transaction(self, transaction: DomainTransaction) -> None:
        """Insert a transaction and fold it into its daily summary atomically."""
        with self._unit_of_work() as session:
            session.add(transaction_to_orm(transaction))
            self._fold_into_summary(session, transaction)
        logger.debug(
            "Recorded %s %s of %s on %s",
            transaction.type.value,
            transaction.id,
            transaction.amount,
            transaction.date_key,
        )

    def _fold_into_summary(self, session: Session, transaction: DomainTransaction) -> None:
        """Add a transaction to its day's summary, creating a zeroed one if needed."""
        summary = session.get(DailySummary, transaction.date_key)
        if summary is None:
            summary = DailySummary(
                date_key=transaction.date_key,
                date=date.fromisoformat(transaction.date_key),
                total_sales=Decimal("0"),
                total_expenses=Decimal("0"),
                net_profit=Decimal("0"),
                transaction_count=0,
            )
            session.add(summary)

        if transaction.type == TransactionType.SALE:
            summary.total_sales = Decimal(summary.total_sales) + transaction.amount
        else:
            summary.total_expenses = Decimal(summary.total_expenses) + transaction.amount
        summary.net_profit = Decimal(summary.total_sales) - Decimal(summary.total_expenses)
        summary.transaction_count += 1

    def get_transaction(self, transaction_id: str) -> Optional[DomainTransaction]:
        """Get transaction by ID."""
        return self.get(Collection.TRANSACTIONS, transaction_id)

    def list_transactions(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        date_key: Optional[str] = None,
        transaction_type: Optional[TransactionType] = None,
    ) -> list[DomainTransaction]:
        """List transactions with optional filters, newest first."""
        with self._unit_of_work() as session:
            query = session.query(Transaction)

            if start is not None:
                query = query.filter(Transaction.datetime >= start)
            if end is not None:
                query = query.filter(Transaction.datetime <= end)
            if date_key is not None:
                query = query.filter(Transaction.date_key == date_key)
            if transaction_type is not None:
                query = query.filter(Transaction.type == TransactionType(transaction_type).value)

            transactions = query.order_by(Transaction.datetime.desc(), Transaction.id.desc()).all()
            return [transaction_to_domain(txn) for txn in transactions]

    # Daily summary operations
    def get_daily_summary(self, date_key: str) -> Optional[DomainDailySummary]:
        """Get the summary for a date key."""
        return self.get(Collection.SUMMARIES, date_key)

    def list_daily_summaries(self, start_key: str, end_key: str) -> list[DomainDailySummary]:
        """List summaries with date keys in [start_key, end_key], newest first."""
        summaries = self.range_scan(Collection.SUMMARIES, "date_key", start_key, end_key)
        return sorted(summaries, key=lambda s: s.date_key, reverse=True)

    # Service catalog operations
    def save_service(self, service: DomainService) -> None:
        """Insert or replace a service, stamping its update time."""
        self.put(Collection.SERVICES, replace(service, updated_at=datetime.now()))

    def get_service(self, service_id: str) -> Optional[DomainService]:
        """Get service by ID."""
        return self.get(Collection.SERVICES, service_id)

    def list_services(self, active_only: bool = False) -> list[DomainService]:
        """List services sorted by name (case-insensitive)."""
        with self._unit_of_work() as session:
            query = session.query(Service)
            if active_only:
                query = query.filter(Service.is_active.is_(True))
            services = query.order_by(func.lower(Service.name), Service.id).all()
            return [service_to_domain(s) for s in services]

    def delete_service(self, service_id: str) -> None:
        """Delete a service if present."""
        self.delete(Collection.SERVICES, service_id)

    # Singleton records
    def get_pin_settings(self) -> Optional[DomainPinSettings]:
        """Get the PIN record, or None if no PIN was ever saved."""
        return self.get(Collection.PIN_SETTINGS, PIN_SETTINGS_KEY)

    def save_pin_settings(self, pin_settings: DomainPinSettings) -> None:
        """Replace the PIN record."""
        self.put(Collection.PIN_SETTINGS, pin_settings)

    def get_user_preferences(self) -> DomainUserPreferences:
        """Get preferences, falling back to defaults."""
        return self.get(Collection.PREFERENCES, PREFERENCES_KEY) or DomainUserPreferences()

    def save_user_preferences(self, preferences: DomainUserPreferences) -> None:
        """Replace the preferences record."""
        self.put(Collection.PREFERENCES, replace(preferences, id=PREFERENCES_KEY))

    def get_app_settings(self) -> DomainAppSettings:
        """Get app settings, falling back to defaults."""
        return self.get(Collection.SETTINGS, APP_SETTINGS_KEY) or DomainAppSettings()

    def save_app_settings(self, settings: DomainAppSettings) -> None:
        """Replace the app settings record."""
        self.put(Collection.SETTINGS, replace(settings, id=APP_SETTINGS_KEY))

    # Backup operations
    def export_all(self) -> dict[str, Any]:
        """Export every backup collection as a JSON-compatible document."""
        with self._unit_of_work() as session:
            document: dict[str, Any] = {}
            for collection, (encode, _) in _BACKUP_CODECS.items():
                spec = _COLLECTIONS[collection]
                rows = session.query(spec.model).order_by(spec.key_column).all()
                document[collection.value] = [encode(spec.to_domain(row)) for row in rows]

        document["exportDate"] = datetime.now().astimezone().isoformat()
        document["version"] = documents.BACKUP_VERSION
        document["app"] = documents.BACKUP_APP
        return document

    def import_all(self, document: dict[str, Any]) -> None:
        """Replace every backup collection with the document's records atomically."""
        decoded = self._decode_backup(document)

        with self._unit_of_work() as session:
            for collection in _BACKUP_CODECS:
                session.query(_COLLECTIONS[collection].model).delete(synchronize_session=False)
            session.expunge_all()
            for collection, records in decoded.items():
                session.add_all(_COLLECTIONS[collection].to_orm(record) for record in records)
            session.flush()

        logger.info(
            "Imported backup: %s",
            ", ".join(f"{len(records)} {collection.value}" for collection, records in decoded.items()),
        )

    def _decode_backup(self, document: Any) -> dict[Collection, list[Any]]:
        """Decode every record of a backup document before anything is written."""
        if not isinstance(document, dict):
            raise ImportFormatError("Backup document must be a JSON object")

        decoded: dict[Collection, list[Any]] = {}
        for collection, (_, decode) in _BACKUP_CODECS.items():
            records = document.get(collection.value)
            if records is None:
                records = []
            if not isinstance(records, list):
                raise ImportFormatError(f"'{collection.value}' must be a list of records")
            try:
                decoded[collection] = [decode(record) for record in records]
            except ImportFormatError as e:
                raise ImportFormatError(f"Invalid record in '{collection.value}': {e}") from e

            seen: set[str] = set()
            for record in decoded[collection]:
                key = _record_key(collection, record)
                if key in seen:
                    raise ImportFormatError(f"Duplicate key {key!r} in '{collection.value}'")
                seen.add(key)
        return decoded

    def clear_all(self) -> None:
        """Clear every backup collection atomically."""
        with self._unit_of_work() as session:
            for collection in _BACKUP_CODECS:
                session.query(_COLLECTIONS[collection].model).delete(synchronize_session=False)
            session.expunge_all()
        logger.info("Cleared all collections")
