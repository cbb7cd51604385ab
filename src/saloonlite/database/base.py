"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Any, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from saloonlite.domain.entities import (
    AppSettings,
    DailySummary,
    PinSettings,
    Service,
    Transaction,
    TransactionType,
    UserPreferences,
)


class Collection(str, Enum):
    """Logical record collections held by the store."""

    SERVICES = "services"
    TRANSACTIONS = "transactions"
    SUMMARIES = "summaries"
    PREFERENCES = "preferences"
    SETTINGS = "settings"
    PIN_SETTINGS = "pin_settings"


class Database(ABC):
    """Abstract database interface for saloonlite.

    Reads of absent records return None (or a default for singletons);
    storage failures raise StorageIOError, and a store that cannot be opened
    raises StorageUnavailable.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Generic record store operations
    @abstractmethod
    def put(self, collection: Collection, record: Any) -> None:
        """Insert or replace a record, keyed by the collection's key field.

        Writing a transaction this way does not touch its daily summary; use
        add_transaction for that.
        """
        pass

    @abstractmethod
    def get(self, collection: Collection, key: str) -> Optional[Any]:
        """Get a record by key, or None if absent."""
        pass

    @abstractmethod
    def get_all(self, collection: Collection) -> list[Any]:
        """Get every record in a collection, in no particular order."""
        pass

    @abstractmethod
    def delete(self, collection: Collection, key: str) -> None:
        """Delete a record. Deleting an absent key is not an error."""
        pass

    @abstractmethod
    def range_scan(self, collection: Collection, index_name: str, lower: Any, upper: Any) -> list[Any]:
        """Get records whose indexed field lies in [lower, upper], ascending by that field.

        Raises:
            ValueError: If the collection has no such index
        """
        pass

    # Transaction operations
    @abstractmethod
    def add_transaction(self, transaction: Transaction) -> None:
        """Insert a transaction and fold it into its daily summary atomically."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        date_key: Optional[str] = None,
        transaction_type: Optional[TransactionType] = None,
    ) -> list[Transaction]:
        """List transactions newest first.

        Args:
            start: Optional inclusive lower bound on datetime
            end: Optional inclusive upper bound on datetime
            date_key: Optional exact date key
            transaction_type: Optional sale/expense filter
        """
        pass

    # Daily summary operations
    @abstractmethod
    def get_daily_summary(self, date_key: str) -> Optional[DailySummary]:
        """Get the summary for a date key."""
        pass

    @abstractmethod
    def list_daily_summaries(self, start_key: str, end_key: str) -> list[DailySummary]:
        """List summaries with date keys in [start_key, end_key], newest first."""
        pass

    # Service catalog operations
    @abstractmethod
    def save_service(self, service: Service) -> None:
        """Insert or replace a service."""
        pass

    @abstractmethod
    def get_service(self, service_id: str) -> Optional[Service]:
        """Get service by ID."""
        pass

    @abstractmethod
    def list_services(self, active_only: bool = False) -> list[Service]:
        """List services sorted by name."""
        pass

    @abstractmethod
    def delete_service(self, service_id: str) -> None:
        """Delete a service if present."""
        pass

    # Singleton records
    @abstractmethod
    def get_pin_settings(self) -> Optional[PinSettings]:
        """Get the PIN record, or None if no PIN was ever saved."""
        pass

    @abstractmethod
    def save_pin_settings(self, pin_settings: PinSettings) -> None:
        """Replace the PIN record."""
        pass

    @abstractmethod
    def get_user_preferences(self) -> UserPreferences:
        """Get preferences, falling back to defaults."""
        pass

    @abstractmethod
    def save_user_preferences(self, preferences: UserPreferences) -> None:
        """Replace the preferences record."""
        pass

    @abstractmethod
    def get_app_settings(self) -> AppSettings:
        """Get app settings, falling back to defaults."""
        pass

    @abstractmethod
    def save_app_settings(self, settings: AppSettings) -> None:
        """Replace the app settings record."""
        pass

    # Backup operations
    @abstractmethod
    def export_all(self) -> dict[str, Any]:
        """Export every backup collection as a JSON-compatible document."""
        pass

    @abstractmethod
    def import_all(self, document: dict[str, Any]) -> None:
        """Replace every backup collection with the document's records atomically.

        Raises:
            ImportFormatError: If the document is malformed (store untouched)
        """
        pass

    @abstractmethod
    def clear_all(self) -> None:
        """Clear every backup collection atomically."""
        pass
