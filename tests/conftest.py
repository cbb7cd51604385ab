"""Shared pytest fixtures for saloonlite tests."""

import tempfile
import os
from datetime import datetime
from decimal import Decimal
import pytest

from saloonlite.database.factories import create_sqlite_database
from saloonlite.domain.backup import BackupService
from saloonlite.domain.catalog import CatalogService
from saloonlite.domain.pin import PinService
from saloonlite.domain.preferences import PreferencesService
from saloonlite.domain.summary import SummaryService
from saloonlite.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def summary_service(temp_db):
    """Create a SummaryService with a temporary database."""
    return SummaryService(temp_db)


@pytest.fixture
def catalog_service(temp_db):
    """Create a CatalogService with a temporary database."""
    return CatalogService(temp_db)


@pytest.fixture
def pin_service(temp_db):
    """Create a PinService with a temporary database."""
    return PinService(temp_db)


@pytest.fixture
def preferences_service(temp_db):
    """Create a PreferencesService with a temporary database."""
    return PreferencesService(temp_db)


@pytest.fixture
def backup_service(temp_db):
    """Create a BackupService with a temporary database."""
    return BackupService(temp_db)


@pytest.fixture
def sample_services(catalog_service):
    """Create a small catalog: two active services and one inactive."""
    haircut = catalog_service.create_service("Haircut", Decimal("30"))
    beard = catalog_service.create_service("Beard Trim", Decimal("15"))
    color = catalog_service.create_service("Hair Color", Decimal("80"))
    color = catalog_service.deactivate_service(color.id)
    return {"Haircut": haircut, "Beard Trim": beard, "Hair Color": color}


@pytest.fixture
def sample_transactions(transaction_service):
    """Record sales and an expense over two days."""
    return [
        transaction_service.record_sale(Decimal("100"), "Kofi", "Haircut", when=datetime(2024, 3, 1, 10, 0)),
        transaction_service.record_sale(Decimal("50"), "Ama", "Beard Trim", when=datetime(2024, 3, 1, 15, 30)),
        transaction_service.record_expense(
            Decimal("30"), "Supplies", vendor="Beauty Depot", when=datetime(2024, 3, 1, 17, 0)
        ),
        transaction_service.record_sale(Decimal("40"), "Yaw", "Haircut", when=datetime(2024, 3, 2, 9, 15)),
    ]


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
