"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from saloonlite.database.sqlalchemy_db import SQLAlchemyDatabase
from saloonlite.domain.errors import StorageUnavailable


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks SALOONLITE_DB_PATH
            environment variable, then defaults to ~/.saloonlite/saloonlite.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite

    Raises:
        StorageUnavailable: If the database file cannot be created or opened
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("SALOONLITE_DB_PATH")

    if database_path is None:
        # Default to ~/.saloonlite/saloonlite.db
        db_dir = Path.home() / ".saloonlite"
        try:
            db_dir.mkdir(exist_ok=True)
        except OSError as e:
            raise StorageUnavailable(f"Could not create data directory '{db_dir}': {e}") from e
        database_path = str(db_dir / "saloonlite.db")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)
