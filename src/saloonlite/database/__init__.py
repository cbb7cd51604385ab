"""Database layer for saloonlite application."""

from saloonlite.database.base import Collection, Database
from saloonlite.database.factories import create_sqlite_database

__all__ = ["Collection", "Database", "create_sqlite_database"]
