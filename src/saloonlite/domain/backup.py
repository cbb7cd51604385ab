"""Backup and restore domain service."""

import json
import logging
from pathlib import Path
from typing import Any

from saloonlite.database.base import Database
from saloonlite.domain.errors import ImportFormatError

logger = logging.getLogger(__name__)


class BackupService:
    """Service for exporting the whole store to JSON and restoring it."""

    def __init__(self, db: Database):
        """Initialize backup service.

        Args:
            db: Database instance
        """
        self.db = db

    def export_document(self) -> dict[str, Any]:
        """Export every collection as a document."""
        return self.db.export_all()

    def export_data(self) -> str:
        """Export every collection as JSON text."""
        document = self.export_document()
        logger.info(
            "Exported %d transaction(s), %d summary(ies), %d service(s)",
            len(document["transactions"]),
            len(document["summaries"]),
            len(document["services"]),
        )
        return json.dumps(document, indent=2)

    def export_to_file(self, path: str) -> None:
        """Write a JSON backup to a file."""
        Path(path).write_text(self.export_data(), encoding="utf-8")

    def import_data(self, json_data: str) -> None:
        """Replace every collection with the contents of a JSON backup.

        Raises:
            ImportFormatError: If the text is not a valid backup (store untouched)
            StorageIOError: If writing fails (store untouched)
        """
        try:
            document = json.loads(json_data)
        except json.JSONDecodeError as e:
            raise ImportFormatError(f"Backup is not valid JSON: {e}") from e
        self.import_document(document)

    def import_document(self, document: Any) -> None:
        """Replace every collection with the records of a backup document."""
        if not isinstance(document, dict):
            raise ImportFormatError("Backup document must be a JSON object")
        app = document.get("app")
        if app is not None and not isinstance(app, str):
            raise ImportFormatError("Field 'app' must be a string")
        self.db.import_all(document)

    def import_from_file(self, path: str) -> None:
        """Restore from a JSON backup file."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ImportFormatError(f"Backup file is not UTF-8 text: {e}") from e
        self.import_data(text)

    def clear_all_data(self) -> None:
        """Remove every record from every backed-up collection."""
        self.db.clear_all()
