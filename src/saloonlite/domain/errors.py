"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as duplicate service names."""


class ImportFormatError(ValidationError):
    """Backup document is malformed; raised before the store is touched."""


class StorageError(Exception):
    """Base class for storage failures."""


class StorageUnavailable(StorageError):
    """The underlying database could not be opened."""


class StorageIOError(StorageError):
    """A single storage operation failed and was rolled back."""


def service_not_found(service_id: str) -> str:
    """Return message for missing service."""
    return f"Service {service_id} not found"


def duplicate_service_name(name: str) -> str:
    """Return message for a service name that is already taken."""
    return f"Service with name '{name}' already exists"


def invalid_amount(amount) -> str:
    """Return message for a non-positive transaction amount."""
    return f"Amount must be greater than zero, got {amount}"
