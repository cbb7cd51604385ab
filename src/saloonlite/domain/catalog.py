"""Service catalog domain service."""

import uuid
from dataclasses import replace
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

from saloonlite.database.base import Database
from saloonlite.domain.entities import Service
from saloonlite.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_service_name,
    service_not_found,
)


def normalize_service_name(name: str) -> str:
    """Key used to compare service names: trimmed and case-folded."""
    return (name or "").strip().casefold()


class CatalogService:
    """Service for managing the catalog of services the business sells."""

    def __init__(self, db: Database):
        """Initialize catalog service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_service(self, name: str, price: Decimal) -> Service:
        """Add a service to the catalog.

        Args:
            name: Service name, unique ignoring case and surrounding spaces
            price: Default price, may be zero

        Returns:
            The stored Service

        Raises:
            ValidationError: If name is empty or price is negative
            ConflictError: If a service with the same name exists
        """
        name = self._validate_name(name)
        price = self._validate_price(price)
        if self.name_exists(name):
            raise ConflictError(duplicate_service_name(name))

        now = datetime.now()
        service = Service(
            id=uuid.uuid4().hex,
            name=name,
            price=price,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        self.db.save_service(service)
        return self.db.get_service(service.id)

    def update_service(
        self,
        service_id: str,
        name: Optional[str] = None,
        price: Optional[Decimal] = None,
        is_active: Optional[bool] = None,
    ) -> Service:
        """Update the given fields of a service.

        Raises:
            NotFoundError: If the service doesn't exist
            ValidationError: If name is empty or price is negative
            ConflictError: If the new name belongs to another service
        """
        service = self.require_service(service_id)

        changes = {}
        if name is not None:
            name = self._validate_name(name)
            if self.name_exists(name, exclude_id=service_id):
                raise ConflictError(duplicate_service_name(name))
            changes["name"] = name
        if price is not None:
            changes["price"] = self._validate_price(price)
        if is_active is not None:
            changes["is_active"] = is_active

        self.db.save_service(replace(service, **changes))
        return self.db.get_service(service_id)

    def activate_service(self, service_id: str) -> Service:
        """Show a service in sale entry again."""
        return self.update_service(service_id, is_active=True)

    def deactivate_service(self, service_id: str) -> Service:
        """Hide a service from sale entry without deleting it."""
        return self.update_service(service_id, is_active=False)

    def delete_service(self, service_id: str) -> None:
        """Remove a service from the catalog.

        Past sales keep the service name they were recorded with.

        Raises:
            NotFoundError: If the service doesn't exist
        """
        self.require_service(service_id)
        self.db.delete_service(service_id)

    def get_service(self, service_id: str) -> Optional[Service]:
        """Get service by ID, or None."""
        return self.db.get_service(service_id)

    def require_service(self, service_id: str) -> Service:
        """Get service by ID.

        Raises:
            NotFoundError: If the service doesn't exist
        """
        service = self.db.get_service(service_id)
        if service is None:
            raise NotFoundError(service_not_found(service_id))
        return service

    def find_service_by_name(self, name: str) -> Optional[Service]:
        """Find a service by name, ignoring case and surrounding spaces."""
        key = normalize_service_name(name)
        for service in self.db.list_services():
            if normalize_service_name(service.name) == key:
                return service
        return None

    def list_services(self, active_only: bool = False) -> list[Service]:
        """List services sorted by name."""
        return self.db.list_services(active_only=active_only)

    def list_active_services(self) -> list[Service]:
        """List services offered in sale entry."""
        return self.db.list_services(active_only=True)

    def name_exists(self, name: str, exclude_id: Optional[str] = None) -> bool:
        """Check whether another service already uses this name."""
        key = normalize_service_name(name)
        return any(
            normalize_service_name(service.name) == key and service.id != exclude_id
            for service in self.db.list_services()
        )

    def _validate_name(self, name: str) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Service name is required")
        return name

    def _validate_price(self, price) -> Decimal:
        try:
            value = price if isinstance(price, Decimal) else Decimal(str(price))
        except InvalidOperation:
            raise ValidationError(f"Invalid price: {price}")
        if not value.is_finite() or value < 0:
            raise ValidationError(f"Price must be zero or more, got {price}")
        return value
