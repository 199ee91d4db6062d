"""Client and supplier domain services."""

import logging
from typing import Any, Optional

from fincontrol.database.base import Database
from fincontrol.domain.entities import Client, Supplier
from fincontrol.domain.errors import (
    DependencyError,
    NotFoundError,
    ValidationError,
    delete_blocked,
    entity_not_found,
)
from fincontrol.domain.validation import require_text

logger = logging.getLogger(__name__)

PARTY_FIELDS = ("name", "document", "email", "phone", "address")


def _clean_party_fields(fields: dict[str, Any]) -> dict[str, Any]:
    unknown = set(fields) - set(PARTY_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown field(s): {', '.join(sorted(unknown))}")
    cleaned = dict(fields)
    if "name" in cleaned:
        cleaned["name"] = require_text(cleaned["name"], "Name")
    return cleaned


class ClientService:
    """Service for managing clients."""

    def __init__(self, db: Database):
        """Initialize client service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_client(
        self,
        name: str,
        document: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> int:
        """Create a client.

        Returns:
            Client ID

        Raises:
            ValidationError: If name is empty
        """
        name = require_text(name, "Name")
        client_id = self.db.create_client(
            name=name, document=document, email=email, phone=phone, address=address
        )
        logger.info(f"Created client {client_id} '{name}'")
        return client_id

    def get_client(self, client_id: int) -> Optional[Client]:
        return self.db.get_client(client_id)

    def list_clients(self) -> list[Client]:
        return self.db.list_clients()

    def update_client(self, client_id: int, **fields: Any) -> Client:
        """Update client fields.

        Raises:
            NotFoundError: If the client does not exist
            ValidationError: If a field is unknown or name is empty
        """
        cleaned = _clean_party_fields(fields)
        client = self.db.update_client(client_id, **cleaned)
        if client is None:
            raise NotFoundError(entity_not_found("Client", client_id))
        logger.info(f"Updated client {client_id}: {', '.join(sorted(cleaned))}")
        return client

    def delete_client(self, client_id: int) -> None:
        """Delete a client.

        Raises:
            NotFoundError: If the client does not exist
            DependencyError: If receivables still reference the client
        """
        if self.db.get_client(client_id) is None:
            raise NotFoundError(entity_not_found("Client", client_id))

        receivable_count = self.db.count_receivables(client_id=client_id)
        if receivable_count > 0:
            raise DependencyError(delete_blocked("Client", client_id, 0, receivable_count))

        self.db.delete_client(client_id)
        logger.info(f"Deleted client {client_id}")


class SupplierService:
    """Service for managing suppliers."""

    def __init__(self, db: Database):
        """Initialize supplier service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_supplier(
        self,
        name: str,
        document: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> int:
        """Create a supplier.

        Returns:
            Supplier ID

        Raises:
            ValidationError: If name is empty
        """
        name = require_text(name, "Name")
        supplier_id = self.db.create_supplier(
            name=name, document=document, email=email, phone=phone, address=address
        )
        logger.info(f"Created supplier {supplier_id} '{name}'")
        return supplier_id

    def get_supplier(self, supplier_id: int) -> Optional[Supplier]:
        return self.db.get_supplier(supplier_id)

    def list_suppliers(self) -> list[Supplier]:
        return self.db.list_suppliers()

    def update_supplier(self, supplier_id: int, **fields: Any) -> Supplier:
        """Update supplier fields.

        Raises:
            NotFoundError: If the supplier does not exist
            ValidationError: If a field is unknown or name is empty
        """
        cleaned = _clean_party_fields(fields)
        supplier = self.db.update_supplier(supplier_id, **cleaned)
        if supplier is None:
            raise NotFoundError(entity_not_found("Supplier", supplier_id))
        logger.info(f"Updated supplier {supplier_id}: {', '.join(sorted(cleaned))}")
        return supplier

    def delete_supplier(self, supplier_id: int) -> None:
        """Delete a supplier.

        Raises:
            NotFoundError: If the supplier does not exist
            DependencyError: If payables still reference the supplier
        """
        if self.db.get_supplier(supplier_id) is None:
            raise NotFoundError(entity_not_found("Supplier", supplier_id))

        payable_count = self.db.count_payables(supplier_id=supplier_id)
        if payable_count > 0:
            raise DependencyError(delete_blocked("Supplier", supplier_id, payable_count, 0))

        self.db.delete_supplier(supplier_id)
        logger.info(f"Deleted supplier {supplier_id}")
