"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from fincontrol.domain.entities import (
    AccountPayable,
    AccountReceivable,
    Category,
    CategoryType,
    Client,
    CostCenter,
    DRECategory,
    PayableStatus,
    ReceivableStatus,
    Recurrence,
    Supplier,
)


class Database(ABC):
    """Abstract database interface for fincontrol.

    ``update_*`` methods apply only the fields passed and return the updated
    entity, or None when the ID does not exist. ``delete_*`` methods return
    whether a row was removed. ``list_*`` methods return entities in ID order.
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

    # Client operations
    @abstractmethod
    def create_client(
        self,
        name: str,
        document: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> int:
        """Create a client. Returns client ID."""
        pass

    @abstractmethod
    def get_client(self, client_id: int) -> Optional[Client]:
        """Get client by ID."""
        pass

    @abstractmethod
    def list_clients(self) -> list[Client]:
        """List all clients."""
        pass

    @abstractmethod
    def update_client(self, client_id: int, **fields: Any) -> Optional[Client]:
        """Update client fields."""
        pass

    @abstractmethod
    def delete_client(self, client_id: int) -> bool:
        """Delete a client."""
        pass

    # Supplier operations
    @abstractmethod
    def create_supplier(
        self,
        name: str,
        document: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> int:
        """Create a supplier. Returns supplier ID."""
        pass

    @abstractmethod
    def get_supplier(self, supplier_id: int) -> Optional[Supplier]:
        """Get supplier by ID."""
        pass

    @abstractmethod
    def list_suppliers(self) -> list[Supplier]:
        """List all suppliers."""
        pass

    @abstractmethod
    def update_supplier(self, supplier_id: int, **fields: Any) -> Optional[Supplier]:
        """Update supplier fields."""
        pass

    @abstractmethod
    def delete_supplier(self, supplier_id: int) -> bool:
        """Delete a supplier."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self,
        name: str,
        category_type: CategoryType,
        dre_category: Optional[DRECategory] = None,
    ) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List all categories."""
        pass

    @abstractmethod
    def update_category(self, category_id: int, **fields: Any) -> Optional[Category]:
        """Update category fields."""
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> bool:
        """Delete a category."""
        pass

    # Cost center operations
    @abstractmethod
    def create_cost_center(self, name: str, description: Optional[str] = None) -> int:
        """Create a cost center. Returns cost center ID."""
        pass

    @abstractmethod
    def get_cost_center(self, cost_center_id: int) -> Optional[CostCenter]:
        """Get cost center by ID."""
        pass

    @abstractmethod
    def list_cost_centers(self) -> list[CostCenter]:
        """List all cost centers."""
        pass

    @abstractmethod
    def update_cost_center(self, cost_center_id: int, **fields: Any) -> Optional[CostCenter]:
        """Update cost center fields."""
        pass

    @abstractmethod
    def delete_cost_center(self, cost_center_id: int) -> bool:
        """Delete a cost center."""
        pass

    # Accounts payable operations
    @abstractmethod
    def create_payable(
        self,
        description: str,
        amount: Decimal,
        due_date: date,
        status: PayableStatus = PayableStatus.PENDING,
        payment_date: Optional[date] = None,
        supplier_id: Optional[int] = None,
        category_id: Optional[int] = None,
        cost_center_id: Optional[int] = None,
        notes: Optional[str] = None,
        recurrence: Optional[Recurrence] = None,
        attachment_url: Optional[str] = None,
    ) -> int:
        """Create an account payable. Returns payable ID."""
        pass

    @abstractmethod
    def get_payable(self, payable_id: int) -> Optional[AccountPayable]:
        """Get account payable by ID."""
        pass

    @abstractmethod
    def list_payables(self) -> list[AccountPayable]:
        """List all accounts payable."""
        pass

    @abstractmethod
    def list_upcoming_payables(self, until: date) -> list[AccountPayable]:
        """List pending payables due on or before ``until``."""
        pass

    @abstractmethod
    def update_payable(self, payable_id: int, **fields: Any) -> Optional[AccountPayable]:
        """Update payable fields."""
        pass

    @abstractmethod
    def mark_payable_paid(self, payable_id: int, payment_date: date) -> Optional[AccountPayable]:
        """Set a payable's status to paid with the given payment date."""
        pass

    @abstractmethod
    def delete_payable(self, payable_id: int) -> bool:
        """Delete an account payable."""
        pass

    @abstractmethod
    def count_payables(
        self,
        supplier_id: Optional[int] = None,
        category_id: Optional[int] = None,
        cost_center_id: Optional[int] = None,
    ) -> int:
        """Count payables referencing the given supplier, category or cost center."""
        pass

    # Accounts receivable operations
    @abstractmethod
    def create_receivable(
        self,
        description: str,
        amount: Decimal,
        due_date: date,
        status: ReceivableStatus = ReceivableStatus.PENDING,
        received_date: Optional[date] = None,
        client_id: Optional[int] = None,
        category_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create an account receivable. Returns receivable ID."""
        pass

    @abstractmethod
    def get_receivable(self, receivable_id: int) -> Optional[AccountReceivable]:
        """Get account receivable by ID."""
        pass

    @abstractmethod
    def list_receivables(self) -> list[AccountReceivable]:
        """List all accounts receivable."""
        pass

    @abstractmethod
    def list_upcoming_receivables(self, until: date) -> list[AccountReceivable]:
        """List pending receivables due on or before ``until``."""
        pass

    @abstractmethod
    def update_receivable(self, receivable_id: int, **fields: Any) -> Optional[AccountReceivable]:
        """Update receivable fields."""
        pass

    @abstractmethod
    def mark_receivable_received(
        self, receivable_id: int, received_date: date
    ) -> Optional[AccountReceivable]:
        """Set a receivable's status to received with the given date."""
        pass

    @abstractmethod
    def delete_receivable(self, receivable_id: int) -> bool:
        """Delete an account receivable."""
        pass

    @abstractmethod
    def count_receivables(
        self,
        client_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> int:
        """Count receivables referencing the given client or category."""
        pass
