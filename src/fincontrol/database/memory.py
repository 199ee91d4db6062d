"""In-memory database implementation.

Each entity kind lives in its own dict keyed by ID. Entities are frozen, so
updates replace the stored object rather than mutating it. Nothing is shared
between instances.
"""

from dataclasses import fields as dataclass_fields, replace
from datetime import date
from decimal import Decimal
from itertools import count
from typing import Any, Callable, Optional, TypeVar

from fincontrol.database.base import Database
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

T = TypeVar("T")


class _Table:
    """Dict-backed table with auto-incrementing IDs."""

    def __init__(self) -> None:
        self.rows: dict[int, Any] = {}
        self._ids = count(1)

    def insert(self, factory: Callable[[int], T]) -> int:
        row_id = next(self._ids)
        self.rows[row_id] = factory(row_id)
        return row_id

    def get(self, row_id: int) -> Optional[Any]:
        return self.rows.get(row_id)

    def all(self) -> list[Any]:
        return [self.rows[row_id] for row_id in sorted(self.rows)]

    def update(self, row_id: int, **fields: Any) -> Optional[Any]:
        row = self.rows.get(row_id)
        if row is None:
            return None
        unknown = set(fields) - {f.name for f in dataclass_fields(row)}
        if unknown:
            raise ValueError(f"Unknown field(s) for {type(row).__name__}: {', '.join(sorted(unknown))}")
        updated = replace(row, **fields)
        self.rows[row_id] = updated
        return updated

    def delete(self, row_id: int) -> bool:
        return self.rows.pop(row_id, None) is not None


class InMemoryDatabase(Database):
    """Dict-backed implementation of Database interface."""

    def __init__(self) -> None:
        self.clients = _Table()
        self.suppliers = _Table()
        self.categories = _Table()
        self.cost_centers = _Table()
        self.payables = _Table()
        self.receivables = _Table()

    def connect(self) -> None:
        """Connect to the database."""
        # Nothing to connect to
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Tables exist from construction
        pass

    # Client operations
    def create_client(
        self,
        name: str,
        document: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> int:
        """Create a client. Returns client ID."""
        return self.clients.insert(
            lambda row_id: Client(
                id=row_id, name=name, document=document, email=email, phone=phone, address=address
            )
        )

    def get_client(self, client_id: int) -> Optional[Client]:
        return self.clients.get(client_id)

    def list_clients(self) -> list[Client]:
        return self.clients.all()

    def update_client(self, client_id: int, **fields: Any) -> Optional[Client]:
        return self.clients.update(client_id, **fields)

    def delete_client(self, client_id: int) -> bool:
        return self.clients.delete(client_id)

    # Supplier operations
    def create_supplier(
        self,
        name: str,
        document: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> int:
        """Create a supplier. Returns supplier ID."""
        return self.suppliers.insert(
            lambda row_id: Supplier(
                id=row_id, name=name, document=document, email=email, phone=phone, address=address
            )
        )

    def get_supplier(self, supplier_id: int) -> Optional[Supplier]:
        return self.suppliers.get(supplier_id)

    def list_suppliers(self) -> list[Supplier]:
        return self.suppliers.all()

    def update_supplier(self, supplier_id: int, **fields: Any) -> Optional[Supplier]:
        return self.suppliers.update(supplier_id, **fields)

    def delete_supplier(self, supplier_id: int) -> bool:
        return self.suppliers.delete(supplier_id)

    # Category operations
    def create_category(
        self,
        name: str,
        category_type: CategoryType,
        dre_category: Optional[DRECategory] = None,
    ) -> int:
        """Create a category. Returns category ID."""
        return self.categories.insert(
            lambda row_id: Category(
                id=row_id, name=name, category_type=category_type, dre_category=dre_category
            )
        )

    def get_category(self, category_id: int) -> Optional[Category]:
        return self.categories.get(category_id)

    def list_categories(self) -> list[Category]:
        return self.categories.all()

    def update_category(self, category_id: int, **fields: Any) -> Optional[Category]:
        return self.categories.update(category_id, **fields)

    def delete_category(self, category_id: int) -> bool:
        return self.categories.delete(category_id)

    # Cost center operations
    def create_cost_center(self, name: str, description: Optional[str] = None) -> int:
        """Create a cost center. Returns cost center ID."""
        return self.cost_centers.insert(
            lambda row_id: CostCenter(id=row_id, name=name, description=description)
        )

    def get_cost_center(self, cost_center_id: int) -> Optional[CostCenter]:
        return self.cost_centers.get(cost_center_id)

    def list_cost_centers(self) -> list[CostCenter]:
        return self.cost_centers.all()

    def update_cost_center(self, cost_center_id: int, **fields: Any) -> Optional[CostCenter]:
        return self.cost_centers.update(cost_center_id, **fields)

    def delete_cost_center(self, cost_center_id: int) -> bool:
        return self.cost_centers.delete(cost_center_id)

    # Accounts payable operations
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
        return self.payables.insert(
            lambda row_id: AccountPayable(
                id=row_id,
                description=description,
                amount=amount,
                due_date=due_date,
                status=status,
                payment_date=payment_date,
                supplier_id=supplier_id,
                category_id=category_id,
                cost_center_id=cost_center_id,
                notes=notes,
                recurrence=recurrence,
                attachment_url=attachment_url,
            )
        )

    def get_payable(self, payable_id: int) -> Optional[AccountPayable]:
        return self.payables.get(payable_id)

    def list_payables(self) -> list[AccountPayable]:
        return self.payables.all()

    def list_upcoming_payables(self, until: date) -> list[AccountPayable]:
        upcoming = [
            p
            for p in self.payables.all()
            if p.status == PayableStatus.PENDING and p.due_date <= until
        ]
        return sorted(upcoming, key=lambda p: (p.due_date, p.id))

    def update_payable(self, payable_id: int, **fields: Any) -> Optional[AccountPayable]:
        return self.payables.update(payable_id, **fields)

    def mark_payable_paid(self, payable_id: int, payment_date: date) -> Optional[AccountPayable]:
        return self.payables.update(
            payable_id, status=PayableStatus.PAID, payment_date=payment_date
        )

    def delete_payable(self, payable_id: int) -> bool:
        return self.payables.delete(payable_id)

    def count_payables(
        self,
        supplier_id: Optional[int] = None,
        category_id: Optional[int] = None,
        cost_center_id: Optional[int] = None,
    ) -> int:
        return sum(
            1
            for p in self.payables.all()
            if (supplier_id is None or p.supplier_id == supplier_id)
            and (category_id is None or p.category_id == category_id)
            and (cost_center_id is None or p.cost_center_id == cost_center_id)
        )

    # Accounts receivable operations
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
        return self.receivables.insert(
            lambda row_id: AccountReceivable(
                id=row_id,
                description=description,
                amount=amount,
                due_date=due_date,
                status=status,
                received_date=received_date,
                client_id=client_id,
                category_id=category_id,
                notes=notes,
            )
        )

    def get_receivable(self, receivable_id: int) -> Optional[AccountReceivable]:
        return self.receivables.get(receivable_id)

    def list_receivables(self) -> list[AccountReceivable]:
        return self.receivables.all()

    def list_upcoming_receivables(self, until: date) -> list[AccountReceivable]:
        upcoming = [
            r
            for r in self.receivables.all()
            if r.status == ReceivableStatus.PENDING and r.due_date <= until
        ]
        return sorted(upcoming, key=lambda r: (r.due_date, r.id))

    def update_receivable(self, receivable_id: int, **fields: Any) -> Optional[AccountReceivable]:
        return self.receivables.update(receivable_id, **fields)

    def mark_receivable_received(
        self, receivable_id: int, received_date: date
    ) -> Optional[AccountReceivable]:
        return self.receivables.update(
            receivable_id, status=ReceivableStatus.RECEIVED, received_date=received_date
        )

    def delete_receivable(self, receivable_id: int) -> bool:
        return self.receivables.delete(receivable_id)

    def count_receivables(
        self,
        client_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> int:
        return sum(
            1
            for r in self.receivables.all()
            if (client_id is None or r.client_id == client_id)
            and (category_id is None or r.category_id == category_id)
        )
