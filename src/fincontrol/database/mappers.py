"""Mapper functions to convert between domain models and SQLAlchemy models.

Status, type and DRE columns are stored as plain text. Reading them back goes
through the domain enums, so a row holding an unrecognized value fails with
ValueError here instead of leaking into aggregation.
"""

from decimal import Decimal
from enum import Enum
from typing import Any

from fincontrol.domain import entities as domain
from fincontrol.database.models import (
    AccountPayable as ORMAccountPayable,
    AccountReceivable as ORMAccountReceivable,
    Category as ORMCategory,
    Client as ORMClient,
    CostCenter as ORMCostCenter,
    Supplier as ORMSupplier,
)


def to_column_value(value: Any) -> Any:
    """Convert a domain value into what the ORM column stores."""
    if isinstance(value, Enum):
        return value.value
    return value


def client_to_domain(orm_client: ORMClient) -> domain.Client:
    """Convert SQLAlchemy Client model to domain Client entity."""
    return domain.Client(
        id=orm_client.id,
        name=orm_client.name,
        document=orm_client.document,
        email=orm_client.email,
        phone=orm_client.phone,
        address=orm_client.address,
    )


def supplier_to_domain(orm_supplier: ORMSupplier) -> domain.Supplier:
    """Convert SQLAlchemy Supplier model to domain Supplier entity."""
    return domain.Supplier(
        id=orm_supplier.id,
        name=orm_supplier.name,
        document=orm_supplier.document,
        email=orm_supplier.email,
        phone=orm_supplier.phone,
        address=orm_supplier.address,
    )


def cost_center_to_domain(orm_cost_center: ORMCostCenter) -> domain.CostCenter:
    """Convert SQLAlchemy CostCenter model to domain CostCenter entity."""
    return domain.CostCenter(
        id=orm_cost_center.id,
        name=orm_cost_center.name,
        description=orm_cost_center.description,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    dre_category = None
    if orm_category.dre_category:
        dre_category = domain.DRECategory.parse(orm_category.dre_category)
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        category_type=domain.CategoryType.parse(orm_category.category_type),
        dre_category=dre_category,
    )


def payable_to_domain(orm_payable: ORMAccountPayable) -> domain.AccountPayable:
    """Convert SQLAlchemy AccountPayable model to domain AccountPayable entity."""
    recurrence = None
    if orm_payable.recurrence:
        recurrence = domain.Recurrence.parse(orm_payable.recurrence)
    return domain.AccountPayable(
        id=orm_payable.id,
        description=orm_payable.description,
        amount=Decimal(str(orm_payable.amount)),
        due_date=orm_payable.due_date,
        status=domain.PayableStatus.parse(orm_payable.status),
        payment_date=orm_payable.payment_date,
        supplier_id=orm_payable.supplier_id,
        category_id=orm_payable.category_id,
        cost_center_id=orm_payable.cost_center_id,
        notes=orm_payable.notes,
        recurrence=recurrence,
        attachment_url=orm_payable.attachment_url,
    )


def receivable_to_domain(orm_receivable: ORMAccountReceivable) -> domain.AccountReceivable:
    """Convert SQLAlchemy AccountReceivable model to domain AccountReceivable entity."""
    return domain.AccountReceivable(
        id=orm_receivable.id,
        description=orm_receivable.description,
        amount=Decimal(str(orm_receivable.amount)),
        due_date=orm_receivable.due_date,
        status=domain.ReceivableStatus.parse(orm_receivable.status),
        received_date=orm_receivable.received_date,
        client_id=orm_receivable.client_id,
        category_id=orm_receivable.category_id,
        notes=orm_receivable.notes,
    )
