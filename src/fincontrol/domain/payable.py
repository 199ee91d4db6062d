"""Accounts payable domain service."""

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Optional, Union

from fincontrol.database.base import Database
from fincontrol.domain.aggregation import DUE_SOON_DAYS, is_overdue
from fincontrol.domain.entities import AccountPayable, PayableStatus, Recurrence
from fincontrol.domain.errors import NotFoundError, ValidationError, entity_not_found
from fincontrol.domain.validation import coerce_amount, coerce_date, coerce_enum, require_text

logger = logging.getLogger(__name__)

PAYABLE_FIELDS = (
    "description",
    "amount",
    "due_date",
    "status",
    "payment_date",
    "supplier_id",
    "category_id",
    "cost_center_id",
    "notes",
    "recurrence",
    "attachment_url",
)


class PayableService:
    """Service for managing accounts payable."""

    def __init__(self, db: Database):
        """Initialize payable service.

        Args:
            db: Database instance
        """
        self.db = db

    def _clean_fields(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Validate and coerce payable fields, checking references exist."""
        unknown = set(fields) - set(PAYABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown field(s): {', '.join(sorted(unknown))}")

        cleaned = dict(fields)
        if "description" in cleaned:
            cleaned["description"] = require_text(cleaned["description"], "Description")
        if "amount" in cleaned:
            cleaned["amount"] = coerce_amount(cleaned["amount"])
        if "due_date" in cleaned:
            cleaned["due_date"] = coerce_date(cleaned["due_date"], "due date")
            if cleaned["due_date"] is None:
                raise ValidationError("Due date is required")
        if "payment_date" in cleaned:
            cleaned["payment_date"] = coerce_date(cleaned["payment_date"], "payment date")
        if "status" in cleaned:
            cleaned["status"] = coerce_enum(PayableStatus, cleaned["status"])
        if "recurrence" in cleaned:
            cleaned["recurrence"] = coerce_enum(Recurrence, cleaned["recurrence"], optional=True)

        if cleaned.get("supplier_id") is not None and self.db.get_supplier(cleaned["supplier_id"]) is None:
            raise NotFoundError(entity_not_found("Supplier", cleaned["supplier_id"]))
        if cleaned.get("category_id") is not None and self.db.get_category(cleaned["category_id"]) is None:
            raise NotFoundError(entity_not_found("Category", cleaned["category_id"]))
        if (
            cleaned.get("cost_center_id") is not None
            and self.db.get_cost_center(cleaned["cost_center_id"]) is None
        ):
            raise NotFoundError(entity_not_found("Cost center", cleaned["cost_center_id"]))
        return cleaned

    def create_payable(
        self,
        description: str,
        amount: Union[Decimal, str],
        due_date: Union[date, str],
        status: Union[PayableStatus, str] = PayableStatus.PENDING,
        payment_date: Union[date, str, None] = None,
        supplier_id: Optional[int] = None,
        category_id: Optional[int] = None,
        cost_center_id: Optional[int] = None,
        notes: Optional[str] = None,
        recurrence: Union[Recurrence, str, None] = None,
        attachment_url: Optional[str] = None,
    ) -> int:
        """Create an account payable.

        Args:
            description: What the payment is for
            amount: Non-negative amount
            due_date: Due date
            status: "pending" (default) or "paid"
            payment_date: Required when status is "paid"
            supplier_id: Optional supplier ID
            category_id: Optional category ID
            cost_center_id: Optional cost center ID
            notes: Optional notes
            recurrence: Optional "none", "weekly" or "monthly"
            attachment_url: Optional link to a receipt or invoice

        Returns:
            Payable ID

        Raises:
            ValidationError: If a value is malformed or a paid payable has no payment date
            NotFoundError: If a referenced supplier, category or cost center doesn't exist
        """
        cleaned = self._clean_fields(
            {
                "description": description,
                "amount": amount,
                "due_date": due_date,
                "status": status,
                "payment_date": payment_date,
                "supplier_id": supplier_id,
                "category_id": category_id,
                "cost_center_id": cost_center_id,
                "notes": notes,
                "recurrence": recurrence,
                "attachment_url": attachment_url,
            }
        )
        if cleaned["status"] == PayableStatus.PAID and cleaned["payment_date"] is None:
            raise ValidationError("Payment date is required for paid payables")

        payable_id = self.db.create_payable(**cleaned)
        logger.info(f"Created payable {payable_id} '{cleaned['description']}' amount={cleaned['amount']}")
        return payable_id

    def get_payable(self, payable_id: int) -> Optional[AccountPayable]:
        """Get payable by ID.

        Returns:
            Payable entity or None if not found
        """
        return self.db.get_payable(payable_id)

    def list_payables(
        self,
        status: Union[PayableStatus, str, None] = None,
        overdue_as_of: Optional[date] = None,
    ) -> list[AccountPayable]:
        """List payables.

        Args:
            status: Optional stored status filter
            overdue_as_of: If given, only payables overdue on that date
        """
        payables = self.db.list_payables()
        if status is not None:
            status = coerce_enum(PayableStatus, status)
            payables = [p for p in payables if p.status == status]
        if overdue_as_of is not None:
            payables = [p for p in payables if is_overdue(p, overdue_as_of)]
        return payables

    def list_upcoming(self, today: date, days: int = DUE_SOON_DAYS) -> list[AccountPayable]:
        """List pending payables due within ``days`` of today (overdue ones included)."""
        return self.db.list_upcoming_payables(until=today + timedelta(days=days))

    def update_payable(self, payable_id: int, **fields: Any) -> AccountPayable:
        """Update payable fields.

        Raises:
            NotFoundError: If the payable or a referenced entity doesn't exist
            ValidationError: If a field is unknown or malformed
        """
        existing = self.db.get_payable(payable_id)
        if existing is None:
            raise NotFoundError(entity_not_found("Payable", payable_id))

        cleaned = self._clean_fields(fields)
        status = cleaned.get("status", existing.status)
        payment_date = cleaned.get("payment_date", existing.payment_date)
        if status == PayableStatus.PAID and payment_date is None:
            raise ValidationError("Payment date is required for paid payables")

        payable = self.db.update_payable(payable_id, **cleaned)
        logger.info(f"Updated payable {payable_id}: {', '.join(sorted(cleaned))}")
        return payable

    def mark_as_paid(self, payable_id: int, payment_date: Union[date, str]) -> AccountPayable:
        """Mark a payable as paid on the given date.

        Raises:
            NotFoundError: If the payable doesn't exist
            ValidationError: If payment_date is malformed
        """
        payment_date = coerce_date(payment_date, "payment date")
        if payment_date is None:
            raise ValidationError("Payment date is required")

        payable = self.db.mark_payable_paid(payable_id, payment_date)
        if payable is None:
            raise NotFoundError(entity_not_found("Payable", payable_id))
        logger.info(f"Marked payable {payable_id} as paid on {payment_date.isoformat()}")
        return payable

    def delete_payable(self, payable_id: int) -> None:
        """Delete a payable.

        Raises:
            NotFoundError: If the payable doesn't exist
        """
        if not self.db.delete_payable(payable_id):
            raise NotFoundError(entity_not_found("Payable", payable_id))
        logger.info(f"Deleted payable {payable_id}")
