"""Accounts receivable domain service."""

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Optional, Union

from fincontrol.database.base import Database
from fincontrol.domain.aggregation import DUE_SOON_DAYS, is_overdue
from fincontrol.domain.entities import AccountReceivable, ReceivableStatus
from fincontrol.domain.errors import NotFoundError, ValidationError, entity_not_found
from fincontrol.domain.validation import coerce_amount, coerce_date, coerce_enum, require_text

logger = logging.getLogger(__name__)

RECEIVABLE_FIELDS = (
    "description",
    "amount",
    "due_date",
    "status",
    "received_date",
    "client_id",
    "category_id",
    "notes",
)


class ReceivableService:
    """Service for managing accounts receivable."""

    def __init__(self, db: Database):
        """Initialize receivable service.

        Args:
            db: Database instance
        """
        self.db = db

    def _clean_fields(self, fields: dict[str, Any]) -> dict[str, Any]:
        unknown = set(fields) - set(RECEIVABLE_FIELDS)
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
        if "received_date" in cleaned:
            cleaned["received_date"] = coerce_date(cleaned["received_date"], "received date")
        if "status" in cleaned:
            cleaned["status"] = coerce_enum(ReceivableStatus, cleaned["status"])

        if cleaned.get("client_id") is not None and self.db.get_client(cleaned["client_id"]) is None:
            raise NotFoundError(entity_not_found("Client", cleaned["client_id"]))
        if cleaned.get("category_id") is not None and self.db.get_category(cleaned["category_id"]) is None:
            raise NotFoundError(entity_not_found("Category", cleaned["category_id"]))
        return cleaned

    def create_receivable(
        self,
        description: str,
        amount: Union[Decimal, str],
        due_date: Union[date, str],
        status: Union[ReceivableStatus, str] = ReceivableStatus.PENDING,
        received_date: Union[date, str, None] = None,
        client_id: Optional[int] = None,
        category_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create an account receivable.

        Returns:
            Receivable ID

        Raises:
            ValidationError: If a value is malformed or a received account has no received date
            NotFoundError: If the client or category doesn't exist
        """
        cleaned = self._clean_fields(
            {
                "description": description,
                "amount": amount,
                "due_date": due_date,
                "status": status,
                "received_date": received_date,
                "client_id": client_id,
                "category_id": category_id,
                "notes": notes,
            }
        )
        if cleaned["status"] == ReceivableStatus.RECEIVED and cleaned["received_date"] is None:
            raise ValidationError("Received date is required for received accounts")

        receivable_id = self.db.create_receivable(**cleaned)
        logger.info(
            f"Created receivable {receivable_id} '{cleaned['description']}' amount={cleaned['amount']}"
        )
        return receivable_id

    def get_receivable(self, receivable_id: int) -> Optional[AccountReceivable]:
        return self.db.get_receivable(receivable_id)

    def list_receivables(
        self,
        status: Union[ReceivableStatus, str, None] = None,
        overdue_as_of: Optional[date] = None,
    ) -> list[AccountReceivable]:
        """List receivables, optionally by status or overdue on a date."""
        receivables = self.db.list_receivables()
        if status is not None:
            status = coerce_enum(ReceivableStatus, status)
            receivables = [r for r in receivables if r.status == status]
        if overdue_as_of is not None:
            receivables = [r for r in receivables if is_overdue(r, overdue_as_of)]
        return receivables

    def list_upcoming(self, today: date, days: int = DUE_SOON_DAYS) -> list[AccountReceivable]:
        """List pending receivables due within ``days`` of today (overdue ones included)."""
        return self.db.list_upcoming_receivables(until=today + timedelta(days=days))

    def update_receivable(self, receivable_id: int, **fields: Any) -> AccountReceivable:
        """Update receivable fields.

        Raises:
            NotFoundError: If the receivable or a referenced entity doesn't exist
            ValidationError: If a field is unknown or malformed
        """
        existing = self.db.get_receivable(receivable_id)
        if existing is None:
            raise NotFoundError(entity_not_found("Receivable", receivable_id))

        cleaned = self._clean_fields(fields)
        status = cleaned.get("status", existing.status)
        received_date = cleaned.get("received_date", existing.received_date)
        if status == ReceivableStatus.RECEIVED and received_date is None:
            raise ValidationError("Received date is required for received accounts")

        receivable = self.db.update_receivable(receivable_id, **cleaned)
        logger.info(f"Updated receivable {receivable_id}: {', '.join(sorted(cleaned))}")
        return receivable

    def mark_as_received(
        self, receivable_id: int, received_date: Union[date, str]
    ) -> AccountReceivable:
        """Mark a receivable as received on the given date.

        Raises:
            NotFoundError: If the receivable doesn't exist
            ValidationError: If received_date is malformed
        """
        received_date = coerce_date(received_date, "received date")
        if received_date is None:
            raise ValidationError("Received date is required")

        receivable = self.db.mark_receivable_received(receivable_id, received_date)
        if receivable is None:
            raise NotFoundError(entity_not_found("Receivable", receivable_id))
        logger.info(f"Marked receivable {receivable_id} as received on {received_date.isoformat()}")
        return receivable

    def delete_receivable(self, receivable_id: int) -> None:
        """Delete a receivable.

        Raises:
            NotFoundError: If the receivable doesn't exist
        """
        if not self.db.delete_receivable(receivable_id):
            raise NotFoundError(entity_not_found("Receivable", receivable_id))
        logger.info(f"Deleted receivable {receivable_id}")
