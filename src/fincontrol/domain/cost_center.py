"""Cost center domain service."""

import logging
from typing import Any, Optional

from fincontrol.database.base import Database
from fincontrol.domain.entities import CostCenter
from fincontrol.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    delete_blocked,
    duplicate_name,
    entity_not_found,
)
from fincontrol.domain.validation import require_text

logger = logging.getLogger(__name__)


class CostCenterService:
    """Service for managing cost centers."""

    def __init__(self, db: Database):
        self.db = db

    def _check_unique_name(self, name: str, exclude_id: Optional[int] = None) -> None:
        for cc in self.db.list_cost_centers():
            if cc.id != exclude_id and cc.name.lower() == name.lower():
                raise ConflictError(duplicate_name("Cost center", name))

    def create_cost_center(self, name: str, description: Optional[str] = None) -> int:
        """Create a cost center.

        Raises:
            ValidationError: If name is empty
            ConflictError: If a cost center with the same name exists
        """
        name = require_text(name, "Name")
        self._check_unique_name(name)
        cost_center_id = self.db.create_cost_center(name=name, description=description)
        logger.info(f"Created cost center {cost_center_id} '{name}'")
        return cost_center_id

    def get_cost_center(self, cost_center_id: int) -> Optional[CostCenter]:
        return self.db.get_cost_center(cost_center_id)

    def list_cost_centers(self) -> list[CostCenter]:
        return self.db.list_cost_centers()

    def update_cost_center(self, cost_center_id: int, **fields: Any) -> CostCenter:
        """Update cost center name and/or description."""
        unknown = set(fields) - {"name", "description"}
        if unknown:
            raise ValidationError(f"Unknown field(s): {', '.join(sorted(unknown))}")

        cleaned = dict(fields)
        if "name" in cleaned:
            cleaned["name"] = require_text(cleaned["name"], "Name")
            self._check_unique_name(cleaned["name"], exclude_id=cost_center_id)

        cost_center = self.db.update_cost_center(cost_center_id, **cleaned)
        if cost_center is None:
            raise NotFoundError(entity_not_found("Cost center", cost_center_id))
        logger.info(f"Updated cost center {cost_center_id}: {', '.join(sorted(cleaned))}")
        return cost_center

    def delete_cost_center(self, cost_center_id: int) -> None:
        """Delete a cost center that no payable references."""
        if self.db.get_cost_center(cost_center_id) is None:
            raise NotFoundError(entity_not_found("Cost center", cost_center_id))

        payable_count = self.db.count_payables(cost_center_id=cost_center_id)
        if payable_count > 0:
            raise DependencyError(delete_blocked("Cost center", cost_center_id, payable_count, 0))

        self.db.delete_cost_center(cost_center_id)
        logger.info(f"Deleted cost center {cost_center_id}")
