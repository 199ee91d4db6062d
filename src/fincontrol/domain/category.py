"""Category domain service."""

import logging
from typing import Any, Optional, Union

from fincontrol.database.base import Database
from fincontrol.domain.entities import Category, CategoryType, DRECategory
from fincontrol.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    delete_blocked,
    duplicate_name,
    entity_not_found,
)
from fincontrol.domain.validation import coerce_enum, require_text

logger = logging.getLogger(__name__)


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_unique_name(self, name: str, exclude_id: Optional[int] = None) -> None:
        for cat in self.db.list_categories():
            if cat.id != exclude_id and cat.name.lower() == name.lower():
                raise ConflictError(duplicate_name("Category", name))

    def create_category(
        self,
        name: str,
        category_type: Union[CategoryType, str],
        dre_category: Union[DRECategory, str, None] = None,
    ) -> int:
        """Create a category.

        Args:
            name: Category name
            category_type: "income" or "expense"
            dre_category: Optional DRE line ("revenue", "deductions", "costs",
                "operational_expenses")

        Returns:
            Category ID

        Raises:
            ValidationError: If name is empty or a type value is not recognized
            ConflictError: If a category with the same name exists
        """
        name = require_text(name, "Name")
        category_type = coerce_enum(CategoryType, category_type)
        dre_category = coerce_enum(DRECategory, dre_category, optional=True)
        self._check_unique_name(name)

        category_id = self.db.create_category(
            name=name, category_type=category_type, dre_category=dre_category
        )
        logger.info(f"Created category {category_id} '{name}' ({category_type}, dre={dre_category})")
        return category_id

    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID.

        Args:
            category_id: Category ID

        Returns:
            Category entity or None if not found
        """
        return self.db.get_category(category_id)

    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by name (case-insensitive)."""
        for cat in self.db.list_categories():
            if cat.name.lower() == name.strip().lower():
                return cat
        return None

    def list_categories(self, category_type: Union[CategoryType, str, None] = None) -> list[Category]:
        """List categories, optionally filtered by type.

        Args:
            category_type: Optional "income" or "expense" filter

        Returns:
            List of category entities
        """
        categories = self.db.list_categories()
        if category_type is None:
            return categories
        category_type = coerce_enum(CategoryType, category_type)
        return [c for c in categories if c.category_type == category_type]

    def update_category(self, category_id: int, **fields: Any) -> Category:
        """Update category fields (name, category_type, dre_category).

        Raises:
            NotFoundError: If the category does not exist
            ValidationError: If a field is unknown or a value is invalid
            ConflictError: If renaming to an existing name
        """
        unknown = set(fields) - {"name", "category_type", "dre_category"}
        if unknown:
            raise ValidationError(f"Unknown field(s): {', '.join(sorted(unknown))}")

        if self.db.get_category(category_id) is None:
            raise NotFoundError(entity_not_found("Category", category_id))

        cleaned = dict(fields)
        if "name" in cleaned:
            cleaned["name"] = require_text(cleaned["name"], "Name")
            self._check_unique_name(cleaned["name"], exclude_id=category_id)
        if "category_type" in cleaned:
            cleaned["category_type"] = coerce_enum(CategoryType, cleaned["category_type"])
        if "dre_category" in cleaned:
            cleaned["dre_category"] = coerce_enum(
                DRECategory, cleaned["dre_category"], optional=True
            )

        category = self.db.update_category(category_id, **cleaned)
        logger.info(f"Updated category {category_id}: {', '.join(sorted(cleaned))}")
        return category

    def delete_category(self, category_id: int) -> None:
        """Delete a category.

        Raises:
            NotFoundError: If the category does not exist
            DependencyError: If payables or receivables reference it
        """
        if self.db.get_category(category_id) is None:
            raise NotFoundError(entity_not_found("Category", category_id))

        payable_count = self.db.count_payables(category_id=category_id)
        receivable_count = self.db.count_receivables(category_id=category_id)
        if payable_count > 0 or receivable_count > 0:
            raise DependencyError(
                delete_blocked("Category", category_id, payable_count, receivable_count)
            )

        self.db.delete_category(category_id)
        logger.info(f"Deleted category {category_id}")
