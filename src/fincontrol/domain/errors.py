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
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


def entity_not_found(kind: str, entity_id: int) -> str:
    """Return message for a missing entity, e.g. 'Client 3 not found'."""
    return f"{kind} {entity_id} not found"


def duplicate_name(kind: str, name: str) -> str:
    """Return message for a registry name that is already taken."""
    return f"{kind} with name '{name}' already exists"


def negative_amount(amount) -> str:
    """Return message for an amount below zero."""
    return f"Amount must not be negative (got {amount})"


def invalid_month(month: int) -> str:
    """Return message for a month outside 1..12."""
    return f"Month must be between 1 and 12 (got {month})"


def delete_blocked(kind: str, entity_id: int, payable_count: int, receivable_count: int) -> str:
    """Return message when a registry entry is still referenced by accounts."""
    parts = []
    if payable_count > 0:
        parts.append(f"{payable_count} payable{'s' if payable_count != 1 else ''}")
    if receivable_count > 0:
        parts.append(f"{receivable_count} receivable{'s' if receivable_count != 1 else ''}")
    return (
        f"Cannot delete {kind.lower()} {entity_id}: it is referenced by {' and '.join(parts)}. "
        "Please reassign or delete them first."
    )
