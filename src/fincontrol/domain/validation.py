"""Input coercion shared by the domain services.

Values may arrive as domain types or as raw strings from the CLI; both are
accepted and anything malformed is rejected with ValidationError.
"""

from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

from fincontrol.domain.errors import ValidationError, negative_amount
from fincontrol.utils.amount_parser import CENTS, parse_amount
from fincontrol.utils.date_parser import parse_iso_date


def require_text(value: Optional[str], field: str) -> str:
    """Return stripped text, rejecting None and blank strings."""
    if value is None or not value.strip():
        raise ValidationError(f"{field} must not be empty")
    return value.strip()


def coerce_amount(value: Union[Decimal, str, int]) -> Decimal:
    """Return a non-negative Decimal amount rounded to cents."""
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int) and not isinstance(value, bool):
        amount = Decimal(value)
    elif isinstance(value, str):
        try:
            return parse_amount(value)
        except ValueError as e:
            raise ValidationError(str(e))
    else:
        raise ValidationError(f"Invalid amount {value!r}")

    if not amount.is_finite():
        raise ValidationError(f"Invalid amount {value!r}")
    if amount < 0:
        raise ValidationError(negative_amount(amount))
    try:
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValidationError(f"Invalid amount {value!r}")


def coerce_date(value: Union[date, str, None], field: str) -> Optional[date]:
    """Return a date, parsing ``YYYY-MM-DD`` strings."""
    if value is None or isinstance(value, date):
        return value
    try:
        return parse_iso_date(value)
    except ValueError as e:
        raise ValidationError(f"Invalid {field}: {e}")


def coerce_enum(enum_cls, value, optional: bool = False):
    """Parse a value into ``enum_cls``, allowing None when ``optional``."""
    if value is None or value == "":
        if optional:
            return None
        raise ValidationError(f"{enum_cls.label().capitalize()} is required")
    try:
        return enum_cls.parse(value)
    except ValueError as e:
        raise ValidationError(str(e))
