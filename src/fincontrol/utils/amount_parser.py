"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

CENTS = Decimal("0.01")


def parse_amount(amount_str: str) -> Decimal:
    """Parse a currency amount string into a Decimal rounded to cents.

    Handles various formats:
    - "123.45"
    - "$123.45", "R$ 123.45"
    - "1,234.56"
    - "1.234,56" (comma as decimal separator)

    Amounts are never negative; the sign of a movement comes from whether it
    is a payable or a receivable.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount with two decimal places

    Raises:
        ValueError: If amount string cannot be parsed or is negative
    """
    if amount_str is None or not str(amount_str).strip():
        raise ValueError("Empty amount string")

    # Remove whitespace
    cleaned = str(amount_str).strip()

    # Remove currency symbols
    cleaned = re.sub(r"R\$|[$€£¥]", "", cleaned).strip()

    if "," in cleaned and "." in cleaned:
        if cleaned.rfind(",") > cleaned.rfind("."):
            # 1.234,56
            cleaned = cleaned.replace(".", "").replace(",", ".")
        else:
            # 1,234.56
            cleaned = cleaned.replace(",", "")
    elif "," in cleaned:
        # A single comma followed by one or two digits is a decimal separator
        if re.fullmatch(r"-?\d+,\d{1,2}", cleaned):
            cleaned = cleaned.replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if amount < 0:
        raise ValueError(f"Amount must not be negative (got '{amount_str}')")

    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
