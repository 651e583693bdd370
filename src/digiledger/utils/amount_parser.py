"""Amount parsing utilities.

Amounts are always exact ``Decimal`` values; binary floating point is
never involved so that debit and credit totals can be compared exactly.
"""

from decimal import Decimal, InvalidOperation
import re

# Optional sign, digits with optional comma grouping, optional fraction.
_AMOUNT_PATTERN = re.compile(r"^[+-]?(?:\d{1,3}(?:,\d{3})+|\d+)?(?:\.\d*)?$")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles formats such as:
    - "123.45"
    - "-123.45"
    - "1,234.56"
    - ".5"

    Exponents, "NaN" and "Infinity" are rejected.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if amount_str is None or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    if not _AMOUNT_PATTERN.match(amount_str) or not any(c.isdigit() for c in amount_str):
        raise ValueError(f"Could not parse amount '{amount_str}'")

    try:
        return Decimal(amount_str.replace(",", ""))
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")


def parse_optional_amount(amount_str: str | None) -> Decimal:
    """Parse an amount where a blank value means zero.

    Raises:
        ValueError: If a non-blank amount string cannot be parsed
    """
    if amount_str is None or not amount_str.strip():
        return Decimal("0")
    return parse_amount(amount_str)
