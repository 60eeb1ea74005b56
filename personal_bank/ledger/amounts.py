"""Parsing of user-entered currency amounts."""

from decimal import Decimal, InvalidOperation
from typing import Optional

from personal_bank.models import MAX_MONEY, round_money


THOUSANDS_SEPARATOR = ","


def parse_amount(raw: Optional[str]) -> Optional[Decimal]:
    """
    Parse a user-entered amount such as "1,250.5".

    Thousands separators and surrounding whitespace are ignored. The
    positivity check is made on the parsed value before it is rounded
    to cents (half away from zero), so "0.004" is accepted as 0.00.

    Returns:
        The amount rounded to two decimals, or None if the text is not a
        finite number greater than zero and at most MAX_MONEY.
    """
    if raw is None:
        return None

    cleaned = raw.replace(THOUSANDS_SEPARATOR, "").strip()
    if not cleaned:
        return None

    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None

    if not value.is_finite() or value <= 0:
        return None

    try:
        amount = round_money(value)
    except ValueError:
        # Too large to represent in cents
        return None
    return amount if amount <= MAX_MONEY else None
