"""Input format checks and cent/dollar conversions."""

import re
from decimal import ROUND_HALF_UP, Decimal

from zbank.models.account import ACCOUNT_NUMBER_PATTERN, is_strict_int

PIN_PATTERN = re.compile(r"[0-9]{4}")


def is_valid_account_number(account_number) -> bool:
    """Account numbers are exactly 10 digits."""
    return isinstance(account_number, str) and ACCOUNT_NUMBER_PATTERN.fullmatch(account_number) is not None


def is_valid_pin(pin) -> bool:
    """PINs are exactly 4 digits."""
    return isinstance(pin, str) and PIN_PATTERN.fullmatch(pin) is not None


def is_valid_amount(amount) -> bool:
    """A positive whole number of cents."""
    return is_strict_int(amount) and amount > 0


def dollars_to_cents(dollars) -> int:
    """Convert a dollar amount to cents, rounding half away from zero."""
    return int(Decimal(str(dollars)).scaleb(2).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def cents_to_dollars(cents: int) -> Decimal:
    return Decimal(cents).scaleb(-2)


def sanitize_numeric_input(value: str) -> str:
    """Strip everything but digits."""
    return re.sub(r"\D", "", value)


def pad_account_number(account_number: str) -> str:
    """Left-pad a short account number with zeros to 10 digits."""
    return account_number.zfill(10)
