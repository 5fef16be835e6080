"""Account data model."""

import re
from dataclasses import dataclass
from datetime import datetime

from zbank.models.exceptions import ValidationError

ACCOUNT_NUMBER_PATTERN = re.compile(r"[0-9]{10}")


def is_strict_int(value) -> bool:
    """Return True for ints that are not bools."""
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class Account:
    """Represents a ledger account. Balances are in cents and may be negative."""

    account_number: str
    pin_hash: str
    balance: int
    created_at: datetime
    updated_at: datetime

    def validate(self) -> None:
        """
        Check the account fields.

        Raises:
            ValidationError: If any field is malformed
        """
        if not isinstance(self.account_number, str) or not ACCOUNT_NUMBER_PATTERN.fullmatch(
            self.account_number
        ):
            raise ValidationError(
                f"Invalid account number {self.account_number!r}: must be 10 digits"
            )
        if not isinstance(self.pin_hash, str) or not self.pin_hash:
            raise ValidationError(
                f"Account {self.account_number} has an empty PIN hash"
            )
        if not is_strict_int(self.balance):
            raise ValidationError(
                f"Account {self.account_number} balance must be a whole number of cents"
            )
        for name in ("created_at", "updated_at"):
            value = getattr(self, name)
            if not isinstance(value, datetime) or value.tzinfo is None:
                raise ValidationError(
                    f"Account {self.account_number} {name} must be a timezone-aware datetime"
                )
