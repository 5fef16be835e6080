"""Transaction data model."""

import uuid
from dataclasses import dataclass
from datetime import datetime

from zbank.models.account import ACCOUNT_NUMBER_PATTERN, is_strict_int
from zbank.models.exceptions import ValidationError

DEPOSIT = "deposit"
WITHDRAWAL = "withdrawal"
TRANSFER = "transfer"
TRANSACTION_TYPES = (DEPOSIT, WITHDRAWAL, TRANSFER)

PENDING = "pending"
COMPLETED = "completed"
FAILED = "failed"
TRANSACTION_STATUSES = (PENDING, COMPLETED, FAILED)


@dataclass
class Transaction:
    """Represents one entry in the append-only transaction log."""

    id: str | None
    account_number: str
    type: str
    amount: int
    balance_before: int
    balance_after: int
    timestamp: datetime | None
    status: str
    description: str | None = None

    @classmethod
    def create(
        cls,
        account_number: str,
        type: str,
        amount: int,
        balance_before: int,
        balance_after: int,
        status: str = COMPLETED,
        description: str | None = None,
    ) -> "Transaction":
        """
        Create an unsaved transaction.

        The record store assigns ``id`` and ``timestamp`` when the
        transaction is appended.

        Args:
            account_number: The account the transaction applies to
            type: One of 'deposit', 'withdrawal', 'transfer'
            amount: The transaction amount in cents
            balance_before: Account balance before the mutation
            balance_after: Account balance after the mutation
            status: Transaction status (default 'completed')
            description: Optional free text

        Returns:
            A new Transaction with id=None and timestamp=None
        """
        return cls(
            id=None,
            account_number=account_number,
            type=type,
            amount=amount,
            balance_before=balance_before,
            balance_after=balance_after,
            timestamp=None,
            status=status,
            description=description,
        )

    def validate(self) -> None:
        """
        Check the fields and the before/after balance arithmetic.

        Raises:
            ValidationError: If any field is malformed or the balances
                do not match the transaction type
        """
        try:
            uuid.UUID(str(self.id))
        except ValueError:
            raise ValidationError(f"Invalid transaction id {self.id!r}")
        if not isinstance(self.account_number, str) or not ACCOUNT_NUMBER_PATTERN.fullmatch(
            self.account_number
        ):
            raise ValidationError(
                f"Invalid account number {self.account_number!r}: must be 10 digits"
            )
        if self.type not in TRANSACTION_TYPES:
            raise ValidationError(f"Unknown transaction type {self.type!r}")
        if self.status not in TRANSACTION_STATUSES:
            raise ValidationError(f"Unknown transaction status {self.status!r}")
        if not is_strict_int(self.amount) or self.amount <= 0:
            raise ValidationError(
                f"Transaction amount must be a positive whole number of cents, got {self.amount!r}"
            )
        if not is_strict_int(self.balance_before) or not is_strict_int(self.balance_after):
            raise ValidationError("Transaction balances must be whole numbers of cents")
        if not isinstance(self.timestamp, datetime) or self.timestamp.tzinfo is None:
            raise ValidationError("Transaction timestamp must be a timezone-aware datetime")
        if self.description is not None and not isinstance(self.description, str):
            raise ValidationError("Transaction description must be text")

        if self.type == DEPOSIT:
            expected = (self.balance_before + self.amount,)
        elif self.type == WITHDRAWAL:
            expected = (self.balance_before - self.amount,)
        else:
            # Transfers are recorded only as requests
            if self.status == COMPLETED:
                raise ValidationError("Transfers cannot be recorded as completed")
            expected = (
                self.balance_before - self.amount,
                self.balance_before + self.amount,
            )
        if self.balance_after not in expected:
            raise ValidationError(
                f"{self.type} of {self.amount} cannot move balance "
                f"from {self.balance_before} to {self.balance_after}"
            )
