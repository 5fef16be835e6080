"""Result values returned by the services."""

from dataclasses import dataclass

from zbank.models.account import Account
from zbank.models.exceptions import BankError
from zbank.models.transaction import Transaction


@dataclass
class ValidationResult:
    """Outcome of validating a caller-supplied value."""

    valid: bool
    error: str | None = None


@dataclass
class AuthResult:
    """Outcome of a login attempt."""

    success: bool
    account: Account | None = None
    failure: BankError | None = None

    @property
    def error(self) -> str | None:
        """The failure message, if any."""
        return str(self.failure) if self.failure is not None else None


@dataclass
class TransactionResult:
    """Outcome of a balance-changing request."""

    success: bool
    transaction: Transaction | None = None
    new_balance: int | None = None
    failure: BankError | None = None

    @property
    def error(self) -> str | None:
        """The failure message, if any."""
        return str(self.failure) if self.failure is not None else None
