"""Data models for the ledger."""

from .account import Account
from .transaction import Transaction
from .results import AuthResult, TransactionResult, ValidationResult
from .exceptions import (
    BankError,
    ValidationError,
    InvalidAmountError,
    InvalidPinError,
    NotFoundError,
    AccountNotFoundError,
    AlreadyExistsError,
    AccountAlreadyExistsError,
    PersistenceError,
    TransferNotImplementedError,
)

__all__ = [
    "Account",
    "Transaction",
    "AuthResult",
    "TransactionResult",
    "ValidationResult",
    "BankError",
    "ValidationError",
    "InvalidAmountError",
    "InvalidPinError",
    "NotFoundError",
    "AccountNotFoundError",
    "AlreadyExistsError",
    "AccountAlreadyExistsError",
    "PersistenceError",
    "TransferNotImplementedError",
]
