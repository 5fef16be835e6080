"""Custom exceptions for the ledger."""


class BankError(Exception):
    """Base exception for all ledger errors."""
    pass


class ValidationError(BankError):
    """Raised when a field, format or amount fails validation."""
    pass


class InvalidAmountError(ValidationError):
    """Raised when an invalid amount is provided (e.g., zero or fractional cents)."""
    pass


class InvalidPinError(ValidationError):
    """Raised when a PIN is malformed or does not match the stored hash."""
    pass


class NotFoundError(BankError):
    """Raised when a referenced record cannot be found."""
    pass


class AccountNotFoundError(NotFoundError):
    """Raised when an account cannot be found."""
    pass


class AlreadyExistsError(BankError):
    """Raised when attempting to create a record that already exists."""
    pass


class AccountAlreadyExistsError(AlreadyExistsError):
    """Raised when attempting to create an account that already exists."""
    pass


class PersistenceError(BankError):
    """Raised when a collection file cannot be read, decoded or written."""
    pass


class TransferNotImplementedError(BankError):
    """Carried by the result of every transfer request; transfers never complete."""
    pass
