"""Transaction service: deposits, withdrawals and balance lookups."""

import logging
import numbers

from zbank.models.exceptions import (
    AccountNotFoundError,
    InvalidAmountError,
    TransferNotImplementedError,
)
from zbank.models.results import TransactionResult, ValidationResult
from zbank.models.transaction import DEPOSIT, WITHDRAWAL, Transaction
from zbank.repositories.record_store import RecordStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_AMOUNT = 1_000_000_000  # $10M in cents


class TransactionService:
    """
    Service layer for balance-changing operations.

    Balances may go negative: withdrawals are never checked against the
    available balance. Each deposit or withdrawal performs one read, one
    log append and one account write; concurrent calls for the same account
    are not serialized here. Callers that need the read and write to be
    atomic should hold the store's advisory lock for the account.
    """

    def __init__(self, store: RecordStore, max_amount: int = DEFAULT_MAX_AMOUNT):
        """
        Initialize the TransactionService.

        Args:
            store: Record store holding accounts and the transaction log
            max_amount: Largest amount accepted in a single transaction,
                in cents (default: 1,000,000,000)
        """
        self._store = store
        self._max_amount = max_amount

    @classmethod
    def from_settings(cls, store: RecordStore, settings) -> 'TransactionService':
        """
        Build a service using the limits from a loaded Settings.

        Args:
            store: Record store holding accounts and the transaction log
            settings: A ``config.settings.Settings`` instance
        """
        return cls(store=store, max_amount=settings.max_transaction_amount)

    def validate_amount(self, amount) -> ValidationResult:
        """
        Validate a transaction amount in cents.

        Rules, in order: must be greater than zero, must be a whole number,
        must not exceed the maximum.
        """
        if isinstance(amount, bool) or not isinstance(amount, numbers.Real):
            return ValidationResult(valid=False, error="Amount must be in cents (whole number)")
        if amount <= 0:
            return ValidationResult(valid=False, error="Amount must be greater than zero")
        if not isinstance(amount, numbers.Integral):
            return ValidationResult(valid=False, error="Amount must be in cents (whole number)")
        if amount > self._max_amount:
            return ValidationResult(valid=False, error="Amount exceeds maximum limit")
        return ValidationResult(valid=True)

    def deposit(self, account_number: str, amount: int) -> TransactionResult:
        """
        Deposit funds into an account.

        Args:
            account_number: The account number
            amount: The amount in cents

        Returns:
            TransactionResult with the recorded transaction and new balance,
            or the failure (invalid amount, account not found)

        Raises:
            PersistenceError: If the store cannot be read or written
        """
        return self._apply(account_number, amount, DEPOSIT)

    def withdraw(self, account_number: str, amount: int) -> TransactionResult:
        """
        Withdraw funds from an account.

        No sufficient-funds check is made; the resulting balance may be
        negative and the withdrawal still succeeds.

        Args:
            account_number: The account number
            amount: The amount in cents

        Returns:
            TransactionResult with the recorded transaction and new balance,
            or the failure (invalid amount, account not found)

        Raises:
            PersistenceError: If the store cannot be read or written
        """
        return self._apply(account_number, amount, WITHDRAWAL)

    def transfer(self, from_account: str, to_account: str, amount: int) -> TransactionResult:
        """
        Transfer placeholder.

        Always fails without reading or writing anything.
        """
        return TransactionResult(
            success=False,
            failure=TransferNotImplementedError("Transfer functionality not implemented"),
        )

    def get_balance(self, account_number: str) -> int:
        """
        Get the current balance of an account.

        Returns:
            The balance in cents

        Raises:
            AccountNotFoundError: If the account doesn't exist
        """
        account = self._store.get_account(account_number)
        if account is None:
            raise AccountNotFoundError(f"Account {account_number} not found")
        return account.balance

    def get_history(self, account_number: str, limit: int | None = None) -> list[Transaction]:
        """Recent transactions for an account, most recent first."""
        return self._store.get_history(account_number, limit)

    def _apply(self, account_number: str, amount: int, type: str) -> TransactionResult:
        validation = self.validate_amount(amount)
        if not validation.valid:
            logger.info("Rejected %s of %r for %s: %s", type, amount, account_number, validation.error)
            return TransactionResult(success=False, failure=InvalidAmountError(validation.error))
        amount = int(amount)

        account = self._store.get_account(account_number)
        if account is None:
            logger.info("Rejected %s for unknown account %s", type, account_number)
            return TransactionResult(success=False, failure=AccountNotFoundError("Account not found"))

        if type == DEPOSIT:
            new_balance = account.balance + amount
        else:
            new_balance = account.balance - amount

        transaction = self._store.append_transaction(
            Transaction.create(
                account_number=account_number,
                type=type,
                amount=amount,
                balance_before=account.balance,
                balance_after=new_balance,
            )
        )
        self._store.update_account(account_number, balance=new_balance)

        if new_balance < 0:
            logger.info("Account %s is overdrawn at %d", account_number, new_balance)
        logger.info(
            "%s of %d on %s: %d -> %d", type, amount, account_number, account.balance, new_balance
        )
        return TransactionResult(success=True, transaction=transaction, new_balance=new_balance)
