"""Record store: accounts, the transaction log and advisory locks."""

import logging
import uuid
from dataclasses import fields, replace
from datetime import datetime, timezone
from pathlib import Path

from zbank.models.account import Account
from zbank.models.exceptions import AccountNotFoundError, ValidationError
from zbank.models.transaction import Transaction
from zbank.repositories.account_repo import AccountRepository
from zbank.repositories.lock_registry import LockRegistry
from zbank.repositories.transaction_repo import TransactionRepository

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset(f.name for f in fields(Account)) - {
    "account_number",
    "created_at",
    "updated_at",
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RecordStore:
    """
    Durable storage for the ledger.

    Owns ``accounts.json`` (an object keyed by account number) and
    ``transactions.json`` (an array in insertion order) inside ``data_dir``,
    plus an in-memory lock registry. Every mutation rewrites the whole
    affected file through an atomic rename, so a write costs O(collection
    size); this is meant for small single-user datasets.

    Locks are advisory and process-local. Two processes pointing at the same
    directory never corrupt a file, but an update made by one can be lost
    when the other writes a snapshot it read earlier.
    """

    def __init__(self, data_dir: str | Path):
        """
        Initialize the store.

        Args:
            data_dir: Directory holding the collection files; created on
                first use
        """
        self._data_dir = Path(data_dir)
        self._accounts = AccountRepository(self._data_dir)
        self._transactions = TransactionRepository(self._data_dir)
        self._locks = LockRegistry()

    @property
    def data_dir(self) -> Path:
        """Directory holding the collection files."""
        return self._data_dir

    def initialize(self) -> None:
        """Create the data directory and empty collection files if missing."""
        self._accounts.file.ensure_exists()
        self._transactions.file.ensure_exists()

    # Accounts

    def get_account(self, account_number: str) -> Account | None:
        """Return the account, or None if it does not exist."""
        return self._accounts.find_by_account_number(account_number)

    def create_account(self, account_number: str, pin_hash: str, balance: int = 0) -> Account:
        """
        Create a new account.

        Args:
            account_number: 10-digit account number
            pin_hash: Hash of the account PIN
            balance: Opening balance in cents

        Returns:
            The created Account, with created_at == updated_at == now

        Raises:
            AccountAlreadyExistsError: If the account number is taken
            ValidationError: If any field is malformed
        """
        now = utc_now()
        account = Account(
            account_number=account_number,
            pin_hash=pin_hash,
            balance=balance,
            created_at=now,
            updated_at=now,
        )
        self._accounts.create(account)
        logger.info("Created account %s", account_number)
        return account

    def update_account(self, account_number: str, /, **changes) -> Account:
        """
        Merge ``changes`` into an existing account.

        ``account_number`` in ``changes`` is ignored; the account number
        never changes. ``updated_at`` is always refreshed.

        Returns:
            The updated Account

        Raises:
            AccountNotFoundError: If the account doesn't exist
            ValidationError: If a field name is unknown or the merged
                account is malformed
        """
        changes.pop("account_number", None)
        changes.pop("updated_at", None)
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update account fields: {', '.join(sorted(unknown))}")

        existing = self._accounts.find_by_account_number(account_number)
        if existing is None:
            raise AccountNotFoundError(f"Account {account_number} not found")

        updated = replace(existing, **changes, updated_at=utc_now())
        self._accounts.update(updated)
        logger.debug("Updated account %s fields %s", account_number, sorted(changes))
        return updated

    def delete_account(self, account_number: str) -> bool:
        """Delete an account. Returns whether it existed."""
        deleted = self._accounts.delete(account_number)
        if deleted:
            logger.info("Deleted account %s", account_number)
        return deleted

    def list_accounts(self) -> list[Account]:
        """Return every account, in no guaranteed order."""
        return self._accounts.list_all()

    # Transactions

    def append_transaction(self, txn: Transaction) -> Transaction:
        """
        Append a transaction to the log.

        Assigns a UUID4 ``id`` and a ``timestamp`` that is never earlier than
        the previous entry's, validates, then persists the full log.

        Returns:
            The stored Transaction

        Raises:
            ValidationError: If the transaction breaks the log invariants
        """
        timestamp = utc_now()
        last = self._transactions.last_timestamp()
        if last is not None and last > timestamp:
            timestamp = last

        stored = replace(txn, id=str(uuid.uuid4()), timestamp=timestamp)
        self._transactions.append(stored)
        logger.debug("Appended %s transaction %s for %s", stored.type, stored.id, stored.account_number)
        return stored

    def get_history(self, account_number: str, limit: int | None = None) -> list[Transaction]:
        """
        Return an account's transactions, most recent first.

        Args:
            account_number: The account number
            limit: Return at most this many; None or <= 0 means all
        """
        return self._transactions.find_by_account(account_number, limit)

    # Locks

    def acquire_lock(self, account_number: str) -> bool:
        """True if the lock was free and is now held; False if already held."""
        return self._locks.acquire(account_number)

    def release_lock(self, account_number: str) -> bool:
        """True if a held lock was released; False if there was none."""
        return self._locks.release(account_number)

    def is_locked(self, account_number: str) -> bool:
        """Whether the advisory lock for the account is held."""
        return self._locks.is_locked(account_number)
