"""Account repository for the accounts JSON file."""

from dataclasses import replace
from datetime import datetime
from pathlib import Path

from zbank.models.account import Account
from zbank.models.exceptions import AccountAlreadyExistsError, AccountNotFoundError
from zbank.repositories.json_file import JsonCollectionFile

ACCOUNTS_FILE = "accounts.json"


def account_to_record(account: Account) -> dict:
    """Serialize an Account to its JSON record."""
    return {
        "accountNumber": account.account_number,
        "pinHash": account.pin_hash,
        "balance": account.balance,
        "createdAt": account.created_at.isoformat(),
        "updatedAt": account.updated_at.isoformat(),
    }


def record_to_account(record: dict) -> Account:
    """Deserialize and validate a JSON record."""
    account = Account(
        account_number=record["accountNumber"],
        pin_hash=record["pinHash"],
        balance=record["balance"],
        created_at=datetime.fromisoformat(record["createdAt"]),
        updated_at=datetime.fromisoformat(record["updatedAt"]),
    )
    account.validate()
    return account


def _decode(document: dict) -> dict[str, Account]:
    accounts = {}
    for key, record in document.items():
        account = record_to_account(record)
        if account.account_number != key:
            raise ValueError(
                f"record keyed {key!r} holds account {account.account_number!r}"
            )
        accounts[key] = account
    return accounts


def _encode(accounts: dict[str, Account]) -> dict:
    return {key: account_to_record(account) for key, account in accounts.items()}


class AccountRepository:
    """Repository for Account data access, keyed by account number."""

    def __init__(self, data_dir: str | Path):
        """
        Initialize the repository.

        Args:
            data_dir: Directory holding accounts.json
        """
        self._file = JsonCollectionFile(
            Path(data_dir) / ACCOUNTS_FILE,
            empty_factory=dict,
            decode=_decode,
            encode=_encode,
        )

    @property
    def file(self) -> JsonCollectionFile:
        return self._file

    def find_by_account_number(self, account_number: str) -> Account | None:
        """
        Find an account by account number.

        Args:
            account_number: The account number to search for

        Returns:
            A copy of the Account if found, None otherwise
        """
        account = self._file.load().get(account_number)
        return replace(account) if account is not None else None

    def exists(self, account_number: str) -> bool:
        """Check if an account exists."""
        return account_number in self._file.load()

    def list_all(self) -> list[Account]:
        """Return copies of every account, in no guaranteed order."""
        return [replace(account) for account in self._file.load().values()]

    def create(self, account: Account) -> None:
        """
        Create a new account.

        Args:
            account: The Account object to create

        Raises:
            AccountAlreadyExistsError: If the account number is already taken
            ValidationError: If the account is malformed
        """
        account.validate()
        accounts = self._file.load()
        if account.account_number in accounts:
            raise AccountAlreadyExistsError(
                f"Account {account.account_number} already exists"
            )
        accounts[account.account_number] = replace(account)
        self._file.save(accounts)

    def update(self, account: Account) -> None:
        """
        Replace a stored account with ``account``.

        Raises:
            AccountNotFoundError: If the account doesn't exist
            ValidationError: If the account is malformed
        """
        account.validate()
        accounts = self._file.load()
        if account.account_number not in accounts:
            raise AccountNotFoundError(f"Account {account.account_number} not found")
        accounts[account.account_number] = replace(account)
        self._file.save(accounts)

    def delete(self, account_number: str) -> bool:
        """
        Delete an account.

        Returns:
            True if the account existed and was removed, False otherwise
        """
        accounts = self._file.load()
        if account_number not in accounts:
            return False
        del accounts[account_number]
        self._file.save(accounts)
        return True
