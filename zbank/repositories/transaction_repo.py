"""Transaction repository for the append-only transaction log."""

from dataclasses import replace
from datetime import datetime
from pathlib import Path

from zbank.models.transaction import Transaction
from zbank.repositories.json_file import JsonCollectionFile

TRANSACTIONS_FILE = "transactions.json"


def transaction_to_record(txn: Transaction) -> dict:
    """Serialize a Transaction to its JSON record."""
    return {
        "id": txn.id,
        "accountNumber": txn.account_number,
        "type": txn.type,
        "amount": txn.amount,
        "balanceBefore": txn.balance_before,
        "balanceAfter": txn.balance_after,
        "timestamp": txn.timestamp.isoformat(),
        "status": txn.status,
        "description": txn.description,
    }


def record_to_transaction(record: dict) -> Transaction:
    """Deserialize and validate a JSON record."""
    txn = Transaction(
        id=record["id"],
        account_number=record["accountNumber"],
        type=record["type"],
        amount=record["amount"],
        balance_before=record["balanceBefore"],
        balance_after=record["balanceAfter"],
        timestamp=datetime.fromisoformat(record["timestamp"]),
        status=record["status"],
        description=record.get("description"),
    )
    txn.validate()
    return txn


def _decode(document: list) -> list[Transaction]:
    return [record_to_transaction(record) for record in document]


def _encode(transactions: list[Transaction]) -> list:
    return [transaction_to_record(txn) for txn in transactions]


class TransactionRepository:
    """Repository for the transaction log, stored in insertion order."""

    def __init__(self, data_dir: str | Path):
        """
        Initialize the repository.

        Args:
            data_dir: Directory holding transactions.json
        """
        self._file = JsonCollectionFile(
            Path(data_dir) / TRANSACTIONS_FILE,
            empty_factory=list,
            decode=_decode,
            encode=_encode,
        )

    @property
    def file(self) -> JsonCollectionFile:
        return self._file

    def last_timestamp(self) -> datetime | None:
        """Timestamp of the most recently appended transaction, if any."""
        transactions = self._file.load()
        return transactions[-1].timestamp if transactions else None

    def append(self, txn: Transaction) -> None:
        """
        Append a fully populated transaction and persist the whole log.

        Args:
            txn: Transaction with id and timestamp already assigned

        Raises:
            ValidationError: If the transaction is malformed
        """
        txn.validate()
        transactions = self._file.load()
        transactions.append(replace(txn))
        self._file.save(transactions)

    def find_by_account(self, account_number: str, limit: int | None = None) -> list[Transaction]:
        """
        Find transactions for an account.

        Args:
            account_number: The account number to search for
            limit: Maximum number of transactions to return; None or a
                non-positive value returns all of them

        Returns:
            List of transactions, most recent first
        """
        matching = [
            (position, txn)
            for position, txn in enumerate(self._file.load())
            if txn.account_number == account_number
        ]
        # Newest timestamp first; equal timestamps fall back to insertion order
        matching.sort(key=lambda item: (item[1].timestamp, item[0]), reverse=True)
        history = [replace(txn) for _, txn in matching]

        if limit is not None and limit > 0:
            return history[:limit]
        return history
