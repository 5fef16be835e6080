"""Display formatting for balances, timestamps and transaction history."""

import re
from datetime import datetime
from decimal import Decimal, InvalidOperation

from tabulate import tabulate

from zbank.models.account import Account
from zbank.models.transaction import Transaction
from zbank.utils.validation import dollars_to_cents

HISTORY_HEADER = ["Time", "Type", "Amount", "Balance", "Status"]
ACCOUNTS_HEADER = ["Account", "Balance", "Updated"]


def format_balance(cents: int) -> str:
    """Format cents as dollars, e.g. 150 -> '$1.50', -150 -> '-$1.50'."""
    sign = "-" if cents < 0 else ""
    dollars, remainder = divmod(abs(cents), 100)
    return f"{sign}${dollars}.{remainder:02d}"


def format_timestamp(moment: datetime) -> str:
    """Format as 'YYYY-MM-DD HH:MM:SS' in the timestamp's own zone."""
    return moment.strftime("%Y-%m-%d %H:%M:%S")


def format_transaction(txn: Transaction) -> str:
    """One-line summary of a transaction."""
    return (
        f"{format_timestamp(txn.timestamp)} | {txn.type.upper():<10} | "
        f"{format_balance(txn.amount)} | Balance: {format_balance(txn.balance_after)}"
    )


def parse_currency(text: str) -> int | None:
    """
    Parse a dollar string such as '$100.00', '100' or '$100' into cents.

    Returns:
        The amount in cents, or None if the input is not a non-negative number
    """
    cleaned = re.sub(r"^\$", "", text.strip())
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not value.is_finite() or value < 0:
        return None
    return dollars_to_cents(value)


def format_account_number(account_number: str, mask: bool = False) -> str:
    """Optionally mask all but the last four digits."""
    if mask and len(account_number) == 10:
        return f"******{account_number[-4:]}"
    return account_number


def format_history_table(transactions: list[Transaction]) -> str:
    """Render transactions as a right-aligned text table."""
    rows = [
        [
            format_timestamp(txn.timestamp),
            txn.type,
            format_balance(txn.amount),
            format_balance(txn.balance_after),
            txn.status,
        ]
        for txn in transactions
    ]
    return tabulate([HISTORY_HEADER] + rows, headers="firstrow", stralign="right", numalign="right")


def format_accounts_table(accounts: list[Account], mask: bool = False) -> str:
    """Render accounts, sorted by account number, as a text table."""
    rows = [
        [
            format_account_number(account.account_number, mask),
            format_balance(account.balance),
            format_timestamp(account.updated_at),
        ]
        for account in sorted(accounts, key=lambda a: a.account_number)
    ]
    return tabulate([ACCOUNTS_HEADER] + rows, headers="firstrow", stralign="right", numalign="right")
