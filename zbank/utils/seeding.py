"""Demonstration account seeding."""

import logging

from zbank.models.account import Account
from zbank.repositories.record_store import RecordStore
from zbank.utils.crypto import hash_pin

logger = logging.getLogger(__name__)

# (account number, PIN, opening balance in cents)
DEMO_ACCOUNTS = (
    ("0000012345", "1111", 10_000),
    ("1234567890", "1234", 20_000),
)


def seed_demo_accounts(store: RecordStore) -> list[Account]:
    """
    Create the demonstration accounts on an empty store.

    Does nothing if any account already exists, so it is safe to call on
    every start. No transactions are recorded for the opening balances.

    Returns:
        The accounts created (empty if the store was already populated)
    """
    store.initialize()
    if store.list_accounts():
        logger.info("Store already has accounts, skipping seed")
        return []

    created = []
    for account_number, pin, balance in DEMO_ACCOUNTS:
        created.append(store.create_account(account_number, hash_pin(pin), balance))
    logger.info("Seeded %d demonstration accounts", len(created))
    return created
