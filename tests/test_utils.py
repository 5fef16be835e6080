"""Tests for validation, PIN hashing, formatting and seeding helpers."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from zbank.models.exceptions import InvalidPinError
from zbank.models.transaction import Transaction
from zbank.repositories.record_store import RecordStore
from zbank.utils.crypto import hash_pin, verify_pin
from zbank.utils.formatter import (
    format_account_number,
    format_accounts_table,
    format_balance,
    format_history_table,
    format_timestamp,
    format_transaction,
    parse_currency,
)
from zbank.utils.seeding import seed_demo_accounts
from zbank.utils.validation import (
    cents_to_dollars,
    dollars_to_cents,
    is_valid_account_number,
    is_valid_amount,
    is_valid_pin,
    pad_account_number,
    sanitize_numeric_input,
)

WHEN = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.fixture
def deposit():
    return Transaction(
        id="3f1c2a4e-8d9b-4c7a-9e6f-0a1b2c3d4e5f",
        account_number="0000012345",
        type="deposit",
        amount=5000,
        balance_before=10000,
        balance_after=15000,
        timestamp=WHEN,
        status="completed",
    )


# Validation

@pytest.mark.parametrize("value, expected", [
    ("0000012345", True),
    ("123456789", False),
    ("12345678901", False),
    ("12345abcde", False),
    ("1234567890\n", False),
    (1234567890, False),
])
def test_is_valid_account_number(value, expected):
    assert is_valid_account_number(value) is expected


@pytest.mark.parametrize("value, expected", [
    ("1234", True),
    ("0000", True),
    ("123", False),
    ("12345", False),
    ("12a4", False),
    (1234, False),
])
def test_is_valid_pin(value, expected):
    assert is_valid_pin(value) is expected


@pytest.mark.parametrize("value, expected", [
    (1, True),
    (0, False),
    (-5, False),
    (1.0, False),
    (True, False),
])
def test_is_valid_amount(value, expected):
    assert is_valid_amount(value) is expected


def test_dollar_cent_conversions():
    """Conversions round half away from zero and avoid float error."""
    assert dollars_to_cents("10.50") == 1050
    assert dollars_to_cents(0.1) == 10
    assert dollars_to_cents("1.005") == 101
    assert cents_to_dollars(150) == Decimal("1.50")
    assert cents_to_dollars(-5) == Decimal("-0.05")


def test_sanitize_and_pad():
    assert sanitize_numeric_input(" 12-34 ab5 ") == "12345"
    assert pad_account_number("12345") == "0000012345"
    assert pad_account_number("1234567890") == "1234567890"


# PIN hashing

def test_hash_pin_roundtrip():
    """Hashes are salted and verify only the hashed PIN."""
    first = hash_pin("1234")
    second = hash_pin("1234")

    assert first != "1234"
    assert first != second
    assert verify_pin("1234", first) is True
    assert verify_pin("4321", first) is False


def test_hash_pin_rejects_bad_format():
    with pytest.raises(InvalidPinError):
        hash_pin("12")


def test_verify_pin_with_unparseable_hash():
    """A garbage stored hash is a mismatch, not a crash."""
    assert verify_pin("1234", "not-a-hash") is False


# Formatting

@pytest.mark.parametrize("cents, expected", [
    (0, "$0.00"),
    (5, "$0.05"),
    (150, "$1.50"),
    (-150, "-$1.50"),
    (1_000_000_000, "$10000000.00"),
])
def test_format_balance(cents, expected):
    assert format_balance(cents) == expected


def test_format_timestamp():
    assert format_timestamp(WHEN) == "2024-01-02 03:04:05"


def test_format_transaction(deposit):
    line = format_transaction(deposit)

    assert line.startswith("2024-01-02 03:04:05 | DEPOSIT")
    assert "$50.00" in line
    assert line.endswith("Balance: $150.00")


@pytest.mark.parametrize("text, expected", [
    ("$100.00", 10000),
    ("100", 10000),
    ("$100", 10000),
    (" 12.345 ", 1235),
    ("0", 0),
    ("-5", None),
    ("abc", None),
    ("", None),
    ("NaN", None),
    ("Infinity", None),
])
def test_parse_currency(text, expected):
    assert parse_currency(text) == expected


def test_format_account_number():
    assert format_account_number("1234567890") == "1234567890"
    assert format_account_number("1234567890", mask=True) == "******7890"
    assert format_account_number("123", mask=True) == "123"


def test_format_history_table(deposit):
    table = format_history_table([deposit])

    for header in ("Time", "Type", "Amount", "Balance", "Status"):
        assert header in table
    assert "$50.00" in table
    assert "$150.00" in table
    assert "completed" in table


def test_format_accounts_table_masks_and_sorts(tmp_path):
    store = RecordStore(tmp_path)
    seed_demo_accounts(store)

    table = format_accounts_table(store.list_accounts(), mask=True)

    assert "1234567890" not in table
    assert table.index("******2345") < table.index("******7890")
    assert "$100.00" in table
    assert "$200.00" in table


# Seeding

def test_seed_demo_accounts(tmp_path):
    """Seeding creates both demo accounts with hashed PINs and no history."""
    store = RecordStore(tmp_path)

    created = seed_demo_accounts(store)

    assert [a.account_number for a in created] == ["0000012345", "1234567890"]
    first = store.get_account("0000012345")
    second = store.get_account("1234567890")
    assert (first.balance, second.balance) == (10000, 20000)
    assert verify_pin("1111", first.pin_hash) is True
    assert verify_pin("1234", second.pin_hash) is True
    assert store.get_history("0000012345") == []
    assert (tmp_path / "transactions.json").exists()


def test_seed_demo_accounts_is_idempotent(tmp_path):
    """A populated store is left alone."""
    store = RecordStore(tmp_path)
    seed_demo_accounts(store)
    before = store.list_accounts()

    assert seed_demo_accounts(store) == []
    assert sorted(store.list_accounts(), key=lambda a: a.account_number) == sorted(
        before, key=lambda a: a.account_number
    )


def test_seed_skips_store_with_other_accounts(tmp_path):
    store = RecordStore(tmp_path)
    store.create_account("5555555555", hash_pin("5555"), 0)

    assert seed_demo_accounts(store) == []
    assert store.get_account("0000012345") is None
