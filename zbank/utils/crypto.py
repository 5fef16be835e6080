"""PIN hashing and verification."""

import logging

from passlib.context import CryptContext

from zbank.models.exceptions import InvalidPinError
from zbank.utils.validation import is_valid_pin

logger = logging.getLogger(__name__)

pin_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_pin(pin: str) -> str:
    """
    Hash a PIN with a one-way, salted hash.

    Args:
        pin: The plain text PIN (4 digits)

    Returns:
        The encoded hash

    Raises:
        InvalidPinError: If the PIN is not 4 digits
    """
    if not is_valid_pin(pin):
        raise InvalidPinError("Invalid PIN format. Must be 4 digits.")
    return pin_context.hash(pin)


def verify_pin(pin: str, pin_hash: str) -> bool:
    """
    Check a plain text PIN against a stored hash.

    A hash passlib cannot parse counts as a mismatch.
    """
    try:
        return pin_context.verify(pin, pin_hash)
    except (ValueError, TypeError):
        logger.warning("Stored PIN hash could not be parsed")
        return False
