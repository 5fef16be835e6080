"""Authentication service: PIN login and the active session."""

import logging

from zbank.models.account import Account
from zbank.models.exceptions import (
    AccountNotFoundError,
    BankError,
    InvalidPinError,
    ValidationError,
)
from zbank.models.results import AuthResult
from zbank.repositories.record_store import RecordStore
from zbank.services.session_manager import SessionManager
from zbank.utils.crypto import hash_pin, verify_pin
from zbank.utils.validation import is_valid_account_number, is_valid_pin

logger = logging.getLogger(__name__)


class AuthService:
    """
    Service layer for login, logout and PIN changes.

    Failed logins are not counted, throttled or used to lock the account;
    a caller may retry indefinitely.
    """

    def __init__(self, store: RecordStore, session: SessionManager):
        """
        Initialize the AuthService.

        Args:
            store: Record store holding the accounts
            session: Session holder owned by the caller
        """
        self._store = store
        self._session = session

    def login(self, account_number: str, pin: str) -> AuthResult:
        """
        Authenticate with account number and PIN.

        Formats are checked before any storage access. On success the
        account becomes the session's current user, replacing any previous
        one.

        Args:
            account_number: 10-digit account number
            pin: 4-digit PIN

        Returns:
            AuthResult with the account on success, or the failure

        Raises:
            PersistenceError: If the accounts file cannot be loaded
        """
        if not is_valid_account_number(account_number):
            return AuthResult(
                success=False,
                failure=ValidationError("Invalid account number format. Must be 10 digits."),
            )
        if not is_valid_pin(pin):
            return AuthResult(
                success=False,
                failure=ValidationError("Invalid PIN format. Must be 4 digits."),
            )

        account = self._store.get_account(account_number)
        if account is None:
            logger.info("Login rejected: unknown account %s", account_number)
            return AuthResult(success=False, failure=AccountNotFoundError("Account not found"))

        if not verify_pin(pin, account.pin_hash):
            logger.info("Login rejected: wrong PIN for %s", account_number)
            return AuthResult(success=False, failure=InvalidPinError("Invalid PIN"))

        self._session.set_session(account)
        logger.info("Account %s logged in", account_number)
        return AuthResult(success=True, account=account)

    def logout(self) -> None:
        """
        End the session.

        Releases the lock held for the session's account, if any, then
        clears the session unconditionally.
        """
        current = self._session.get_session()
        if current is not None:
            # Fail-open: a lock release error never blocks logout. Whether
            # this should propagate instead is still under review.
            try:
                self._store.release_lock(current.account_number)
            except Exception:
                logger.warning(
                    "Ignoring lock release failure for %s on logout",
                    current.account_number,
                    exc_info=True,
                )
            logger.info("Account %s logged out", current.account_number)
        self._session.clear_session()

    def get_current_user(self) -> Account | None:
        return self._session.get_session()

    def is_authenticated(self) -> bool:
        return self._session.is_session_active()

    def change_pin(self, old_pin: str, new_pin: str) -> bool:
        """
        Change the PIN of the logged-in account.

        Args:
            old_pin: Current PIN, checked against the stored hash
            new_pin: Replacement PIN (4 digits)

        Returns:
            True if the PIN was changed; False on any failure, in which case
            nothing was modified
        """
        current = self._session.get_session()
        if current is None:
            return False
        if not is_valid_pin(new_pin):
            return False

        try:
            stored = self._store.get_account(current.account_number)
            if stored is None or not verify_pin(old_pin, stored.pin_hash):
                logger.info("PIN change rejected for %s", current.account_number)
                return False
            updated = self._store.update_account(
                current.account_number, pin_hash=hash_pin(new_pin)
            )
        except BankError:
            logger.warning(
                "PIN change failed for %s", current.account_number, exc_info=True
            )
            return False

        self._session.update_session(updated)
        logger.info("PIN changed for %s", current.account_number)
        return True
