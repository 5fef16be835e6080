"""Session holder for the authenticated account."""

from datetime import datetime, timezone

from zbank.models.account import Account


class SessionManager:
    """
    Holds at most one authenticated account for the lifetime of the run.

    Each caller owns its own SessionManager and passes it to the services
    that need it; there is no shared global session.
    """

    def __init__(self):
        self._current_account: Account | None = None
        self._login_time: datetime | None = None

    def set_session(self, account: Account) -> None:
        """Start (or replace) the session with an authenticated account."""
        self._current_account = account
        self._login_time = datetime.now(timezone.utc)

    def clear_session(self) -> None:
        self._current_account = None
        self._login_time = None

    def get_session(self) -> Account | None:
        return self._current_account

    def is_session_active(self) -> bool:
        return self._current_account is not None

    def get_login_time(self) -> datetime | None:
        """When the current session started, or None if anonymous."""
        return self._login_time

    def update_session(self, account: Account) -> None:
        """
        Refresh the cached account snapshot.

        Ignored unless a session is active for the same account number.
        """
        if (
            self._current_account is not None
            and self._current_account.account_number == account.account_number
        ):
            self._current_account = account
