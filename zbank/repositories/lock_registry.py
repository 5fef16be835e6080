"""Process-local advisory locks keyed by account number."""

import logging
import threading

logger = logging.getLogger(__name__)


class LockRegistry:
    """
    In-memory map from account number to a held/free flag.

    Locks are advisory: nothing in the store checks them, only callers that
    choose to. They are not persisted, start empty on every run, and are
    invisible to any other process using the same data directory.
    Acquisition never blocks; it fails fast when the key is already held.
    """

    def __init__(self):
        self._locks: dict[str, bool] = {}
        self._mutex = threading.Lock()

    def acquire(self, key: str) -> bool:
        """
        Take the lock for ``key``.

        Returns:
            True if the lock was free and is now held, False if already held
        """
        with self._mutex:
            if self._locks.get(key, False):
                return False
            self._locks[key] = True
        logger.debug("Lock acquired for %s", key)
        return True

    def release(self, key: str) -> bool:
        """
        Release the lock for ``key``.

        Returns:
            True if the lock was held and is now released, False otherwise
        """
        with self._mutex:
            if not self._locks.pop(key, False):
                return False
        logger.debug("Lock released for %s", key)
        return True

    def is_locked(self, key: str) -> bool:
        """Whether the lock for ``key`` is currently held."""
        with self._mutex:
            return self._locks.get(key, False)
