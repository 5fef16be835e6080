"""Configuration management for the zBANK ledger."""
import logging
import os
from dataclasses import dataclass


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} environment variable must be an integer, got {raw!r}")


@dataclass
class Settings:
    """Configuration settings for the ledger.

    Every value has a default; environment variables (optionally loaded
    from a .env file by the entry script) override them.
    """

    # Storage
    data_dir: str = './data'

    # Business Rules
    max_transaction_amount: int = 1_000_000_000  # $10M in cents

    # Display
    history_limit: int = 10

    # Logging
    log_file: str = 'zbank.log'
    log_level: str = 'INFO'

    @classmethod
    def load(cls) -> 'Settings':
        """Load settings from environment variables.

        Returns:
            Settings: A Settings instance with values from environment variables.

        Raises:
            ValueError: If a variable is set to an invalid value.
        """
        defaults = cls()

        log_level = os.getenv('ZBANK_LOG_LEVEL', defaults.log_level).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"ZBANK_LOG_LEVEL environment variable has unknown level {log_level!r}")

        max_amount = _int_from_env('ZBANK_MAX_AMOUNT', defaults.max_transaction_amount)
        if max_amount <= 0:
            raise ValueError("ZBANK_MAX_AMOUNT environment variable must be positive")

        return cls(
            data_dir=os.getenv('ZBANK_DATA_DIR') or defaults.data_dir,
            max_transaction_amount=max_amount,
            history_limit=_int_from_env('ZBANK_HISTORY_LIMIT', defaults.history_limit),
            log_file=os.getenv('ZBANK_LOG_FILE') or defaults.log_file,
            log_level=log_level,
        )
