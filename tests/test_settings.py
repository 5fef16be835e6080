"""Tests for configuration management."""
import pytest
from config.settings import Settings

ENV_VARS = (
    'ZBANK_DATA_DIR',
    'ZBANK_MAX_AMOUNT',
    'ZBANK_HISTORY_LIMIT',
    'ZBANK_LOG_FILE',
    'ZBANK_LOG_LEVEL',
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every ZBANK_ variable so defaults apply."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_settings_defaults():
    """Test that all default values are correctly set."""
    settings = Settings()

    assert settings.data_dir == './data'
    assert settings.max_transaction_amount == 1_000_000_000
    assert settings.history_limit == 10
    assert settings.log_file == 'zbank.log'
    assert settings.log_level == 'INFO'


def test_settings_load_without_env_uses_defaults(clean_env):
    """Loading with no variables set gives the defaults."""
    assert Settings.load() == Settings()


def test_settings_load(clean_env):
    """Test loading Settings from environment variables."""
    clean_env.setenv('ZBANK_DATA_DIR', '/tmp/zbank-data')
    clean_env.setenv('ZBANK_MAX_AMOUNT', '500000')
    clean_env.setenv('ZBANK_HISTORY_LIMIT', '25')
    clean_env.setenv('ZBANK_LOG_FILE', 'ledger.log')
    clean_env.setenv('ZBANK_LOG_LEVEL', 'debug')

    settings = Settings.load()

    assert settings.data_dir == '/tmp/zbank-data'
    assert settings.max_transaction_amount == 500000
    assert settings.history_limit == 25
    assert settings.log_file == 'ledger.log'
    assert settings.log_level == 'DEBUG'


def test_settings_load_rejects_non_integer_amount(clean_env):
    """A non-numeric maximum amount fails loudly."""
    clean_env.setenv('ZBANK_MAX_AMOUNT', 'lots')

    with pytest.raises(ValueError, match="ZBANK_MAX_AMOUNT environment variable must be an integer"):
        Settings.load()


def test_settings_load_rejects_non_positive_amount(clean_env):
    """The maximum amount must be positive."""
    clean_env.setenv('ZBANK_MAX_AMOUNT', '0')

    with pytest.raises(ValueError, match="must be positive"):
        Settings.load()


def test_settings_load_rejects_unknown_log_level(clean_env):
    """Unknown log levels are rejected."""
    clean_env.setenv('ZBANK_LOG_LEVEL', 'chatty')

    with pytest.raises(ValueError, match="ZBANK_LOG_LEVEL"):
        Settings.load()
