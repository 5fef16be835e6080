import logging

from dotenv import load_dotenv

from config.settings import Settings
from zbank.repositories.record_store import RecordStore
from zbank.services.transaction_service import TransactionService
from zbank.utils.formatter import format_accounts_table, format_history_table
from zbank.utils.seeding import seed_demo_accounts, DEMO_ACCOUNTS

load_dotenv()

# Load settings from environment variables
settings = Settings.load()

logger = logging.getLogger('zbank')
logger.setLevel(settings.log_level)
handler = logging.FileHandler(filename=settings.log_file, encoding='utf-8', mode='a')
handler.setFormatter(logging.Formatter('%(asctime)s:%(levelname)s:%(name)s: %(message)s'))
logger.addHandler(handler)


def main():
    store = RecordStore(settings.data_dir)
    transaction_service = TransactionService.from_settings(store, settings)
    created = seed_demo_accounts(store)
    if created:
        print(f'Seeded {len(created)} accounts in {store.data_dir}')
    else:
        print(f'Accounts already present in {store.data_dir}, nothing seeded')

    accounts = store.list_accounts()
    print()
    print(format_accounts_table(accounts))
    for account in sorted(accounts, key=lambda a: a.account_number):
        history = transaction_service.get_history(account.account_number, settings.history_limit)
        print(f'\nHistory for {account.account_number} ({len(history)} shown)')
        if history:
            print(format_history_table(history))

    if created:
        print('\nDemonstration logins:')
        for account_number, pin, _ in DEMO_ACCOUNTS:
            print(f'  Account: {account_number}, PIN: {pin}')


if __name__ == '__main__':
    main()
