"""Shared pytest fixtures for digiledger tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
from pathlib import Path
import pytest

from digiledger.database.factories import create_sqlite_database
from digiledger.domain.account import AccountService
from digiledger.domain.balance_checker import BalanceCheckerService
from digiledger.domain.entities import (
    EntryType,
    TransactionEntryInput,
    TransactionInput,
    TransactionStatus,
)
from digiledger.domain.transaction import TransactionService
from digiledger.domain.user import UserService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def user_service(temp_db):
    """Create a UserService with a temporary database."""
    return UserService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def balance_checker():
    """Create a BalanceCheckerService."""
    return BalanceCheckerService()


@pytest.fixture
def sample_user(user_service):
    """Create a sample user for testing."""
    user_id = user_service.create_user(
        email="accountant@example.com", first_name="Ada", last_name="Lovelace"
    )
    return user_service.get_user(user_id)


@pytest.fixture
def sample_accounts(account_service):
    """Create a small chart of accounts keyed by code."""
    ids = {
        "1000": account_service.create_account("1000", "Cash", "ASSET"),
        "2000": account_service.create_account("2000", "Accounts Payable", "LIABILITY"),
        "4000": account_service.create_account("4000", "Service Revenue", "REVENUE"),
        "5000": account_service.create_account("5000", "Rent Expense", "EXPENSE"),
    }
    return {code: account_service.get_account(account_id) for code, account_id in ids.items()}


@pytest.fixture
def inactive_account(account_service):
    """Create a deactivated account."""
    account_id = account_service.create_account("1999", "Old Bank Account", "ASSET")
    return account_service.deactivate_account(account_id)


@pytest.fixture
def make_payload(sample_accounts):
    """Build transaction payloads from (code, type, amount[, id]) tuples."""

    def _make(
        lines,
        status=TransactionStatus.DRAFT,
        description="Consulting invoice",
        txn_date=date(2024, 1, 15),
        reference_number=None,
    ):
        entries = []
        for line in lines:
            code, entry_type, amount = line[:3]
            entry_id = line[3] if len(line) > 3 else None
            account_id = sample_accounts[code].id if code in sample_accounts else code
            entries.append(
                TransactionEntryInput(
                    account_id=account_id,
                    amount=Decimal(amount),
                    entry_type=EntryType(entry_type),
                    id=entry_id,
                )
            )
        return TransactionInput(
            description=description,
            date=txn_date,
            status=status,
            entries=tuple(entries),
            reference_number=reference_number,
        )

    return _make


@pytest.fixture
def draft_transaction(transaction_service, sample_user, make_payload):
    """Create a balanced two-entry DRAFT transaction."""
    payload = make_payload([("1000", "DEBIT", "100.00"), ("4000", "CREDIT", "100.00")])
    return transaction_service.create_transaction(payload, user_id=sample_user.id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
