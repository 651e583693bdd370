"""Tests for database mappers."""

from datetime import datetime, date, UTC
from decimal import Decimal

from digiledger.database.models import (
    Account as ORMAccount,
    Transaction as ORMTransaction,
    TransactionEntry as ORMTransactionEntry,
    User as ORMUser,
)
from digiledger.database.mappers import (
    account_to_domain,
    entry_to_domain,
    transaction_to_domain,
    user_to_domain,
)
from digiledger.domain.entities import (
    Account,
    AccountCategory,
    EntryType,
    NormalBalance,
    Transaction,
    TransactionEntry,
    TransactionStatus,
    User,
)


class TestUserMapper:
    """Tests for User mapper."""

    def test_user_to_domain(self):
        orm_user = ORMUser(
            id=3,
            email="ada@example.com",
            first_name="Ada",
            last_name="Lovelace",
            is_active=True,
            created_at=datetime.now(UTC),
        )
        user = user_to_domain(orm_user)

        assert isinstance(user, User)
        assert user.email == "ada@example.com"
        assert user.full_name == "Ada Lovelace"


class TestAccountMapper:
    """Tests for Account mapper."""

    def test_account_to_domain(self):
        """Test converting ORM Account to domain Account."""
        now = datetime.now(UTC)
        orm_account = ORMAccount(
            id=1,
            code="2000",
            name="Accounts Payable",
            category=AccountCategory.LIABILITY,
            normal_balance=NormalBalance.CREDIT,
            description=None,
            is_active=False,
            created_at=now,
            updated_at=now,
        )
        account = account_to_domain(orm_account)

        assert isinstance(account, Account)
        assert account.code == "2000"
        assert account.category == AccountCategory.LIABILITY
        assert account.normal_balance == NormalBalance.CREDIT
        assert account.is_active is False
        assert account.created_at == orm_account.created_at


class TestTransactionMapper:
    """Tests for transaction and entry mappers."""

    def test_entry_to_domain(self):
        orm_entry = ORMTransactionEntry(
            id=7,
            transaction_id=2,
            account_id=1,
            amount=Decimal("12.5000"),
            entry_type=EntryType.CREDIT,
            description=None,
        )
        entry = entry_to_domain(orm_entry, "1000", "Cash")

        assert isinstance(entry, TransactionEntry)
        assert entry.amount == Decimal("12.50")
        assert entry.entry_type == EntryType.CREDIT
        assert (entry.account_code, entry.account_name) == ("1000", "Cash")

    def test_entry_without_display_fields(self):
        orm_entry = ORMTransactionEntry(
            id=7, transaction_id=2, account_id=1, amount=Decimal("1"), entry_type=EntryType.DEBIT
        )

        assert entry_to_domain(orm_entry).account_code == ""

    def test_transaction_to_domain(self):
        """Test converting ORM Transaction to domain aggregate."""
        now = datetime.now(UTC)
        orm_txn = ORMTransaction(
            id=2,
            reference_number="INV-1",
            description="Invoice",
            date=date(2024, 1, 15),
            status=TransactionStatus.DRAFT,
            created_by=3,
            approved_by=None,
            created_at=now,
            updated_at=now,
        )
        entry = TransactionEntry(
            id=7,
            transaction_id=2,
            account_id=1,
            amount=Decimal("5"),
            entry_type=EntryType.DEBIT,
        )

        txn = transaction_to_domain(orm_txn, entries=[entry], creator_name="Ada Lovelace")

        assert isinstance(txn, Transaction)
        assert txn.status == TransactionStatus.DRAFT
        assert txn.entries == (entry,)
        assert txn.creator_name == "Ada Lovelace"
        assert txn.approver_name is None
