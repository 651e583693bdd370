"""Mapper functions to convert between domain models and SQLAlchemy models.

ORM rows never leave the database layer. Display fields that live on
other tables (account code/name, user names) are passed in explicitly by
the query that joined them.
"""

from typing import Optional, Sequence

from digiledger.domain import entities as domain
from digiledger.database.models import (
    Account as ORMAccount,
    Transaction as ORMTransaction,
    TransactionEntry as ORMTransactionEntry,
    User as ORMUser,
)


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        email=orm_user.email,
        first_name=orm_user.first_name,
        last_name=orm_user.last_name,
        is_active=orm_user.is_active,
        created_at=orm_user.created_at,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        code=orm_account.code,
        name=orm_account.name,
        category=domain.AccountCategory(orm_account.category),
        normal_balance=domain.NormalBalance(orm_account.normal_balance),
        description=orm_account.description,
        is_active=orm_account.is_active,
        created_at=orm_account.created_at,
        updated_at=orm_account.updated_at,
    )


def entry_to_domain(
    orm_entry: ORMTransactionEntry,
    account_code: Optional[str] = None,
    account_name: Optional[str] = None,
) -> domain.TransactionEntry:
    """Convert SQLAlchemy TransactionEntry model to domain TransactionEntry."""
    return domain.TransactionEntry(
        id=orm_entry.id,
        transaction_id=orm_entry.transaction_id,
        account_id=orm_entry.account_id,
        amount=orm_entry.amount,
        entry_type=domain.EntryType(orm_entry.entry_type),
        description=orm_entry.description,
        account_code=account_code or "",
        account_name=account_name or "",
    )


def transaction_to_domain(
    orm_transaction: ORMTransaction,
    entries: Sequence[domain.TransactionEntry] = (),
    creator_name: Optional[str] = None,
    approver_name: Optional[str] = None,
) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction aggregate."""
    return domain.Transaction(
        id=orm_transaction.id,
        reference_number=orm_transaction.reference_number,
        description=orm_transaction.description,
        date=orm_transaction.date,
        status=domain.TransactionStatus(orm_transaction.status),
        created_by=orm_transaction.created_by,
        approved_by=orm_transaction.approved_by,
        created_at=orm_transaction.created_at,
        updated_at=orm_transaction.updated_at,
        entries=tuple(entries),
        creator_name=creator_name,
        approver_name=approver_name,
    )
