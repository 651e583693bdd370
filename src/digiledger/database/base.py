"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from datetime import date

# Import entities directly to avoid circular import through domain/__init__.py
from digiledger.domain.entities import (
    Account,
    AccountCategory,
    NormalBalance,
    Transaction,
    TransactionEntryInput,
    TransactionStatus,
    User,
)


class Database(ABC):
    """Abstract database interface for digiledger."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # User operations
    @abstractmethod
    def create_user(self, email: str, first_name: str, last_name: str) -> int:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive)."""
        pass

    @abstractmethod
    def list_users(self) -> list[User]:
        """List all users."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        code: str,
        name: str,
        category: AccountCategory,
        normal_balance: NormalBalance,
        description: Optional[str] = None,
    ) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_code(self, code: str) -> Optional[Account]:
        """Get account by its unique code."""
        pass

    @abstractmethod
    def list_accounts(self, include_inactive: bool = True) -> list[Account]:
        """List accounts ordered by code."""
        pass

    @abstractmethod
    def update_account(
        self,
        account_id: int,
        name: str,
        description: Optional[str],
        is_active: Optional[bool] = None,
    ) -> None:
        """Update the mutable fields of an account."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        description: str,
        date: date,
        status: TransactionStatus,
        created_by: int,
        entries: Sequence[TransactionEntryInput],
        reference_number: Optional[str] = None,
    ) -> int:
        """Create a transaction together with all its entries.

        The transaction and every entry are written in one commit.
        Returns transaction ID.
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID with entries and display fields resolved."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        status: Optional[TransactionStatus] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List transactions, newest first, with optional filters."""
        pass

    @abstractmethod
    def update_transaction(
        self, transaction: Transaction, entries_to_remove: Sequence[int]
    ) -> None:
        """Persist a reconciled transaction in one commit.

        Scalar fields are overwritten. Entries with an id are updated in
        place, entries without an id are inserted, and the entry ids in
        ``entries_to_remove`` are deleted.
        """
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction and its entries."""
        pass
