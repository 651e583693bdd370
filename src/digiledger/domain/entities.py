"""Domain model entities for digiledger.

These are pure data classes representing ledger concepts, independent of
database schema. Relationships are expressed as ids; display fields that
live on other records (account code/name, creator name) are resolved by
the database layer when an aggregate is read.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

# Stored amounts hold 18 digits, 4 of them after the decimal point.
AMOUNT_PRECISION = 18
AMOUNT_SCALE = 4


class AccountCategory(str, Enum):
    """Chart-of-accounts category."""

    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    EQUITY = "EQUITY"
    REVENUE = "REVENUE"
    EXPENSE = "EXPENSE"


class NormalBalance(str, Enum):
    """Side that increases an account's natural balance."""

    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class EntryType(str, Enum):
    """Side of a single transaction entry."""

    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class TransactionStatus(str, Enum):
    """Transaction lifecycle status."""

    DRAFT = "DRAFT"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    POSTED = "POSTED"
    VOIDED = "VOIDED"


@dataclass(frozen=True)
class User:
    """User domain entity."""

    id: int
    email: str
    first_name: str
    last_name: str
    is_active: bool
    created_at: datetime

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class Account:
    """Ledger account domain entity."""

    id: int
    code: str
    name: str
    category: AccountCategory
    normal_balance: NormalBalance
    description: Optional[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class TransactionEntry:
    """A single debit or credit line of a transaction.

    ``id`` is None for entries that have not been persisted yet.
    ``account_code`` and ``account_name`` are display fields filled in on
    read and are ignored on write.
    """

    id: Optional[int]
    transaction_id: Optional[int]
    account_id: int
    amount: Decimal
    entry_type: EntryType
    description: Optional[str] = None
    account_code: str = ""
    account_name: str = ""


@dataclass(frozen=True)
class Transaction:
    """Journal transaction aggregate with its entries."""

    id: int
    reference_number: Optional[str]
    description: str
    date: date
    status: TransactionStatus
    created_by: int
    approved_by: Optional[int]
    created_at: datetime
    updated_at: datetime
    entries: tuple[TransactionEntry, ...] = ()
    creator_name: Optional[str] = None
    approver_name: Optional[str] = None

    @property
    def total_debits(self) -> Decimal:
        return sum(
            (e.amount for e in self.entries if e.entry_type == EntryType.DEBIT),
            Decimal("0"),
        )

    @property
    def total_credits(self) -> Decimal:
        return sum(
            (e.amount for e in self.entries if e.entry_type == EntryType.CREDIT),
            Decimal("0"),
        )


@dataclass(frozen=True)
class TransactionEntryInput:
    """Entry as submitted in a create or update payload.

    ``id`` refers to an existing entry of the transaction being updated;
    it is None for new entries.
    """

    account_id: int
    amount: Decimal
    entry_type: EntryType
    description: Optional[str] = None
    id: Optional[int] = None


@dataclass(frozen=True)
class TransactionInput:
    """Create or update payload for a transaction."""

    description: str
    date: date
    status: TransactionStatus
    entries: tuple[TransactionEntryInput, ...]
    reference_number: Optional[str] = None


@dataclass(frozen=True)
class CsvEntry:
    """One successfully parsed row of a balance-check CSV file."""

    account: str
    description: str
    debit: Decimal
    credit: Decimal


@dataclass(frozen=True)
class BalanceCheckResult:
    """Outcome of checking a CSV file for balanced debits and credits."""

    is_balanced: bool
    total_debits: Decimal
    total_credits: Decimal
    difference: Decimal
    entry_count: int
    entries: list[CsvEntry] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
