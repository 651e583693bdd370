"""Tests for transaction validation rules and the account gate.

These run against an in-memory account lookup instead of a database.
"""

from datetime import datetime, date, UTC
from decimal import Decimal

import pytest

from digiledger.domain.account import derive_normal_balance, validate_referenced_accounts
from digiledger.domain.entities import (
    Account,
    AccountCategory,
    EntryType,
    NormalBalance,
    TransactionEntryInput,
    TransactionInput,
    TransactionStatus,
)
from digiledger.domain.errors import (
    BusinessRuleError,
    NotFoundError,
    ValidationError,
)
from digiledger.domain.validation import validate_payload_shape, validate_transaction


class FakeAccountLookup:
    """Minimal stand-in for the account part of the Database interface."""

    def __init__(self, accounts):
        self.accounts = {a.id: a for a in accounts}
        self.lookups = []

    def get_account(self, account_id):
        self.lookups.append(account_id)
        return self.accounts.get(account_id)


def make_account(account_id, code, is_active=True, category=AccountCategory.ASSET):
    now = datetime.now(UTC)
    return Account(
        id=account_id,
        code=code,
        name=f"Account {code}",
        category=category,
        normal_balance=derive_normal_balance(category),
        description=None,
        is_active=is_active,
        created_at=now,
        updated_at=now,
    )


def entry(account_id, entry_type, amount):
    return TransactionEntryInput(
        account_id=account_id, amount=Decimal(amount), entry_type=EntryType(entry_type)
    )


@pytest.fixture
def lookup():
    return FakeAccountLookup(
        [make_account(1, "1000"), make_account(2, "4000"), make_account(3, "1999", is_active=False)]
    )


class TestNormalBalance:
    """Tests for normal balance derivation."""

    @pytest.mark.parametrize(
        "category,expected",
        [
            (AccountCategory.ASSET, NormalBalance.DEBIT),
            (AccountCategory.EXPENSE, NormalBalance.DEBIT),
            (AccountCategory.LIABILITY, NormalBalance.CREDIT),
            (AccountCategory.EQUITY, NormalBalance.CREDIT),
            (AccountCategory.REVENUE, NormalBalance.CREDIT),
        ],
    )
    def test_derive_normal_balance(self, category, expected):
        assert derive_normal_balance(category) == expected

    def test_unknown_category_fails(self):
        with pytest.raises(ValidationError, match="Invalid account category"):
            derive_normal_balance("GOODWILL")


class TestValidateReferencedAccounts:
    """Tests for the referenced-account check."""

    def test_all_active(self, lookup):
        validate_referenced_accounts(lookup, [1, 2, 1])
        assert lookup.lookups == [1, 2]

    def test_missing_account(self, lookup):
        with pytest.raises(NotFoundError, match="Account with id '99' was not found"):
            validate_referenced_accounts(lookup, [1, 99])

    def test_inactive_account(self, lookup):
        with pytest.raises(BusinessRuleError) as excinfo:
            validate_referenced_accounts(lookup, [3])
        assert str(excinfo.value) == "Cannot post to inactive account: 1999 - Account 1999"

    def test_first_failing_id_wins(self, lookup):
        with pytest.raises(BusinessRuleError):
            validate_referenced_accounts(lookup, [1, 3, 99])

        with pytest.raises(NotFoundError):
            validate_referenced_accounts(lookup, [99, 3])


class TestValidateTransaction:
    """Tests for the ordered transaction rules."""

    @pytest.mark.parametrize("status", [TransactionStatus.POSTED, TransactionStatus.VOIDED])
    def test_restricted_status(self, lookup, status):
        entries = [entry(1, "DEBIT", "10"), entry(2, "CREDIT", "10")]
        with pytest.raises(BusinessRuleError) as excinfo:
            validate_transaction(lookup, status, entries)
        assert "POSTED or VOIDED" in str(excinfo.value)

    @pytest.mark.parametrize(
        "status", [TransactionStatus.DRAFT, TransactionStatus.PENDING_APPROVAL]
    )
    def test_single_entry_rejected_for_any_status(self, lookup, status):
        with pytest.raises(BusinessRuleError, match="at least two entries"):
            validate_transaction(lookup, status, [entry(1, "DEBIT", "10")])

    def test_no_entries_rejected(self, lookup):
        with pytest.raises(BusinessRuleError, match="at least two entries"):
            validate_transaction(lookup, TransactionStatus.DRAFT, [])

    def test_unbalanced_pending_rejected(self, lookup):
        entries = [entry(1, "DEBIT", "150.00"), entry(2, "CREDIT", "100.00")]
        with pytest.raises(BusinessRuleError) as excinfo:
            validate_transaction(lookup, TransactionStatus.PENDING_APPROVAL, entries)
        assert str(excinfo.value) == (
            "Double-entry validation failed. Total Debits (150.00) "
            "must equal Total Credits (100.00)."
        )

    def test_unbalanced_draft_allowed(self, lookup):
        entries = [entry(1, "DEBIT", "150.00"), entry(2, "CREDIT", "100.00")]
        validate_transaction(lookup, TransactionStatus.DRAFT, entries)

    def test_balanced_pending_allowed(self, lookup):
        entries = [
            entry(1, "DEBIT", "60.00"),
            entry(1, "DEBIT", "40.00"),
            entry(2, "CREDIT", "100.0000"),
        ]
        validate_transaction(lookup, TransactionStatus.PENDING_APPROVAL, entries)

    def test_status_checked_before_entry_count(self, lookup):
        with pytest.raises(BusinessRuleError, match="POSTED or VOIDED"):
            validate_transaction(lookup, TransactionStatus.POSTED, [])

    def test_balance_checked_before_accounts(self, lookup):
        entries = [entry(99, "DEBIT", "5"), entry(2, "CREDIT", "1")]
        with pytest.raises(BusinessRuleError, match="Double-entry"):
            validate_transaction(lookup, TransactionStatus.PENDING_APPROVAL, entries)
        assert lookup.lookups == []

    def test_missing_account_after_rules_pass(self, lookup):
        entries = [entry(99, "DEBIT", "5"), entry(2, "CREDIT", "5")]
        with pytest.raises(NotFoundError):
            validate_transaction(lookup, TransactionStatus.DRAFT, entries)

    def test_inactive_account_after_rules_pass(self, lookup):
        entries = [entry(3, "DEBIT", "5"), entry(2, "CREDIT", "5")]
        with pytest.raises(BusinessRuleError, match="inactive account"):
            validate_transaction(lookup, TransactionStatus.PENDING_APPROVAL, entries)


class TestValidatePayloadShape:
    """Tests for structural payload checks."""

    def make(self, description="Invoice", amount="10", reference=None):
        return TransactionInput(
            description=description,
            date=date(2024, 1, 1),
            status=TransactionStatus.DRAFT,
            entries=(entry(1, "DEBIT", amount), entry(2, "CREDIT", "10")),
            reference_number=reference,
        )

    def test_valid(self):
        validate_payload_shape(self.make())

    def test_blank_description(self):
        with pytest.raises(ValidationError, match="description"):
            validate_payload_shape(self.make(description="   "))

    @pytest.mark.parametrize("amount", ["0", "-5.00"])
    def test_non_positive_amount(self, amount):
        with pytest.raises(ValidationError, match="greater than zero"):
            validate_payload_shape(self.make(amount=amount))

    def test_long_reference(self):
        with pytest.raises(ValidationError, match="Reference number"):
            validate_payload_shape(self.make(reference="R" * 51))

    @pytest.mark.parametrize("amount", ["0.00001", "12.34567"])
    def test_too_many_decimal_places(self, amount):
        with pytest.raises(ValidationError, match="at most 4 decimal places"):
            validate_payload_shape(self.make(amount=amount))

    @pytest.mark.parametrize("amount", ["0.0001", "1.50000", "99999999999999.9999"])
    def test_amounts_that_fit_storage(self, amount):
        validate_payload_shape(self.make(amount=amount))

    def test_amount_too_large(self):
        with pytest.raises(ValidationError, match="less than"):
            validate_payload_shape(self.make(amount="100000000000000"))
