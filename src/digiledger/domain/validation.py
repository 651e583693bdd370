"""Transaction payload validation.

``validate_transaction`` is shared by create and update. Rules are
checked in order and the first violation is raised:

1. status must not be POSTED or VOIDED
2. at least two entries
3. unless DRAFT, total debits must equal total credits exactly
4. every referenced account exists and is active
"""

from decimal import Decimal
from typing import Sequence

from digiledger.database.base import Database
from digiledger.domain.account import validate_referenced_accounts
from digiledger.domain.entities import (
    AMOUNT_PRECISION,
    AMOUNT_SCALE,
    EntryType,
    TransactionEntryInput,
    TransactionInput,
    TransactionStatus,
)
from digiledger.domain.errors import (
    BusinessRuleError,
    ValidationError,
    RESTRICTED_STATUS,
    TOO_FEW_ENTRIES,
    unbalanced_transaction,
)

MIN_ENTRIES = 2
MAX_REFERENCE_LENGTH = 50
RESTRICTED_STATUSES = frozenset({TransactionStatus.POSTED, TransactionStatus.VOIDED})
MAX_AMOUNT = Decimal(10) ** (AMOUNT_PRECISION - AMOUNT_SCALE)


def sum_entries(
    entries: Sequence[TransactionEntryInput], entry_type: EntryType
) -> Decimal:
    """Sum the amounts of all entries on one side."""
    return sum(
        (e.amount for e in entries if e.entry_type == entry_type), Decimal("0")
    )


def validate_payload_shape(payload: TransactionInput) -> None:
    """Structural checks that run before any business rule.

    Raises:
        ValidationError: If a required field is missing or malformed
    """
    if not payload.description or not payload.description.strip():
        raise ValidationError("Transaction description is required.")
    if payload.date is None:
        raise ValidationError("Transaction date is required.")
    if (
        payload.reference_number is not None
        and len(payload.reference_number) > MAX_REFERENCE_LENGTH
    ):
        raise ValidationError(
            f"Reference number must be at most {MAX_REFERENCE_LENGTH} characters."
        )
    for entry in payload.entries:
        if not isinstance(entry.amount, Decimal) or not entry.amount.is_finite():
            raise ValidationError("Entry amounts must be decimal numbers.")
        if entry.amount <= 0:
            raise ValidationError("Amount must be greater than zero.")
        if entry.amount.normalize().as_tuple().exponent < -AMOUNT_SCALE:
            raise ValidationError(
                f"Amounts may have at most {AMOUNT_SCALE} decimal places."
            )
        if entry.amount >= MAX_AMOUNT:
            raise ValidationError(f"Amount must be less than {MAX_AMOUNT:,}.")


def validate_transaction(
    db: Database,
    status: TransactionStatus,
    entries: Sequence[TransactionEntryInput],
) -> None:
    """Validate a proposed transaction against the ledger rules.

    Args:
        db: Database used to look up referenced accounts
        status: Requested status
        entries: Proposed entries

    Raises:
        BusinessRuleError: If a ledger rule is violated or an account is inactive
        NotFoundError: If a referenced account does not exist
    """
    if status in RESTRICTED_STATUSES:
        raise BusinessRuleError(RESTRICTED_STATUS)

    entries = list(entries or ())
    if len(entries) < MIN_ENTRIES:
        raise BusinessRuleError(TOO_FEW_ENTRIES)

    if status != TransactionStatus.DRAFT:
        total_debits = sum_entries(entries, EntryType.DEBIT)
        total_credits = sum_entries(entries, EntryType.CREDIT)
        if total_debits != total_credits:
            raise BusinessRuleError(unbalanced_transaction(total_debits, total_credits))

    validate_referenced_accounts(db, (e.account_id for e in entries))
