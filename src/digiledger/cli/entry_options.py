"""Parsing of ``--entry`` option values.

An entry is written as ``[ENTRY_ID=]ACCOUNT:TYPE:AMOUNT[:DESCRIPTION]``:

    1000:DEBIT:250.00
    4000:credit:250.00:Consulting fee
    17=1000:DEBIT:300.00          (update entry 17 in place)
"""

from digiledger.domain.account import AccountService
from digiledger.domain.entities import EntryType, TransactionEntry, TransactionEntryInput
from digiledger.domain.errors import ValidationError
from digiledger.utils.account_resolver import resolve_account
from digiledger.utils.amount_parser import parse_amount


def parse_entry_spec(spec: str, account_service: AccountService) -> TransactionEntryInput:
    """Parse one ``--entry`` value.

    Raises:
        ValidationError: If the value is malformed
        NotFoundError: If the account cannot be resolved
    """
    entry_id = None
    body = spec.strip()

    head, sep, rest = body.partition("=")
    if sep and head.strip().isdigit() and ":" not in head:
        entry_id = int(head.strip())
        body = rest

    parts = body.split(":", 3)
    if len(parts) < 3:
        raise ValidationError(
            f"Invalid entry '{spec}'. Expected [ENTRY_ID=]ACCOUNT:TYPE:AMOUNT[:DESCRIPTION]."
        )

    account, entry_type, amount = (p.strip() for p in parts[:3])
    description = parts[3].strip() if len(parts) == 4 and parts[3].strip() else None

    try:
        entry_type = EntryType(entry_type.upper())
    except ValueError:
        raise ValidationError(
            f"Invalid entry type '{entry_type}' in '{spec}'. Use DEBIT or CREDIT."
        )

    try:
        amount = parse_amount(amount)
    except ValueError as e:
        raise ValidationError(f"Invalid amount in entry '{spec}': {e}")

    return TransactionEntryInput(
        account_id=resolve_account(account_service, account),
        amount=amount,
        entry_type=entry_type,
        description=description,
        id=entry_id,
    )


def entry_to_input(entry: TransactionEntry) -> TransactionEntryInput:
    """Turn a stored entry back into payload form, keeping its id."""
    return TransactionEntryInput(
        account_id=entry.account_id,
        amount=entry.amount,
        entry_type=entry.entry_type,
        description=entry.description,
        id=entry.id,
    )
