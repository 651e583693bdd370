"""Entry reconciliation for transaction updates.

Given the entries currently persisted for a transaction and the entries
of an update payload, work out which persisted entries are updated in
place, which payload entries are new, and which persisted entries are
removed. The resulting entry list always has exactly as many entries as
the payload.
"""

from dataclasses import dataclass, replace
from typing import Sequence

from digiledger.domain.entities import TransactionEntry, TransactionEntryInput


@dataclass(frozen=True)
class EntryReconciliation:
    """Result of diffing persisted entries against a payload."""

    updated: tuple[TransactionEntry, ...]
    added: tuple[TransactionEntry, ...]
    removed: tuple[TransactionEntry, ...]
    entries: tuple[TransactionEntry, ...]

    @property
    def removed_ids(self) -> list[int]:
        return [e.id for e in self.removed]


def reconcile_entries(
    transaction_id: int,
    persisted: Sequence[TransactionEntry],
    incoming: Sequence[TransactionEntryInput],
) -> EntryReconciliation:
    """Diff persisted entries against incoming payload entries.

    An incoming entry whose id matches a persisted entry overwrites that
    entry and keeps its id. Any other incoming entry (no id, or an id
    that is not one of this transaction's entries) becomes a new entry.
    Persisted entries not claimed by the payload are removed.

    An id repeated in the payload only claims the persisted entry once;
    later repeats become new entries so nothing is duplicated in place.

    Args:
        transaction_id: Owning transaction ID
        persisted: Entries currently stored for the transaction
        incoming: Entries from the update payload, in payload order

    Returns:
        EntryReconciliation with the final entry list in payload order
    """
    persisted_by_id = {e.id: e for e in persisted if e.id is not None}

    updated = []
    added = []
    entries = []
    claimed = set()

    for item in incoming:
        existing = persisted_by_id.get(item.id) if item.id is not None else None
        if existing is not None and existing.id not in claimed:
            claimed.add(existing.id)
            entry = replace(
                existing,
                account_id=item.account_id,
                amount=item.amount,
                entry_type=item.entry_type,
                description=item.description,
                account_code="",
                account_name="",
            )
            updated.append(entry)
        else:
            entry = TransactionEntry(
                id=None,
                transaction_id=transaction_id,
                account_id=item.account_id,
                amount=item.amount,
                entry_type=item.entry_type,
                description=item.description,
            )
            added.append(entry)
        entries.append(entry)

    removed = [e for entry_id, e in persisted_by_id.items() if entry_id not in claimed]

    return EntryReconciliation(
        updated=tuple(updated),
        added=tuple(added),
        removed=tuple(removed),
        entries=tuple(entries),
    )
