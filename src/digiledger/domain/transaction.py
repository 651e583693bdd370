"""Transaction domain service."""

from dataclasses import replace
from datetime import date
from typing import Optional

from digiledger.database.base import Database
from digiledger.domain.entities import (
    Transaction as TransactionEntity,
    TransactionInput,
    TransactionStatus,
)
from digiledger.domain.errors import (
    BusinessRuleError,
    NotFoundError,
    UnauthorizedError,
    entity_not_found,
    only_draft_deletable,
    only_draft_editable,
)
from digiledger.domain.reconciliation import reconcile_entries
from digiledger.domain.validation import validate_payload_shape, validate_transaction
from digiledger.logging_config import get_logger

logger = get_logger(__name__)


class TransactionService:
    """Service for creating, editing and deleting journal transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(self, payload: TransactionInput, user_id: int) -> TransactionEntity:
        """Create a transaction with its entries.

        Args:
            payload: Transaction fields and entries
            user_id: ID of the acting user, recorded as creator

        Returns:
            The stored transaction with account codes and names resolved

        Raises:
            UnauthorizedError: If the acting user does not exist
            ValidationError: If the payload is malformed
            BusinessRuleError: If a ledger rule is violated
            NotFoundError: If a referenced account does not exist
        """
        self._require_user(user_id)
        validate_payload_shape(payload)
        validate_transaction(self.db, payload.status, payload.entries)

        transaction_id = self.db.create_transaction(
            description=payload.description.strip(),
            date=payload.date,
            status=payload.status,
            created_by=user_id,
            entries=payload.entries,
            reference_number=payload.reference_number,
        )
        logger.info(
            "transaction_created",
            transaction_id=transaction_id,
            status=payload.status.value,
            entry_count=len(payload.entries),
            user_id=user_id,
        )
        return self.require_transaction(transaction_id)

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: int) -> TransactionEntity:
        """Get transaction by ID or raise NotFoundError."""
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(entity_not_found("Transaction", transaction_id))
        return txn

    def list_transactions(
        self,
        status: Optional[TransactionStatus] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[TransactionEntity]:
        """List transactions, newest first.

        Args:
            status: Optional status filter
            start_date: Optional start date filter
            end_date: Optional end date filter
        """
        return self.db.list_transactions(
            status=status, start_date=start_date, end_date=end_date
        )

    def update_transaction(
        self, transaction_id: int, payload: TransactionInput, user_id: int
    ) -> TransactionEntity:
        """Update a DRAFT transaction.

        Scalar fields are replaced. Entries are reconciled against the
        stored ones: entries carrying a known id are updated in place,
        others are added, and stored entries missing from the payload are
        removed. Everything is written in one commit.

        Args:
            transaction_id: Transaction to update
            payload: New transaction fields and the full entry list
            user_id: ID of the acting user

        Returns:
            The stored transaction with account codes and names resolved

        Raises:
            UnauthorizedError: If the acting user does not exist
            NotFoundError: If the transaction or a referenced account does not exist
            BusinessRuleError: If the transaction is not a draft or a ledger
                rule is violated
            ValidationError: If the payload is malformed
        """
        self._require_user(user_id)
        txn = self.require_transaction(transaction_id)

        if txn.status != TransactionStatus.DRAFT:
            raise BusinessRuleError(only_draft_editable(txn.status.value))

        validate_payload_shape(payload)
        validate_transaction(self.db, payload.status, payload.entries)

        reconciliation = reconcile_entries(txn.id, txn.entries, payload.entries)
        updated_txn = replace(
            txn,
            reference_number=payload.reference_number,
            description=payload.description.strip(),
            date=payload.date,
            status=payload.status,
            entries=reconciliation.entries,
        )

        self.db.update_transaction(updated_txn, reconciliation.removed_ids)
        logger.info(
            "transaction_updated",
            transaction_id=transaction_id,
            status=payload.status.value,
            entries_updated=len(reconciliation.updated),
            entries_added=len(reconciliation.added),
            entries_removed=len(reconciliation.removed),
            user_id=user_id,
        )
        return self.require_transaction(transaction_id)

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a DRAFT transaction and its entries.

        Raises:
            NotFoundError: If the transaction does not exist
            BusinessRuleError: If the transaction is not a draft
        """
        txn = self.require_transaction(transaction_id)

        if txn.status != TransactionStatus.DRAFT:
            raise BusinessRuleError(only_draft_deletable(txn.status.value))

        self.db.delete_transaction(transaction_id)
        logger.info("transaction_deleted", transaction_id=transaction_id)

    def _require_user(self, user_id: int) -> None:
        if user_id is None or self.db.get_user(user_id) is None:
            raise UnauthorizedError()
