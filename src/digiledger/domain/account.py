"""Account domain service and account checks used by transactions."""

from typing import Iterable, Optional

from digiledger.database.base import Database
from digiledger.domain.entities import (
    Account as AccountEntity,
    AccountCategory,
    NormalBalance,
)
from digiledger.domain.errors import (
    BusinessRuleError,
    ConflictError,
    NotFoundError,
    ValidationError,
    INVALID_ACCOUNT_CATEGORY,
    duplicate_account_code,
    entity_not_found,
    inactive_account,
)
from digiledger.logging_config import get_logger

logger = get_logger(__name__)

MAX_CODE_LENGTH = 20
MAX_NAME_LENGTH = 100

_NORMAL_BALANCES = {
    AccountCategory.ASSET: NormalBalance.DEBIT,
    AccountCategory.EXPENSE: NormalBalance.DEBIT,
    AccountCategory.LIABILITY: NormalBalance.CREDIT,
    AccountCategory.EQUITY: NormalBalance.CREDIT,
    AccountCategory.REVENUE: NormalBalance.CREDIT,
}


def parse_category(category: AccountCategory | str) -> AccountCategory:
    """Parse a category name case-insensitively.

    Raises:
        ValidationError: If the name is not a known category
    """
    if isinstance(category, AccountCategory):
        return category
    try:
        return AccountCategory(str(category).strip().upper())
    except ValueError:
        raise ValidationError(INVALID_ACCOUNT_CATEGORY)


def derive_normal_balance(category: AccountCategory) -> NormalBalance:
    """Return the normal balance side for an account category.

    Raises:
        ValidationError: If the category is outside the known set
    """
    try:
        return _NORMAL_BALANCES[category]
    except (KeyError, TypeError):
        raise ValidationError(INVALID_ACCOUNT_CATEGORY)


def validate_referenced_accounts(db: Database, account_ids: Iterable[int]) -> None:
    """Check that every referenced account exists and is active.

    Ids are checked in first-seen order, once each. The first failing id
    determines the error.

    Raises:
        NotFoundError: If an account does not exist
        BusinessRuleError: If an account is inactive
    """
    for account_id in dict.fromkeys(account_ids):
        account = db.get_account(account_id)
        if account is None:
            raise NotFoundError(entity_not_found("Account", account_id))
        if not account.is_active:
            raise BusinessRuleError(inactive_account(account.code, account.name))


class AccountService:
    """Service for managing the chart of accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        code: str,
        name: str,
        category: AccountCategory | str,
        description: Optional[str] = None,
    ) -> int:
        """Create a new account.

        The normal balance is derived from the category and never set
        directly.

        Args:
            code: Unique account code (at most 20 characters)
            name: Account name (at most 100 characters)
            category: Account category or its name
            description: Optional free-text description

        Returns:
            Account ID

        Raises:
            ValidationError: If code, name or category are invalid
            ConflictError: If an account with the same code exists
        """
        code = (code or "").strip()
        name = (name or "").strip()
        _check_name(name)
        if not code:
            raise ValidationError("Account code is required.")
        if len(code) > MAX_CODE_LENGTH:
            raise ValidationError(
                f"Account code must be at most {MAX_CODE_LENGTH} characters."
            )

        category = parse_category(category)
        normal_balance = derive_normal_balance(category)

        if self.db.get_account_by_code(code) is not None:
            raise ConflictError(duplicate_account_code(code))

        account_id = self.db.create_account(
            code=code,
            name=name,
            category=category,
            normal_balance=normal_balance,
            description=description,
        )
        logger.info(
            "account_created",
            account_id=account_id,
            code=code,
            category=category.value,
            normal_balance=normal_balance.value,
        )
        return account_id

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def require_account(self, account_id: int) -> AccountEntity:
        """Get account by ID or raise NotFoundError."""
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(entity_not_found("Account", account_id))
        return account

    def get_account_by_code(self, code: str) -> Optional[AccountEntity]:
        """Get account by its code."""
        return self.db.get_account_by_code(code)

    def list_accounts(self, include_inactive: bool = True) -> list[AccountEntity]:
        """List accounts ordered by code."""
        return self.db.list_accounts(include_inactive=include_inactive)

    def update_account(
        self, account_id: int, name: str, description: Optional[str] = None
    ) -> AccountEntity:
        """Update an account's name and description.

        Code, category and normal balance are fixed at creation.

        Raises:
            NotFoundError: If the account does not exist
            ValidationError: If the name is invalid
        """
        self.require_account(account_id)
        name = (name or "").strip()
        _check_name(name)

        self.db.update_account(account_id, name=name, description=description)
        return self.require_account(account_id)

    def deactivate_account(self, account_id: int) -> AccountEntity:
        """Mark an account inactive. Accounts are never physically deleted."""
        return self._set_active(account_id, False)

    def activate_account(self, account_id: int) -> AccountEntity:
        """Mark a previously deactivated account active again."""
        return self._set_active(account_id, True)

    def _set_active(self, account_id: int, is_active: bool) -> AccountEntity:
        account = self.require_account(account_id)
        self.db.update_account(
            account_id,
            name=account.name,
            description=account.description,
            is_active=is_active,
        )
        logger.info("account_status_changed", account_id=account_id, is_active=is_active)
        return self.require_account(account_id)


def _check_name(name: str) -> None:
    if not name:
        raise ValidationError("Account name is required.")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(
            f"Account name must be at most {MAX_NAME_LENGTH} characters."
        )
