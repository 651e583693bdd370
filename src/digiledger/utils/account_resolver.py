"""Utility for resolving account codes to IDs."""

from digiledger.domain.account import AccountService
from digiledger.domain.errors import NotFoundError


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve account code or ID to account ID.

    Account codes are often numeric ("1000"), so a string is first looked
    up as a code and only then interpreted as an ID.

    Args:
        account_service: AccountService instance
        account: Account code (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        NotFoundError: If account is not found
    """
    if isinstance(account, int):
        if account_service.get_account(account) is None:
            raise NotFoundError(f"Account ID {account} not found")
        return account

    account = account.strip()
    account_obj = account_service.get_account_by_code(account)
    if account_obj is not None:
        return account_obj.id

    try:
        account_id = int(account)
    except (ValueError, TypeError):
        raise NotFoundError(f"Account '{account}' not found")

    if account_service.get_account(account_id) is None:
        raise NotFoundError(f"Account '{account}' not found")
    return account_id
