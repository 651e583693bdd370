"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories so callers can map failures
    without inspecting message text.
    """


class ValidationError(DomainError):
    """Malformed input that fails structural checks."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class BusinessRuleError(DomainError):
    """A ledger invariant was violated by an otherwise well-formed request."""


class UnauthorizedError(DomainError):
    """The acting user could not be resolved."""

    def __init__(self, message: str = "You are not authenticated."):
        super().__init__(message)


def entity_not_found(entity_name: str, entity_id: object) -> str:
    """Return message for a missing entity."""
    return f"{entity_name} with id '{entity_id}' was not found."


def duplicate_account_code(code: str) -> str:
    """Return message for a duplicate account code."""
    return f"An account with code '{code}' already exists."


def duplicate_user_email(email: str) -> str:
    """Return message for a duplicate user email."""
    return f"A user with email '{email}' already exists."


def inactive_account(code: str, name: str) -> str:
    """Return message when posting to an inactive account."""
    return f"Cannot post to inactive account: {code} - {name}"


def unbalanced_transaction(total_debits, total_credits) -> str:
    """Return message for debits and credits that do not match."""
    return (
        f"Double-entry validation failed. Total Debits ({total_debits}) "
        f"must equal Total Credits ({total_credits})."
    )


def only_draft_editable(status: str) -> str:
    """Return message when editing a non-draft transaction."""
    return (
        f"Cannot modify a transaction in {status} status. "
        "Only DRAFT transactions can be edited."
    )


def only_draft_deletable(status: str) -> str:
    """Return message when deleting a non-draft transaction."""
    return (
        f"Cannot delete a transaction in {status} status. "
        "Only DRAFT transactions can be deleted."
    )


RESTRICTED_STATUS = (
    "Transactions cannot be created or updated directly to POSTED or VOIDED status."
)
TOO_FEW_ENTRIES = "A transaction must have at least two entries."
INVALID_ACCOUNT_CATEGORY = "Invalid account category"
