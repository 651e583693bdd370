"""User domain service.

Users exist so that transactions have a creator to point at. Credentials
and sessions are handled by whatever hosts the ledger; here a user is
identified by id or email.
"""

from typing import Optional

from digiledger.database.base import Database
from digiledger.domain.entities import User as UserEntity
from digiledger.domain.errors import (
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    duplicate_user_email,
    entity_not_found,
)
from digiledger.logging_config import get_logger

logger = get_logger(__name__)


class UserService:
    """Service for managing users."""

    def __init__(self, db: Database):
        self.db = db

    def create_user(self, email: str, first_name: str, last_name: str) -> int:
        """Create a user.

        Args:
            email: Email address, unique ignoring case
            first_name: First name
            last_name: Last name

        Returns:
            User ID

        Raises:
            ValidationError: If email or names are blank
            ConflictError: If a user with the same email exists
        """
        email = (email or "").strip().lower()
        if not email or "@" not in email:
            raise ValidationError("A valid email address is required.")
        if not (first_name or "").strip() or not (last_name or "").strip():
            raise ValidationError("First and last name are required.")

        if self.db.get_user_by_email(email) is not None:
            raise ConflictError(duplicate_user_email(email))

        user_id = self.db.create_user(
            email=email, first_name=first_name.strip(), last_name=last_name.strip()
        )
        logger.info("user_created", user_id=user_id)
        return user_id

    def get_user(self, user_id: int) -> Optional[UserEntity]:
        return self.db.get_user(user_id)

    def require_user(self, user_id: int) -> UserEntity:
        user = self.db.get_user(user_id)
        if user is None:
            raise NotFoundError(entity_not_found("User", user_id))
        return user

    def list_users(self) -> list[UserEntity]:
        return self.db.list_users()

    def resolve_acting_user(self, identifier: str | int | None) -> UserEntity:
        """Resolve the user performing an operation.

        Args:
            identifier: User ID or email

        Returns:
            The active user

        Raises:
            UnauthorizedError: If no identifier was given, or it does not
                name an active user
        """
        if identifier is None or (isinstance(identifier, str) and not identifier.strip()):
            raise UnauthorizedError()

        user = None
        if isinstance(identifier, int):
            user = self.db.get_user(identifier)
        elif "@" in identifier:
            user = self.db.get_user_by_email(identifier)
        else:
            try:
                user = self.db.get_user(int(identifier))
            except ValueError:
                user = None

        if user is None or not user.is_active:
            raise UnauthorizedError()
        return user
