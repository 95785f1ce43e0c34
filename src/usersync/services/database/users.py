"""Data access for user records keyed by Clerk user ID."""

import logging
from typing import Any

from src.usersync.config import settings
from src.usersync.services.database.exceptions import MissingExternalIdError, UserNotFoundError
from src.usersync.services.database.models import UserCreate, UserUpdate
from src.usersync.services.database.utils import SupabaseQueryBuilder, get_query_builder

logger = logging.getLogger(__name__)


def _require_clerk_id(clerk_id: str | None) -> str:
    if not clerk_id or not clerk_id.strip():
        raise MissingExternalIdError("Clerk user ID is required for user writes")
    return clerk_id


class UserRepository:
    """
    Create, update, delete and look up user records.

    Every write is keyed by the Clerk user ID; writes with an empty ID are
    rejected before the database is touched.

    Attributes:
        table: Name of the users table
        db: Query builder, created on first use when not injected

    Example:
        >>> repo = UserRepository()
        >>> user = repo.create_user(UserCreate(clerk_id="user_2abc", email="a@x.com", username="ada"))
        >>> repo.delete_user("user_2abc")
    """

    def __init__(self, db: SupabaseQueryBuilder | None = None, table: str | None = None):
        self._db = db
        self.table = table or settings.users_table

    @property
    def db(self) -> SupabaseQueryBuilder:
        if self._db is None:
            self._db = get_query_builder()
        return self._db

    def create_user(self, user: UserCreate) -> dict[str, Any]:
        """
        Insert a new user record.

        Args:
            user: Record candidate built from a `user.created` event

        Returns:
            The inserted record, including its internal `id`

        Raises:
            MissingExternalIdError: If `user.clerk_id` is empty
            Exception: If the insert fails or returns no row
        """
        _require_clerk_id(user.clerk_id)

        record = self.db.insert_record(self.table, user.model_dump())
        if not record:
            raise Exception(f"Insert into {self.table} returned no record for {user.clerk_id}")

        logger.info(
            f"Created user {record.get('id')} for clerk_id {user.clerk_id}",
            extra={"clerk_id": user.clerk_id, "user_id": record.get("id")},
        )
        return record

    def update_user(self, clerk_id: str, fields: UserUpdate) -> dict[str, Any]:
        """
        Replace the mutable fields of a user record.

        Args:
            clerk_id: Clerk user ID
            fields: Full replacement field set

        Returns:
            The updated record

        Raises:
            MissingExternalIdError: If `clerk_id` is empty
            UserNotFoundError: If no record matches `clerk_id`
        """
        _require_clerk_id(clerk_id)

        updated = self.db.update_by_filter(self.table, {"clerk_id": clerk_id}, fields.model_dump())
        if not updated:
            raise UserNotFoundError(clerk_id)

        logger.info(f"Updated user for clerk_id {clerk_id}", extra={"clerk_id": clerk_id})
        return updated[0]

    def delete_user(self, clerk_id: str) -> dict[str, Any]:
        """
        Delete a user record.

        Returns:
            The deleted record

        Raises:
            MissingExternalIdError: If `clerk_id` is empty
            UserNotFoundError: If no record matches `clerk_id`
        """
        _require_clerk_id(clerk_id)

        deleted = self.db.delete_by_filter(self.table, {"clerk_id": clerk_id})
        if not deleted:
            raise UserNotFoundError(clerk_id)

        logger.info(f"Deleted user for clerk_id {clerk_id}", extra={"clerk_id": clerk_id})
        return deleted[0]
