"""Dispatch verified Clerk user events to database mutations."""

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from src.usersync.services import ClerkClient, PostHogService
from src.usersync.services.database import MissingExternalIdError, UserRepository
from src.usersync.webhooks.exceptions import (
    MetadataSyncError,
    PayloadValidationError,
    UserSyncError,
)
from src.usersync.webhooks.models import ClerkEventType, ClerkUserData, WebhookEvent

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Outcome of a handled user event."""

    event_type: str
    user: dict[str, Any]
    metadata_error: MetadataSyncError | None = None


class UserSyncDispatcher:
    """
    Applies Clerk `user.*` events to the users table.

    Exactly one repository call is made per handled event. For
    `user.created` the new internal ID is then pushed to Clerk's public
    metadata on a best-effort basis: a failure there is recorded on the
    result and logged but never fails the event.

    Attributes:
        repository: User data access layer
        clerk_client: Clerk Backend API client for metadata push-back

    Example:
        >>> dispatcher = UserSyncDispatcher(UserRepository(), ClerkClient())
        >>> result = await dispatcher.dispatch(event)
        >>> result.user["id"] if result else None
    """

    def __init__(self, repository: UserRepository, clerk_client: ClerkClient):
        self.repository = repository
        self.clerk_client = clerk_client

    async def dispatch(self, event: WebhookEvent) -> SyncResult | None:
        """
        Route an event to its handler.

        Returns:
            SyncResult for user.created/updated/deleted, None for any other type

        Raises:
            PayloadValidationError: If a required field is missing
            UserSyncError: If the database mutation fails
        """
        if event.type == ClerkEventType.USER_CREATED:
            result = await self.handle_user_created(event)
        elif event.type == ClerkEventType.USER_UPDATED:
            result = await self.handle_user_updated(event)
        elif event.type == ClerkEventType.USER_DELETED:
            result = await self.handle_user_deleted(event)
        else:
            logger.info(
                f"Webhook with an ID of {event.data.get('id')} and type of {event.type}",
                extra={"event_type": event.type, "payload": event.data},
            )
            return None

        PostHogService().capture_sync(
            event.type,
            self._clerk_id(event),
            metadata_synced=result.metadata_error is None,
        )
        return result

    async def handle_user_created(self, event: WebhookEvent) -> SyncResult:
        """Insert a user record, then push its internal ID back to Clerk."""
        data = self._parse_user_data(event)
        logger.info(f"Processing user.created event for {data.id}", extra={"clerk_id": data.id})

        if data.primary_email is None:
            logger.error("No email address found in user data", extra={"clerk_id": data.id})
            raise PayloadValidationError("No email address provided")

        user = data.to_user_create()
        logger.info(
            "Creating user in database",
            extra={"clerk_id": user.clerk_id, "user": user.model_dump(by_alias=True)},
        )
        try:
            record = self.repository.create_user(user)
        except MissingExternalIdError as e:
            raise PayloadValidationError(str(e)) from e
        except Exception as e:
            logger.error(f"Error in user.created webhook handler: {e}", exc_info=True)
            raise UserSyncError(str(e)) from e

        metadata_error = await self.push_internal_id(user.clerk_id, record)
        return SyncResult(event.type, record, metadata_error)

    async def handle_user_updated(self, event: WebhookEvent) -> SyncResult:
        """Replace the mutable fields of an existing user record."""
        data = self._parse_user_data(event)
        fields = data.to_user_update()
        logger.info(
            f"Updating user in database for {data.id}",
            extra={"clerk_id": data.id, "user": fields.model_dump(by_alias=True)},
        )
        try:
            record = self.repository.update_user(data.id or "", fields)
        except MissingExternalIdError as e:
            raise PayloadValidationError(str(e)) from e
        except Exception as e:
            logger.error(f"Error in user.updated webhook handler: {e}", exc_info=True)
            raise UserSyncError(str(e)) from e

        return SyncResult(event.type, record)

    async def handle_user_deleted(self, event: WebhookEvent) -> SyncResult:
        """Delete the user record for the event's Clerk user ID."""
        clerk_id = self._clerk_id(event)
        logger.info(f"Processing user.deleted event for {clerk_id}", extra={"clerk_id": clerk_id})

        if not clerk_id:
            logger.error("No user ID provided for deletion")
            raise PayloadValidationError("User ID is required for deletion")

        try:
            record = self.repository.delete_user(clerk_id)
        except MissingExternalIdError as e:
            raise PayloadValidationError(str(e)) from e
        except Exception as e:
            logger.error(f"Error in user.deleted webhook handler: {e}", exc_info=True)
            raise UserSyncError(str(e)) from e

        return SyncResult(event.type, record)

    async def push_internal_id(
        self, clerk_id: str, record: dict[str, Any]
    ) -> MetadataSyncError | None:
        """
        Store the internal user ID in Clerk public metadata.

        Returns:
            None on success, otherwise the MetadataSyncError (never raised)
        """
        try:
            await self.clerk_client.update_user_metadata(
                clerk_id, public_metadata={"userId": record.get("id")}
            )
            logger.info("Updated Clerk user metadata with internal user ID")
            return None
        except Exception as e:
            error = MetadataSyncError(f"Error updating Clerk user metadata: {str(e)}")
            error.__cause__ = e
            logger.error(
                str(error),
                extra={"error_type": "metadata_sync_failed", "clerk_id": clerk_id},
            )
            PostHogService().capture_metadata_failure(clerk_id, str(e))
            return error

    @staticmethod
    def _clerk_id(event: WebhookEvent) -> str | None:
        clerk_id = event.data.get("id")
        return clerk_id if isinstance(clerk_id, str) and clerk_id else None

    @staticmethod
    def _parse_user_data(event: WebhookEvent) -> ClerkUserData:
        try:
            return ClerkUserData.model_validate(event.data)
        except ValidationError as e:
            logger.error(f"Invalid user data in {event.type} event: {e}")
            raise PayloadValidationError(f"Invalid user data: {e.error_count()} error(s)") from e
