"""PostHog analytics service for Clerk sync event tracking."""

import logging

import posthog

from src.usersync.config import settings

logger = logging.getLogger(__name__)


class SyncEvents:
    """Analytics event names emitted by the webhook handler."""

    WEBHOOK_REJECTED = "clerk_webhook_rejected"
    USER_SYNCED = "clerk_user_synced"
    METADATA_SYNC_FAILED = "clerk_metadata_sync_failed"


class PostHogService:
    """
    Service for tracking Clerk sync events via PostHog.

    The `capture_*` helpers never raise: analytics runs after the database
    write has happened and must not turn a completed sync into a failed
    delivery that Clerk would retry.
    """

    def __init__(self) -> None:
        """Initialize PostHog service."""
        if settings.posthog_api_key:
            posthog.api_key = settings.posthog_api_key
            posthog.host = settings.posthog_host

    def capture(self, distinct_id: str, event: str, properties: dict | None = None) -> None:
        """
        Track an event.

        Args:
            distinct_id: Unique identifier for the user (Clerk user ID)
            event: Event name (see SyncEvents)
            properties: Optional event properties

        Raises:
            Exception: If the PostHog client fails
        """
        if not settings.posthog_api_key:
            return

        posthog.capture(distinct_id=distinct_id, event=event, properties=properties or {})

    def capture_sync(
        self, event_type: str, clerk_id: str | None, metadata_synced: bool = True
    ) -> None:
        """
        Record a handled `user.*` event.

        Example:
            >>> PostHogService().capture_sync("user.created", "user_2abc", metadata_synced=False)
        """
        self._safe_capture(
            clerk_id or "anonymous",
            SyncEvents.USER_SYNCED,
            {"event_type": event_type, "metadata_synced": metadata_synced},
        )

    def capture_metadata_failure(self, clerk_id: str, error: str) -> None:
        """Record a failed push of the internal user ID to Clerk."""
        self._safe_capture(clerk_id, SyncEvents.METADATA_SYNC_FAILED, {"error": error})

    def capture_rejection(self, reason: str) -> None:
        """Record a delivery rejected before dispatch (headers or signature)."""
        self._safe_capture("anonymous", SyncEvents.WEBHOOK_REJECTED, {"error": reason})

    def _safe_capture(self, distinct_id: str, event: str, properties: dict) -> None:
        try:
            self.capture(distinct_id, event, properties)
        except Exception as e:
            logger.warning(
                f"Failed to capture analytics event {event}: {e}",
                extra={"error_type": "analytics_capture_failed", "event": event},
            )
