"""Pydantic models for Clerk webhook payloads and responses."""

import secrets
import string
from typing import Any

from pydantic import BaseModel, Field

from src.usersync.services.database.models import UserCreate, UserUpdate

USERNAME_PREFIX = "user_"
USERNAME_SUFFIX_LENGTH = 8
_USERNAME_ALPHABET = string.ascii_lowercase + string.digits


class ClerkEventType:
    """Event types that trigger a user mutation."""

    USER_CREATED = "user.created"
    USER_UPDATED = "user.updated"
    USER_DELETED = "user.deleted"


def generate_placeholder_username() -> str:
    """
    Generate a random placeholder username such as ``user_k3v9x0qa``.

    Used when Clerk sends no username; the database requires a non-null value.
    Probabilistically unique only.
    """
    suffix = "".join(secrets.choice(_USERNAME_ALPHABET) for _ in range(USERNAME_SUFFIX_LENGTH))
    return f"{USERNAME_PREFIX}{suffix}"


class WebhookEvent(BaseModel):
    """A verified Clerk webhook delivery."""

    type: str = Field(description="Event type, e.g. 'user.created'")
    data: dict[str, Any] = Field(description="Event-specific payload")
    object: str | None = Field(None, description="Always 'event' for Clerk deliveries")


class ClerkEmailAddress(BaseModel):
    """Email address entry of a Clerk user."""

    id: str | None = None
    email_address: str


class ClerkUserData(BaseModel):
    """
    User fields carried by `user.*` events.

    Only `id` is present on `user.deleted`; other fields default to empty.
    """

    id: str | None = None
    email_addresses: list[ClerkEmailAddress] = []
    first_name: str | None = None
    last_name: str | None = None
    image_url: str | None = None
    username: str | None = None

    @property
    def primary_email(self) -> str | None:
        """First email address, which Clerk lists as primary."""
        if not self.email_addresses:
            return None
        return self.email_addresses[0].email_address or None

    def to_user_create(self) -> UserCreate:
        """Build a record candidate. Caller must check `primary_email` first."""
        return UserCreate(
            clerk_id=self.id or "",
            email=self.primary_email or "",
            username=self.username or generate_placeholder_username(),
            first_name=self.first_name or "",
            last_name=self.last_name or "",
            photo=self.image_url or "",
        )

    def to_user_update(self) -> UserUpdate:
        """Build the full replacement field set; absent fields reset to empty."""
        return UserUpdate(
            first_name=self.first_name or "",
            last_name=self.last_name or "",
            username=self.username or generate_placeholder_username(),
            photo=self.image_url or "",
        )


class WebhookSuccessResponse(BaseModel):
    """Response body for a processed user event."""

    message: str = "OK"
    user: dict[str, Any]


class WebhookErrorResponse(BaseModel):
    """Response body for a rejected or failed user event."""

    error: str
    details: str | None = None
