"""Custom exceptions for the user data-access layer."""


class MissingExternalIdError(ValueError):
    """Raised when a write is attempted without a Clerk user ID."""

    pass


class UserNotFoundError(Exception):
    """Raised when no user record matches the given Clerk user ID."""

    def __init__(self, clerk_id: str):
        super().__init__(f"User with clerk_id {clerk_id} not found")
        self.clerk_id = clerk_id
