"""Custom exceptions for Clerk webhook processing."""


class WebhookError(Exception):
    """Base exception for all webhook-related errors."""

    pass


class ConfigurationError(WebhookError):
    """Raised at startup when the webhook signing secret is missing or unusable."""

    pass


class WebhookVerificationError(WebhookError):
    """Raised when a delivery fails signature verification."""

    pass


class MissingSignatureHeadersError(WebhookVerificationError):
    """Raised when one of the svix-id, svix-timestamp or svix-signature headers is absent."""

    pass


class PayloadValidationError(WebhookError):
    """Raised when a verified event lacks a field required by its handler."""

    pass


class UserSyncError(WebhookError):
    """Raised when the primary database mutation for an event fails."""

    pass


class MetadataSyncError(WebhookError):
    """Raised when pushing the internal user ID back to Clerk fails. Never fatal."""

    pass
