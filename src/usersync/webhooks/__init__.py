"""Clerk webhook ingress: signature verification and user sync."""

from src.usersync.webhooks.dependencies import (
    get_user_sync_dispatcher,
    get_webhook_verifier,
    set_user_sync_dispatcher,
    set_webhook_verifier,
)
from src.usersync.webhooks.dispatcher import SyncResult, UserSyncDispatcher
from src.usersync.webhooks.exceptions import (
    ConfigurationError,
    MetadataSyncError,
    MissingSignatureHeadersError,
    PayloadValidationError,
    UserSyncError,
    WebhookError,
    WebhookVerificationError,
)
from src.usersync.webhooks.handlers import router
from src.usersync.webhooks.verification import WebhookVerifier

__all__ = [
    "router",
    "WebhookVerifier",
    "UserSyncDispatcher",
    "SyncResult",
    "get_webhook_verifier",
    "set_webhook_verifier",
    "get_user_sync_dispatcher",
    "set_user_sync_dispatcher",
    "WebhookError",
    "ConfigurationError",
    "WebhookVerificationError",
    "MissingSignatureHeadersError",
    "PayloadValidationError",
    "UserSyncError",
    "MetadataSyncError",
]
