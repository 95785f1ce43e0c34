"""FastAPI dependencies for webhook verification and dispatch."""

from src.usersync.webhooks.dispatcher import UserSyncDispatcher
from src.usersync.webhooks.verification import WebhookVerifier

# Global instances (initialized in main.py startup)
_webhook_verifier: WebhookVerifier | None = None
_user_sync_dispatcher: UserSyncDispatcher | None = None


def set_webhook_verifier(verifier: WebhookVerifier | None) -> None:
    """
    Set the global webhook verifier instance.

    Called during application startup with a verifier built from settings.

    Args:
        verifier: WebhookVerifier instance
    """
    global _webhook_verifier
    _webhook_verifier = verifier


def get_webhook_verifier() -> WebhookVerifier:
    """
    Get the global webhook verifier instance.

    Raises:
        RuntimeError: If webhook verifier not initialized
    """
    if _webhook_verifier is None:
        raise RuntimeError(
            "Webhook verifier not initialized. "
            "Ensure application startup calls set_webhook_verifier()."
        )
    return _webhook_verifier


def set_user_sync_dispatcher(dispatcher: UserSyncDispatcher | None) -> None:
    """Set the global user sync dispatcher instance."""
    global _user_sync_dispatcher
    _user_sync_dispatcher = dispatcher


def get_user_sync_dispatcher() -> UserSyncDispatcher:
    """
    Get the global user sync dispatcher instance.

    Raises:
        RuntimeError: If dispatcher not initialized
    """
    if _user_sync_dispatcher is None:
        raise RuntimeError(
            "User sync dispatcher not initialized. "
            "Ensure application startup calls set_user_sync_dispatcher()."
        )
    return _user_sync_dispatcher
