"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import BaseModel

from src.usersync.config import settings
from src.usersync.services import ClerkClient
from src.usersync.services.database import UserRepository
from src.usersync.webhooks import (
    UserSyncDispatcher,
    WebhookVerifier,
    set_user_sync_dispatcher,
    set_webhook_verifier,
)
from src.usersync.webhooks import router as webhooks_router

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

# Global Clerk client instance for cleanup
_clerk_client = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle (startup and shutdown)."""
    global _clerk_client

    # Startup
    try:
        logger.info("Initializing Clerk webhook verifier")
        verifier = WebhookVerifier(settings.webhook_secret)
    except Exception as e:
        logger.error(
            f"Failed to initialize webhook verifier: {e}",
            extra={"error_type": "webhook_verifier_init_failed"},
        )
        raise

    _clerk_client = ClerkClient(
        secret_key=settings.clerk_secret_key,
        api_url=settings.clerk_api_url,
        timeout=settings.clerk_timeout_seconds,
    )
    if not settings.clerk_secret_key:
        logger.warning("CLERK_SECRET_KEY not set, Clerk metadata push-back will fail")

    set_webhook_verifier(verifier)
    set_user_sync_dispatcher(UserSyncDispatcher(UserRepository(), _clerk_client))
    logger.info(
        "Webhook handler initialized successfully",
        extra={"users_table": settings.users_table, "clerk_api_url": settings.clerk_api_url},
    )

    yield

    # Shutdown
    set_user_sync_dispatcher(None)
    set_webhook_verifier(None)
    if _clerk_client is not None:
        try:
            await _clerk_client.close()
            logger.info("Clerk client cleanup completed")
        except Exception as e:
            logger.error(f"Error during Clerk client cleanup: {e}", exc_info=True)
        _clerk_client = None


app = FastAPI(
    title="Clerk User Sync API",
    description="Receives Clerk webhooks and keeps the users table in sync",
    version="0.1.0",
    debug=settings.debug,
    lifespan=lifespan,
)

app.include_router(webhooks_router, prefix=settings.api_v1_prefix)


class HealthCheckResponse(BaseModel):
    """Health check response."""

    status: str


@app.get("/health", response_model=HealthCheckResponse)
async def health_check() -> HealthCheckResponse:
    """Health check endpoint."""
    return HealthCheckResponse(status="healthy")
