"""Pytest configuration and shared fixtures."""

import json
from collections.abc import Callable, Iterator
from datetime import datetime, timezone
from typing import Any
from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from svix.webhooks import Webhook

from src.usersync.main import app
from src.usersync.services.database import UserRepository
from src.usersync.webhooks import (
    UserSyncDispatcher,
    WebhookVerifier,
    set_user_sync_dispatcher,
    set_webhook_verifier,
)

TEST_WEBHOOK_SECRET = "whsec_dXNlcnN5bmMtd2ViaG9vay10ZXN0LXNlY3JldC1rZXk="


@pytest.fixture
def client() -> TestClient:
    """
    Provide FastAPI test client for API testing.

    The lifespan is not run; use `wired_app` to install mocked collaborators.

    Example:
        >>> def test_health(client):
        >>>     response = client.get("/health")
        >>>     assert response.status_code == 200
    """
    return TestClient(app)


@pytest.fixture
def webhook_secret() -> str:
    """Provide a valid svix signing secret."""
    return TEST_WEBHOOK_SECRET


@pytest.fixture
def sign_payload(webhook_secret: str) -> Callable[[str], dict[str, str]]:
    """Return a helper that builds valid svix headers for a raw body."""
    signer = Webhook(webhook_secret)

    def _sign(body: str, msg_id: str | None = None) -> dict[str, str]:
        msg_id = msg_id or f"msg_{uuid4().hex}"
        now = datetime.now(tz=timezone.utc)
        return {
            "svix-id": msg_id,
            "svix-timestamp": str(int(now.timestamp())),
            "svix-signature": signer.sign(msg_id, now, body),
            "content-type": "application/json",
        }

    return _sign


@pytest.fixture
def user_created_payload() -> dict[str, Any]:
    """Provide a minimal Clerk user.created event."""
    return {
        "type": "user.created",
        "object": "event",
        "data": {
            "id": "u1",
            "email_addresses": [{"id": "idn_1", "email_address": "a@x.com"}],
            "first_name": "A",
        },
    }


@pytest.fixture
def mock_repository() -> Mock:
    """Mock user repository returning a stored record."""
    repository = Mock(spec=UserRepository)
    repository.create_user.return_value = {"id": "db-1", "clerk_id": "u1", "email": "a@x.com"}
    repository.update_user.return_value = {"id": "db-1", "clerk_id": "u1"}
    repository.delete_user.return_value = {"id": "db-1", "clerk_id": "u1"}
    return repository


@pytest.fixture
def mock_clerk_client() -> Mock:
    """Mock Clerk client whose metadata push succeeds."""
    clerk_client = Mock()
    clerk_client.update_user_metadata = AsyncMock(return_value={"id": "u1"})
    return clerk_client


@pytest.fixture
def dispatcher(mock_repository: Mock, mock_clerk_client: Mock) -> UserSyncDispatcher:
    """Provide a dispatcher wired to mocked collaborators."""
    return UserSyncDispatcher(mock_repository, mock_clerk_client)


@pytest.fixture
def wired_app(webhook_secret: str, dispatcher: UserSyncDispatcher) -> Iterator[None]:
    """Install a real verifier and the mocked dispatcher as app dependencies."""
    set_webhook_verifier(WebhookVerifier(webhook_secret))
    set_user_sync_dispatcher(dispatcher)
    yield
    set_webhook_verifier(None)
    set_user_sync_dispatcher(None)


@pytest.fixture
def post_event(
    client: TestClient, sign_payload: Callable[[str], dict[str, str]], wired_app: None
) -> Callable[[dict[str, Any]], Any]:
    """Return a helper that signs and POSTs an event to the webhook endpoint."""

    def _post(payload: dict[str, Any]):
        body = json.dumps(payload)
        return client.post("/api/v1/webhooks/clerk", content=body, headers=sign_payload(body))

    return _post
