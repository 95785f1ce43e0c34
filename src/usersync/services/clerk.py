"""Clerk Backend API client for pushing user metadata."""

import logging
from typing import Any

import httpx

from src.usersync.config import settings

logger = logging.getLogger(__name__)


class ClerkAPIError(Exception):
    """Raised when a Clerk Backend API call cannot be completed."""

    pass


class ClerkClient:
    """
    Minimal async client for the Clerk Backend API.

    Only the user metadata endpoint is used: after a user record is created
    locally, its internal ID is written into the Clerk user's public metadata
    so that session tokens can carry it.

    Attributes:
        api_url: Clerk Backend API base URL
        secret_key: Clerk secret key used as bearer token
        _http_client: HTTP client for Clerk API requests

    Example:
        >>> clerk = ClerkClient(secret_key="sk_test_...")
        >>> await clerk.update_user_metadata("user_2abc", public_metadata={"userId": "42"})
        >>> await clerk.close()
    """

    def __init__(
        self,
        secret_key: str | None = None,
        api_url: str | None = None,
        timeout: float | None = None,
    ):
        """
        Initialize Clerk client.

        Args:
            secret_key: Clerk secret key (defaults to settings)
            api_url: Backend API base URL (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
        """
        self.secret_key = secret_key if secret_key is not None else settings.clerk_secret_key
        self.api_url = (api_url or settings.clerk_api_url).rstrip("/")
        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout or settings.clerk_timeout_seconds)
        )

    async def update_user_metadata(
        self,
        user_id: str,
        public_metadata: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Merge keys into a Clerk user's public metadata.

        Args:
            user_id: Clerk user ID
            public_metadata: Keys to merge into public metadata

        Returns:
            The updated Clerk user object

        Raises:
            ClerkAPIError: If the secret key is missing or the request fails
        """
        if not self.secret_key:
            raise ClerkAPIError("Clerk secret key is not configured")

        url = f"{self.api_url}/users/{user_id}/metadata"
        try:
            response = await self._http_client.patch(
                url,
                json={"public_metadata": public_metadata},
                headers={"Authorization": f"Bearer {self.secret_key}"},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(
                f"Failed to update Clerk metadata for {user_id}: {e}",
                extra={"error_type": "clerk_metadata_update_failed", "clerk_id": user_id},
            )
            raise ClerkAPIError(f"Failed to update metadata for {user_id}: {str(e)}") from e

        logger.info(f"Updated Clerk metadata for {user_id}", extra={"clerk_id": user_id})
        return response.json()

    async def close(self) -> None:
        """Close HTTP client connections."""
        await self._http_client.aclose()
