"""Shared services module for external integrations."""

from src.usersync.services.analytics.posthog import PostHogService
from src.usersync.services.clerk import ClerkAPIError, ClerkClient

__all__ = [
    "PostHogService",
    "ClerkClient",
    "ClerkAPIError",
]
