"""Svix signature verification for inbound Clerk webhooks."""

import logging
from collections.abc import Mapping

from pydantic import ValidationError
from svix.webhooks import Webhook
from svix.webhooks import WebhookVerificationError as SvixVerificationError

from src.usersync.webhooks.exceptions import (
    ConfigurationError,
    MissingSignatureHeadersError,
    WebhookVerificationError,
)
from src.usersync.webhooks.models import WebhookEvent

logger = logging.getLogger(__name__)

SVIX_ID_HEADER = "svix-id"
SVIX_TIMESTAMP_HEADER = "svix-timestamp"
SVIX_SIGNATURE_HEADER = "svix-signature"
SVIX_HEADERS = (SVIX_ID_HEADER, SVIX_TIMESTAMP_HEADER, SVIX_SIGNATURE_HEADER)


class WebhookVerifier:
    """
    Verifies Svix-signed Clerk webhook deliveries.

    Built once at startup with the signing secret; a missing or undecodable
    secret raises ConfigurationError so the application never serves
    requests without it.

    Example:
        >>> verifier = WebhookVerifier("whsec_...")
        >>> event = verifier.verify(body, request.headers)
        >>> event.type
        'user.created'
    """

    def __init__(self, secret: str | None):
        """
        Initialize verifier.

        Args:
            secret: Signing secret from the Clerk Dashboard (``whsec_...``)

        Raises:
            ConfigurationError: If the secret is empty or not valid base64
        """
        if not secret:
            raise ConfigurationError(
                "Please add WEBHOOK_SECRET from Clerk Dashboard to .env or the environment"
            )
        try:
            self._webhook = Webhook(secret)
        except Exception as e:
            raise ConfigurationError(f"Invalid WEBHOOK_SECRET: {str(e)}") from e

    def verify(self, body: bytes | str, headers: Mapping[str, str]) -> WebhookEvent:
        """
        Verify a delivery and return the trusted event.

        Args:
            body: Raw request body, exactly as received
            headers: Request headers (case-insensitive lookup of svix-* headers)

        Returns:
            Parsed WebhookEvent

        Raises:
            MissingSignatureHeadersError: If any svix header is missing
            WebhookVerificationError: If the signature or payload is invalid
        """
        svix_headers = extract_svix_headers(headers)

        # Authenticity gate only; newer svix releases return None instead of the payload
        try:
            self._webhook.verify(body, svix_headers)
        except SvixVerificationError as e:
            logger.warning(
                f"Error verifying webhook: {e}",
                extra={"error_type": "signature_mismatch", "svix_id": svix_headers[SVIX_ID_HEADER]},
            )
            raise WebhookVerificationError(str(e)) from e
        except ValueError as e:
            # Malformed signature header
            logger.warning(
                f"Error verifying webhook: {e}",
                extra={"error_type": "malformed_webhook", "svix_id": svix_headers[SVIX_ID_HEADER]},
            )
            raise WebhookVerificationError(f"Malformed webhook: {str(e)}") from e

        try:
            return WebhookEvent.model_validate_json(body)
        except ValidationError as e:
            logger.warning(
                f"Verified webhook has an unexpected shape: {e}",
                extra={"error_type": "invalid_event", "svix_id": svix_headers[SVIX_ID_HEADER]},
            )
            raise WebhookVerificationError("Webhook payload is not a valid event") from e


def extract_svix_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """
    Pick the three svix headers out of a request header mapping.

    Raises:
        MissingSignatureHeadersError: If any of them is missing or empty
    """
    lowered = {key.lower(): value for key, value in headers.items()}
    svix_headers = {name: lowered.get(name, "") for name in SVIX_HEADERS}

    missing = [name for name, value in svix_headers.items() if not value]
    if missing:
        logger.warning(
            f"Webhook rejected: missing headers {missing}",
            extra={"error_type": "missing_svix_headers", "missing": missing},
        )
        raise MissingSignatureHeadersError(f"Missing headers: {', '.join(missing)}")

    return svix_headers
