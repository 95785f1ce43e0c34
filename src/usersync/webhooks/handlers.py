"""API handlers for inbound Clerk webhooks."""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse

from src.usersync.services import PostHogService
from src.usersync.webhooks.dependencies import get_user_sync_dispatcher, get_webhook_verifier
from src.usersync.webhooks.dispatcher import UserSyncDispatcher
from src.usersync.webhooks.exceptions import (
    MissingSignatureHeadersError,
    PayloadValidationError,
    UserSyncError,
    WebhookVerificationError,
)
from src.usersync.webhooks.models import WebhookErrorResponse, WebhookSuccessResponse
from src.usersync.webhooks.verification import WebhookVerifier

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


@router.post(
    "/clerk",
    response_model=WebhookSuccessResponse,
    responses={400: {"model": WebhookErrorResponse}, 500: {"model": WebhookErrorResponse}},
)
async def handle_clerk_webhook(
    request: Request,
    verifier: WebhookVerifier = Depends(get_webhook_verifier),
    dispatcher: UserSyncDispatcher = Depends(get_user_sync_dispatcher),
) -> Response:
    """
    Receive a Svix-signed Clerk webhook and sync the user record.

    Handled event types:
    - user.created: insert the user, then store its ID in Clerk public metadata
    - user.updated: replace first name, last name, username and photo
    - user.deleted: delete the user

    Any other event type is acknowledged with an empty 200 so Clerk does not
    retry it.

    Returns:
        200 with {"message": "OK", "user": {...}} for handled events

    Error responses:
        400 plain text if svix headers are missing or the signature is invalid
        400 JSON if a required field is missing from the event
        500 JSON if the database mutation fails
    """
    body = await request.body()

    try:
        event = verifier.verify(body, request.headers)
    except MissingSignatureHeadersError:
        PostHogService().capture_rejection("missing_svix_headers")
        return PlainTextResponse(
            "Error occurred -- no svix headers", status_code=status.HTTP_400_BAD_REQUEST
        )
    except WebhookVerificationError:
        PostHogService().capture_rejection("signature_verification_failed")
        return PlainTextResponse("Error occurred", status_code=status.HTTP_400_BAD_REQUEST)

    try:
        result = await dispatcher.dispatch(event)
    except PayloadValidationError as e:
        return JSONResponse(
            WebhookErrorResponse(error=str(e)).model_dump(exclude_none=True),
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    except UserSyncError as e:
        return JSONResponse(
            WebhookErrorResponse(error="Internal server error", details=str(e)).model_dump(),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    except Exception as e:
        logger.error(f"Unexpected error handling {event.type} webhook: {e}", exc_info=True)
        return JSONResponse(
            WebhookErrorResponse(error="Internal server error", details=str(e)).model_dump(),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if result is None:
        return Response(content="", status_code=status.HTTP_200_OK)

    return JSONResponse(WebhookSuccessResponse(user=result.user).model_dump(mode="json"))
