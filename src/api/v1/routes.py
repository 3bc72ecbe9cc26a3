"""
API v1 routes.

Defines the SNS HTTP(S) subscription endpoint that feeds registration
events into the verification service.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status

from src.api.dependencies import get_subscription_client, get_verification_service
from src.api.intake import parse_registration_message, parse_sns_notification
from src.api.models import ErrorResponse, MessageResponse
from src.domain.exceptions import MalformedEvent
from src.domain.verification import VerificationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["v1"])


async def read_raw_body(request: Request) -> bytes:
    """SNS posts with ``Content-Type: text/plain``, so the body is read raw."""
    return await request.body()


@router.post(
    "/notifications/sns",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Malformed notification"},
        500: {"description": "Processing failed, publisher should redeliver"},
    },
    summary="Receive an SNS delivery",
    description="SNS HTTP(S) subscription endpoint. Confirms subscriptions and "
    "sends a verification email for each registration notification.",
)
def receive_sns_notification(
    body: bytes = Depends(read_raw_body),
    service: VerificationService = Depends(get_verification_service),
    sns_client: Any = Depends(get_subscription_client),
) -> MessageResponse:
    """
    Handle one SNS delivery.

    Runs in the threadpool since SES, DynamoDB and PostgreSQL calls block.
    Processing errors are not caught: the resulting 500 makes SNS redeliver.
    """
    try:
        notification = parse_sns_notification(body)
    except MalformedEvent:
        logger.warning("Rejected malformed SNS delivery")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Malformed notification",
        ) from None

    if notification.type == "SubscriptionConfirmation":
        if not notification.topic_arn or not notification.token:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Malformed notification",
            )
        sns_client.confirm_subscription(
            TopicArn=notification.topic_arn,
            Token=notification.token,
        )
        logger.info("Confirmed SNS subscription for %s", notification.topic_arn)
        return MessageResponse(message="Subscription confirmed")

    if notification.type == "UnsubscribeConfirmation":
        logger.info("Unsubscribed from %s", notification.topic_arn)
        return MessageResponse(message="Unsubscribe acknowledged")

    if notification.type != "Notification":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Malformed notification",
        )

    try:
        registration = parse_registration_message(notification.message)
    except MalformedEvent:
        logger.warning("Rejected malformed registration message %s", notification.message_id)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Malformed notification",
        ) from None

    outcome = service.process(registration)
    return MessageResponse(message=outcome.message)
