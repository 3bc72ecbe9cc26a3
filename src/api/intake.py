"""
Event intake - Transport payloads to domain registrations.

Every parse failure is raised as MalformedEvent so the whole
invocation fails before any remote call is made.
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from src.api.models import LambdaSnsEvent, RegistrationEvent, SnsNotification
from src.domain.exceptions import MalformedEvent
from src.domain.models import Registration

logger = logging.getLogger(__name__)


def parse_registration_message(message: str | bytes) -> Registration:
    """Parse the JSON text carried in an SNS ``Message`` field."""
    try:
        event = RegistrationEvent.model_validate_json(message)
    except ValidationError as e:
        raise MalformedEvent(f"Invalid registration message: {e}") from e
    return event.to_registration()


def parse_lambda_event(event: Mapping[str, Any]) -> Registration:
    """
    Parse a Lambda SNS invoke payload.

    SNS delivers one record per invocation; only the first record is
    processed.
    """
    try:
        envelope = LambdaSnsEvent.model_validate(event)
    except ValidationError as e:
        raise MalformedEvent(f"Invalid SNS envelope: {e}") from e

    if len(envelope.records) > 1:
        logger.warning("Received %d records, processing only the first", len(envelope.records))

    sns = envelope.records[0].sns
    logger.info("Processing SNS message %s", sns.message_id)
    return parse_registration_message(sns.message)


def parse_sns_notification(body: str | bytes) -> SnsNotification:
    """Parse the raw body of an SNS HTTP(S) delivery."""
    try:
        return SnsNotification.model_validate_json(body)
    except ValidationError as e:
        raise MalformedEvent(f"Invalid SNS notification: {e}") from e
