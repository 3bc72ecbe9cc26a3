"""
Lambda entry point - SNS-triggered verification email handler.

Configure the function handler as ``src.api.lambda_handler.handler``.
Success returns a status/message pair; any failure is logged and
re-raised so the platform governs redelivery.
"""

import json
import logging
from typing import Any

from src.api.dependencies import get_default_service
from src.api.intake import parse_lambda_event
from src.config.log_config import configure_logging
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

configure_logging(get_settings().log_level)


def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    """
    Handle one SNS invocation.

    Args:
        event: Lambda SNS event with the registration message in Records[0]
        context: Lambda context (unused)

    Returns:
        ``{"statusCode": 200, "body": "{\\"message\\": ...}"}``
    """
    logger.info("Event received: %s", json.dumps(event, indent=2, default=str))

    try:
        registration = parse_lambda_event(event)
        outcome = get_default_service().process(registration)
    except Exception:
        logger.exception("Error processing email")
        raise

    return {
        "statusCode": 200,
        "body": json.dumps({"message": outcome.message}),
    }
