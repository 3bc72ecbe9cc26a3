"""
Amazon SES email sender adapter - Implements EmailSender protocol.

Dispatches verification messages through the SES ``SendEmail`` API with
both a plain-text and an HTML body. Errors from botocore (unverified
sender, throttling, network failures) propagate to the caller; this
adapter does not retry.
"""

import logging
from typing import Any

from src.domain.models import EmailMessage

logger = logging.getLogger(__name__)

_CHARSET = "UTF-8"


class SesEmailSender:
    """
    Implements EmailSender protocol via a boto3 SES client.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, client: Any) -> None:
        """
        Initialize sender with an SES client.

        Args:
            client: boto3 ``ses`` client, created once per process
        """
        self._client = client

    def send(self, message: EmailMessage) -> None:
        if not message.recipient:
            raise ValueError("Recipient address is required")

        response = self._client.send_email(
            Source=message.sender,
            Destination={"ToAddresses": [message.recipient]},
            Message={
                "Subject": {"Data": message.subject, "Charset": _CHARSET},
                "Body": {
                    "Text": {"Data": message.text_body, "Charset": _CHARSET},
                    "Html": {"Data": message.html_body, "Charset": _CHARSET},
                },
            },
        )
        logger.debug("SES accepted message %s for %s", response.get("MessageId"), message.recipient)
