"""
Console email sender adapter - Implements EmailSender protocol.

This module provides a console-based implementation of the domain's
email sender port, logging verification messages for local runs.
"""

import logging

from src.domain.models import EmailMessage

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements EmailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For development purposes - logs the plain-text body instead of sending.
    """

    def send(self, message: EmailMessage) -> None:
        """
        Log a verification message (simulates email delivery).

        Args:
            message: Rendered verification message
        """
        logger.info(
            "[VERIFICATION] From: %s To: %s Subject: %s\n%s",
            message.sender,
            message.recipient,
            message.subject,
            message.text_body,
        )
