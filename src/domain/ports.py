"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from enum import Enum
from typing import Protocol

from .models import EmailMessage, VerificationRecord


class DispatchOutcome(Enum):
    """
    Result of processing one registration event.

    Both values are successful outcomes; failures are raised.
    """

    SENT = "Email sent successfully"
    ALREADY_SENT = "Email already sent"

    @property
    def message(self) -> str:
        return self.value


class TrackingStore(Protocol):
    """Port interface for verification record persistence."""

    def find_records(self, email: str) -> list[VerificationRecord]:
        """
        Query records keyed by email.

        Args:
            email: Recipient address used as the record key

        Returns:
            Zero or more live records for the address

        Raises:
            TrackingStoreUnavailable: If the store cannot be queried
        """
        ...

    def put_record(self, record: VerificationRecord) -> None:
        """
        Persist a tracking record.

        Backend errors propagate untranslated.
        """
        ...


class EmailSender(Protocol):
    """Port interface for email delivery."""

    def send(self, message: EmailMessage) -> None:
        """
        Dispatch exactly one message.

        Args:
            message: Rendered message with sender, recipient, subject and bodies
        """
        ...
