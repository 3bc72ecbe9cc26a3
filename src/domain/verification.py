"""
Verification domain service - Duplicate suppression and token lifecycle.

This module contains the core business logic for handling a
user-registration event: at most one verification email is sent per
address within the record retention window.

Processing Flow (strictly linear)
=================================

    intake -> guard -> issue token -> notify -> record

- Guard: any existing tracking record for the address short-circuits
  processing with ALREADY_SENT. A failed guard query fails open.
- Issue token: an upstream token is reused verbatim, otherwise a fresh
  version-4 UUID is generated.
- Notify: one email is dispatched. Failures propagate, no retry.
- Record: the tracking record is written only after a successful send,
  so a send failure never blocks later genuine attempts.

Two concurrent deliveries of the same event may both pass the guard
before either writes; this yields at most one duplicate email and is
accepted. No locking is used.
"""

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from .exceptions import TrackingStoreUnavailable
from .messages import (
    build_verification_link,
    describe_duration,
    render_html_body,
    render_text_body,
)
from .models import EmailMessage, Registration, VerificationRecord
from .ports import DispatchOutcome, EmailSender, TrackingStore

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _uuid4_token() -> str:
    return str(uuid.uuid4())


@dataclass
class VerificationService:
    """
    Domain service for verification email dispatch.

    Orchestrates the duplicate guard, token issuing, email rendering
    and dispatch, and tracking record persistence.
    """

    tracking_store: TrackingStore
    email_sender: EmailSender
    sender_address: str
    domain: str
    retention_seconds: int = 60 * 60 * 24
    link_expiry_seconds: int = 60
    subject: str = "Verify Your Email Address"
    signature: str = "The Support Team"
    clock: Callable[[], datetime] = field(default=_utc_now)
    token_factory: Callable[[], str] = field(default=_uuid4_token)

    def process(self, registration: Registration) -> DispatchOutcome:
        """
        Handle one registration event.

        Args:
            registration: Validated registration event

        Returns:
            SENT after dispatching and recording, ALREADY_SENT for duplicates

        Raises:
            Any email dispatch or record write error, untranslated
        """
        email = registration.email
        logger.info("Processing verification email for: %s", email)

        if self.is_duplicate(email):
            logger.info("Duplicate email detected for %s, skipping send", email)
            return DispatchOutcome.ALREADY_SENT

        token = self.issue_token(registration.token)
        link = build_verification_link(self.domain, email, token)

        self.email_sender.send(self.build_message(registration, link))
        self.record_sent(email, token)

        logger.info("Verification email sent successfully to %s", email)
        return DispatchOutcome.SENT

    def is_duplicate(self, email: str) -> bool:
        """
        Check whether a verification email was already sent to this address.

        Fails open: if the store cannot be queried the address is treated
        as not yet notified, so a store outage never drops a legitimate
        verification email.
        """
        try:
            records = self.tracking_store.find_records(email)
        except TrackingStoreUnavailable:
            logger.exception("Error checking duplicate for %s, proceeding with send", email)
            return False
        return len(records) > 0

    def issue_token(self, supplied_token: str | None) -> str:
        """Reuse the upstream token when present, otherwise generate one."""
        if supplied_token:
            return supplied_token
        return self.token_factory()

    def build_message(self, registration: Registration, link: str) -> EmailMessage:
        expiry = describe_duration(self.link_expiry_seconds)
        return EmailMessage(
            sender=self.sender_address,
            recipient=registration.email,
            subject=self.subject,
            text_body=render_text_body(registration.first_name, link, expiry, self.signature),
            html_body=render_html_body(
                registration.first_name, link, expiry, self.signature, self.subject
            ),
        )

    def record_sent(self, email: str, token: str) -> VerificationRecord:
        """
        Persist the tracking record for a dispatched email.

        A failure here leaves the email sent without an idempotency
        record; the error is logged and re-raised so the invoking
        platform can redeliver.
        """
        now = self.clock()
        record = VerificationRecord(
            email=email,
            token=token,
            sent_at=now,
            expires_at=int((now + timedelta(seconds=self.retention_seconds)).timestamp()),
        )
        try:
            self.tracking_store.put_record(record)
        except Exception:
            logger.error(
                "Verification email sent to %s but tracking record was not written", email
            )
            raise
        return record
