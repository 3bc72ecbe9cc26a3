"""
Domain models - Plain value objects passed between ports.

These are frozen dataclasses so the domain layer stays free of
framework imports; transport validation happens in the API layer.
"""

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class Registration:
    """A user-registration event after intake validation."""

    email: str
    first_name: str
    last_name: str
    token: str | None = None


@dataclass(frozen=True)
class EmailMessage:
    """A fully rendered transactional email."""

    sender: str
    recipient: str
    subject: str
    text_body: str
    html_body: str


@dataclass(frozen=True)
class VerificationRecord:
    """
    Tracking record written after a verification email is dispatched.

    Serves as the idempotency marker for the Duplicate Guard and as an
    audit trail. ``expires_at`` is epoch seconds and drives store expiry.
    """

    email: str
    token: str
    sent_at: datetime
    expires_at: int

    @property
    def sent_at_iso(self) -> str:
        """ISO-8601 UTC timestamp with millisecond precision and ``Z`` suffix."""
        sent_at = self.sent_at.astimezone(timezone.utc)
        return sent_at.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= int(now.timestamp())
