"""
Domain exceptions - Semantic error types for verification handling.

This module defines domain-specific exceptions that communicate
failures without leaking infrastructure details.
"""


class VerificationError(Exception):
    """Base class for verification domain errors."""

    pass


class MalformedEvent(VerificationError):
    """Inbound notification could not be parsed into a registration."""

    pass


class TrackingStoreUnavailable(VerificationError):
    """Tracking store could not be queried (outage, permissions)."""

    pass
