"""
Domain layer - Pure business logic with zero framework imports.

This package contains the duplicate-suppression and token-lifecycle
logic for verification emails. It defines its own port interfaces for
infrastructure abstraction, ensuring true hexagonal architecture decoupling.
"""

from .exceptions import MalformedEvent, TrackingStoreUnavailable, VerificationError
from .models import EmailMessage, Registration, VerificationRecord
from .ports import DispatchOutcome, EmailSender, TrackingStore
from .verification import VerificationService

__all__ = [
    "DispatchOutcome",
    "EmailMessage",
    "EmailSender",
    "MalformedEvent",
    "Registration",
    "TrackingStore",
    "TrackingStoreUnavailable",
    "VerificationError",
    "VerificationRecord",
    "VerificationService",
]
