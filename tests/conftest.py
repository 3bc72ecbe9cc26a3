"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A fixed clock
- In-memory tracking store and mock email sender
- A verification service wired to both
"""

from collections.abc import Callable
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from src.adapters.tracking.memory import InMemoryTrackingStore
from src.domain.verification import VerificationService

FIXED_NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
TEST_DOMAIN = "app.example.com"
TEST_SENDER = "noreply@example.com"


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock that always returns FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def store(fixed_clock: Callable[[], datetime]) -> InMemoryTrackingStore:
    """Empty in-memory tracking store using the fixed clock."""
    return InMemoryTrackingStore(clock=fixed_clock)


@pytest.fixture
def sender() -> Mock:
    """Mock email sender recording every dispatched message."""
    return Mock()


@pytest.fixture
def service(
    store: InMemoryTrackingStore, sender: Mock, fixed_clock: Callable[[], datetime]
) -> VerificationService:
    """Verification service wired to the in-memory store and mock sender."""
    return VerificationService(
        tracking_store=store,
        email_sender=sender,
        sender_address=TEST_SENDER,
        domain=TEST_DOMAIN,
        clock=fixed_clock,
    )
