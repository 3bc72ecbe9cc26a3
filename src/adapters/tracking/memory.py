"""In-memory tracking store for local runs and tests."""

from collections.abc import Callable
from datetime import datetime, timezone

from src.domain.models import VerificationRecord


class InMemoryTrackingStore:
    """
    Implements TrackingStore protocol with a process-local dict.

    Expired records are hidden from reads to emulate store-native TTL.
    Records are never deleted explicitly.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._records: dict[str, list[VerificationRecord]] = {}
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def find_records(self, email: str) -> list[VerificationRecord]:
        now = self._clock()
        return [r for r in self._records.get(email, []) if not r.is_expired(now)]

    def put_record(self, record: VerificationRecord) -> None:
        # Same key overwrites, like a put on a keyed store
        self._records[record.email] = [record]
