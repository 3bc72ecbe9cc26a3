"""
DynamoDB tracking store adapter - Implements TrackingStore protocol.

Records live in a table keyed by ``email``. The expiry attribute (``ttl``
by default) holds epoch seconds and is the attribute configured for the
table's native TTL sweep, so this adapter never deletes items.

Note that DynamoDB removes expired items lazily; an expired item that has
not been swept yet still counts as a duplicate, matching the store's
view of the data.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from boto3.dynamodb.conditions import Key
from botocore.exceptions import BotoCoreError, ClientError

from src.domain.exceptions import TrackingStoreUnavailable
from src.domain.models import VerificationRecord

logger = logging.getLogger(__name__)


class DynamoDbTrackingStore:
    """
    Implements TrackingStore protocol via a boto3 DynamoDB Table resource.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, table: Any, ttl_attribute: str = "ttl") -> None:
        """
        Initialize store with a table resource.

        Args:
            table: boto3 ``dynamodb`` Table resource, created once per process
            ttl_attribute: Name of the table's TTL attribute
        """
        self._table = table
        self._ttl_attribute = ttl_attribute

    def find_records(self, email: str) -> list[VerificationRecord]:
        try:
            response = self._table.query(KeyConditionExpression=Key("email").eq(email))
        except (ClientError, BotoCoreError) as e:
            raise TrackingStoreUnavailable(f"DynamoDB query failed for {email}") from e

        return [self._to_record(item) for item in response.get("Items", [])]

    def put_record(self, record: VerificationRecord) -> None:
        self._table.put_item(
            Item={
                "email": record.email,
                "token": record.token,
                "sentAt": record.sent_at_iso,
                self._ttl_attribute: record.expires_at,
            }
        )

    def _to_record(self, item: dict[str, Any]) -> VerificationRecord:
        # Any returned item counts as a duplicate, so unreadable fields
        # fall back to defaults instead of failing the lookup.
        return VerificationRecord(
            email=str(item.get("email", "")),
            token=str(item.get("token", "")),
            sent_at=_parse_sent_at(item.get("sentAt")),
            expires_at=_parse_expiry(item.get(self._ttl_attribute)),
        )


def _parse_sent_at(value: Any) -> datetime:
    if value:
        try:
            return datetime.fromisoformat(str(value))
        except ValueError:
            logger.warning("Unreadable sentAt value %r in tracking item", value)
    return datetime.fromtimestamp(0, timezone.utc)


def _parse_expiry(value: Any) -> int:
    if value is None:
        return 0
    try:
        # Table resources return numbers as Decimal
        return int(value)
    except (TypeError, ValueError, ArithmeticError):
        logger.warning("Unreadable expiry value %r in tracking item", value)
        return 0
