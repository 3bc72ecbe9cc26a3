"""Tracking store adapters - DynamoDB, PostgreSQL and in-memory implementations."""

from .dynamodb import DynamoDbTrackingStore
from .memory import InMemoryTrackingStore
from .postgres import PostgresTrackingStore, run_migrations

__all__ = [
    "DynamoDbTrackingStore",
    "InMemoryTrackingStore",
    "PostgresTrackingStore",
    "run_migrations",
]
