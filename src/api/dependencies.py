"""
Dependency wiring - Process-wide clients and service factories.

Remote-service clients are created once per process and reused across
invocations: the Lambda entry point calls get_default_service() on every
event, and the FastAPI lifespan stores the same objects in app.state.
Nothing here is torn down per call.
"""

from functools import lru_cache
from typing import Any

import boto3
from fastapi import Request
from psycopg_pool import ConnectionPool

from src.adapters.email import ConsoleEmailSender, SesEmailSender
from src.adapters.tracking import (
    DynamoDbTrackingStore,
    InMemoryTrackingStore,
    PostgresTrackingStore,
    run_migrations,
)
from src.config.settings import get_settings
from src.domain.ports import EmailSender, TrackingStore
from src.domain.verification import VerificationService


@lru_cache
def get_ses_client() -> Any:
    """SES client (singleton)."""
    return boto3.client("ses", region_name=get_settings().aws_region)


@lru_cache
def get_sns_client() -> Any:
    """SNS client (singleton), used to confirm HTTP subscriptions."""
    return boto3.client("sns", region_name=get_settings().aws_region)


@lru_cache
def get_dynamodb_table() -> Any:
    """DynamoDB Table resource for the tracking table (singleton)."""
    settings = get_settings()
    dynamodb = boto3.resource("dynamodb", region_name=settings.aws_region)
    return dynamodb.Table(settings.dynamodb_table)


@lru_cache
def get_connection_pool() -> ConnectionPool:
    """
    Open the PostgreSQL pool and run migrations (singleton).

    Only used when the postgres tracking store is selected.
    """
    settings = get_settings()
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        open=True,
    )
    run_migrations(pool)
    return pool


@lru_cache
def get_memory_store() -> InMemoryTrackingStore:
    return InMemoryTrackingStore()


def build_tracking_store() -> TrackingStore:
    """Create the tracking store selected by settings."""
    settings = get_settings()
    if settings.tracking_store == "postgres":
        return PostgresTrackingStore(get_connection_pool())
    if settings.tracking_store == "memory":
        return get_memory_store()
    return DynamoDbTrackingStore(get_dynamodb_table(), ttl_attribute=settings.dynamodb_ttl_attribute)


def build_email_sender() -> EmailSender:
    """Create the email sender selected by settings."""
    if get_settings().email_backend == "console":
        return ConsoleEmailSender()
    return SesEmailSender(get_ses_client())


@lru_cache
def get_default_service() -> VerificationService:
    """
    Create verification service with injected dependencies (singleton).

    Wires together the tracking store and email sender for the domain service.
    """
    settings = get_settings()
    return VerificationService(
        tracking_store=build_tracking_store(),
        email_sender=build_email_sender(),
        sender_address=settings.ses_from_email,
        domain=settings.domain,
        retention_seconds=settings.record_retention_seconds,
        link_expiry_seconds=settings.link_expiry_seconds,
        subject=settings.email_subject,
        signature=settings.email_signature,
    )


def get_verification_service(request: Request) -> VerificationService:
    """
    Get verification service from app state.

    The service is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.service


def get_subscription_client(request: Request) -> Any:
    """Get the SNS client from app state."""
    return request.app.state.sns_client
