"""
Integration tests for the complete verification flow.

Drives the Lambda handler and the FastAPI app end to end with the
in-memory tracking store, checking the first-delivery and redelivery
scenarios.
"""

import json
import logging
import re
from collections.abc import Generator
from datetime import timedelta
from unittest.mock import Mock, patch

import pytest
from fastapi.testclient import TestClient

from src.adapters.tracking.memory import InMemoryTrackingStore
from src.api import dependencies, lambda_handler
from src.api.main import app
from src.config.settings import get_settings
from src.domain.verification import VerificationService
from tests.conftest import FIXED_NOW, TEST_DOMAIN

JOHN = {"email": "john@x.com", "firstName": "John", "lastName": "Doe"}


def sns_event(message: dict) -> dict:
    return {"Records": [{"EventSource": "aws:sns", "Sns": {"Message": json.dumps(message)}}]}


@pytest.fixture
def wired_service(service: VerificationService) -> Generator[VerificationService, None, None]:
    with patch.object(lambda_handler, "get_default_service", return_value=service):
        yield service


class TestLambdaFlow:
    """Scenarios through handler() with real domain logic."""

    def test_first_delivery_sends_and_records(
        self, wired_service: VerificationService, store: InMemoryTrackingStore, sender: Mock
    ) -> None:
        response = lambda_handler.handler(sns_event(JOHN))

        assert json.loads(response["body"]) == {"message": "Email sent successfully"}
        sender.send.assert_called_once()
        message = sender.send.call_args[0][0]
        assert message.recipient == "john@x.com"

        records = store.find_records("john@x.com")
        assert len(records) == 1
        link = f"https://{TEST_DOMAIN}/v1/user/verify?email=john%40x.com&token={records[0].token}"
        assert link in message.text_body
        assert records[0].expires_at == int((FIXED_NOW + timedelta(days=1)).timestamp())

    def test_redelivery_is_suppressed(
        self, wired_service: VerificationService, sender: Mock
    ) -> None:
        lambda_handler.handler(sns_event(JOHN))
        response = lambda_handler.handler(sns_event(JOHN))

        assert response["statusCode"] == 200
        assert json.loads(response["body"]) == {"message": "Email already sent"}
        assert sender.send.call_count == 1

    def test_upstream_token_round_trips(
        self, wired_service: VerificationService, store: InMemoryTrackingStore, sender: Mock
    ) -> None:
        lambda_handler.handler(sns_event({**JOHN, "token": "web-app-token"}))

        assert store.find_records("john@x.com")[0].token == "web-app-token"
        assert "&token=web-app-token" in sender.send.call_args[0][0].text_body

    def test_send_failure_leaves_no_record_and_reraises(
        self, wired_service: VerificationService, store: InMemoryTrackingStore, sender: Mock
    ) -> None:
        sender.send.side_effect = RuntimeError("Email address is not verified")

        with pytest.raises(RuntimeError):
            lambda_handler.handler(sns_event(JOHN))

        assert store.find_records("john@x.com") == []


@pytest.fixture
def local_app(monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient, None, None]:
    """App running with in-memory store and console sender."""
    monkeypatch.setenv("TRACKING_STORE", "memory")
    monkeypatch.setenv("EMAIL_BACKEND", "console")
    monkeypatch.setenv("AWS_REGION", "us-east-1")
    caches = [
        get_settings,
        dependencies.get_default_service,
        dependencies.get_memory_store,
        dependencies.get_sns_client,
    ]
    for cache in caches:
        cache.cache_clear()

    with TestClient(app) as client:
        yield client

    for cache in caches:
        cache.cache_clear()


class TestHttpFlow:
    """Scenarios through the SNS HTTP endpoint with local backends."""

    def test_first_delivery_then_redelivery(
        self, local_app: TestClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        body = json.dumps({"Type": "Notification", "MessageId": "m-1", "Message": json.dumps(JOHN)})

        with caplog.at_level(logging.INFO):
            first = local_app.post("/v1/notifications/sns", content=body)
            second = local_app.post("/v1/notifications/sns", content=body)

        assert first.json() == {"message": "Email sent successfully"}
        assert second.json() == {"message": "Email already sent"}
        assert caplog.text.count("[VERIFICATION]") == 1
        assert re.search(r"email=john%40x\.com&token=[0-9a-f-]{36}", caplog.text)
