"""
Unit tests for the Lambda entry point.

The process-wide service is replaced with a mock so no AWS clients
are created.
"""

import json
import logging
from unittest.mock import MagicMock, patch

import pytest

from src.api import lambda_handler
from src.domain.exceptions import MalformedEvent
from src.domain.ports import DispatchOutcome
from src.domain.verification import VerificationService


def sns_event(message: dict | str) -> dict:
    text = message if isinstance(message, str) else json.dumps(message)
    return {"Records": [{"EventSource": "aws:sns", "Sns": {"Message": text}}]}


@pytest.fixture
def service() -> MagicMock:
    mock_service = MagicMock(spec=VerificationService)
    mock_service.process.return_value = DispatchOutcome.SENT
    with patch.object(lambda_handler, "get_default_service", return_value=mock_service):
        yield mock_service


class TestHandler:
    """Tests for handler()."""

    def test_success_response(self, service: MagicMock) -> None:
        response = lambda_handler.handler(
            sns_event({"email": "john@x.com", "firstName": "John", "lastName": "Doe"})
        )

        assert response == {
            "statusCode": 200,
            "body": json.dumps({"message": "Email sent successfully"}),
        }

    def test_already_sent_response(self, service: MagicMock) -> None:
        service.process.return_value = DispatchOutcome.ALREADY_SENT

        response = lambda_handler.handler(
            sns_event({"email": "john@x.com", "firstName": "John", "lastName": "Doe"})
        )

        assert response["statusCode"] == 200
        assert json.loads(response["body"]) == {"message": "Email already sent"}

    def test_malformed_event_raises(self, service: MagicMock) -> None:
        with pytest.raises(MalformedEvent):
            lambda_handler.handler(sns_event("{not json"))

        service.process.assert_not_called()

    def test_processing_error_is_logged_and_reraised(
        self, service: MagicMock, caplog: pytest.LogCaptureFixture
    ) -> None:
        service.process.side_effect = RuntimeError("SES unavailable")

        with caplog.at_level(logging.ERROR), pytest.raises(RuntimeError, match="SES unavailable"):
            lambda_handler.handler(
                sns_event({"email": "john@x.com", "firstName": "John", "lastName": "Doe"})
            )

        assert "Error processing email" in caplog.text

    def test_event_is_logged(self, service: MagicMock, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO):
            lambda_handler.handler(
                sns_event({"email": "john@x.com", "firstName": "John", "lastName": "Doe"}),
                context=object(),
            )

        assert "Event received" in caplog.text
