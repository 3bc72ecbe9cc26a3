"""
API request and response models.

Pydantic models for validating inbound SNS envelopes and registration
events, and for FastAPI response serialization.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.domain.models import Registration


class RegistrationEvent(BaseModel):
    """
    Registration event published by the user service.

    Address format validation is left to the email provider; only a
    non-blank recipient is required here.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    email: str
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    token: str | None = None

    @field_validator("email")
    @classmethod
    def email_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("email must not be blank")
        return value

    def to_registration(self) -> Registration:
        return Registration(
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            token=self.token,
        )


class SnsPayload(BaseModel):
    """The ``Sns`` object of a Lambda SNS record."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    message: str = Field(..., alias="Message")
    message_id: str | None = Field(None, alias="MessageId")


class SnsRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    sns: SnsPayload = Field(..., alias="Sns")


class LambdaSnsEvent(BaseModel):
    """Lambda invoke payload for an SNS trigger."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    records: list[SnsRecord] = Field(..., alias="Records", min_length=1)


class SnsNotification(BaseModel):
    """Message document delivered to an SNS HTTP(S) subscription."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: str = Field(..., alias="Type")
    message_id: str | None = Field(None, alias="MessageId")
    topic_arn: str | None = Field(None, alias="TopicArn")
    message: str = Field("", alias="Message")
    token: str | None = Field(None, alias="Token")
    subscribe_url: str | None = Field(None, alias="SubscribeURL")


class MessageResponse(BaseModel):
    """Response model for a handled notification."""

    message: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
