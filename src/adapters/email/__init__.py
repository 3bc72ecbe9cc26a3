"""Email sender adapters - SES and console implementations."""

from .console import ConsoleEmailSender
from .ses import SesEmailSender

__all__ = ["ConsoleEmailSender", "SesEmailSender"]
