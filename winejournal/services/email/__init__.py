"""Email service module for Wine Journal."""

from winejournal.services.email.base import EmailService, get_email_service, reset_email_service
from winejournal.services.email.console import ConsoleEmailService, SentEmail

__all__ = [
    "EmailService",
    "ConsoleEmailService",
    "SentEmail",
    "get_email_service",
    "reset_email_service",
]
