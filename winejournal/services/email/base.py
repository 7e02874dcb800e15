"""Email service base class and factory."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from jinja2 import Environment, FileSystemLoader

if TYPE_CHECKING:
    from winejournal.config import Settings

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"


class EmailService(ABC):
    """Renders account emails from Jinja2 templates and hands them to a backend."""

    def __init__(self, settings: "Settings") -> None:
        self.settings = settings
        self.sender = settings.email_sender
        self.sender_name = settings.email_sender_name
        self.frontend_url = settings.frontend_url.rstrip("/")
        self.template_env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=True,
        )

    def render(self, template_name: str, **context: object) -> str:
        context.setdefault("app_name", self.settings.app_name)
        return self.template_env.get_template(template_name).render(**context)

    def format_sender(self) -> str:
        """Sender in ``Name <address>`` form."""
        return f"{self.sender_name} <{self.sender}>"

    @abstractmethod
    async def send_email(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: str | None = None,
    ) -> bool:
        """Deliver one message. Returns True on success."""

    async def send_verification_email(self, to_email: str, token: str) -> bool:
        verify_url = f"{self.frontend_url}/verify?token={token}"
        app_name = self.settings.app_name
        return await self.send_email(
            to_email=to_email,
            subject=f"Verify your {app_name} account",
            html_content=self.render("verification.html", verify_url=verify_url),
            text_content=(
                f"Welcome to {app_name}!\n\n"
                f"Verify your email address here:\n\n{verify_url}\n\n"
                "If you did not create an account, please ignore this email."
            ),
        )

    async def send_password_reset_email(self, to_email: str, token: str) -> bool:
        reset_url = f"{self.frontend_url}/reset-password?token={token}"
        app_name = self.settings.app_name
        return await self.send_email(
            to_email=to_email,
            subject=f"Reset your {app_name} password",
            html_content=self.render("password_reset.html", reset_url=reset_url),
            text_content=(
                f"{app_name} password reset\n\n"
                f"Reset your password here:\n\n{reset_url}\n\n"
                "If you did not request a password reset, please ignore this email. "
                "The link expires in 1 hour."
            ),
        )


_email_service: EmailService | None = None


def get_email_service() -> EmailService:
    """Return the configured email service, created on first use."""
    global _email_service
    if _email_service is None:
        from winejournal.config import settings
        from winejournal.services.email.console import ConsoleEmailService

        # console is the only backend; the config schema rejects anything else
        _email_service = ConsoleEmailService(settings)
    return _email_service


def reset_email_service() -> None:
    global _email_service
    _email_service = None
