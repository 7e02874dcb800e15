"""Console email backend for development and testing."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from winejournal.services.email.base import EmailService

if TYPE_CHECKING:
    from winejournal.config import Settings

logger = logging.getLogger(__name__)


@dataclass
class SentEmail:
    to_email: str
    subject: str
    html_content: str
    text_content: str | None


class ConsoleEmailService(EmailService):
    """Logs emails instead of sending them and keeps them in ``outbox``."""

    def __init__(self, settings: "Settings") -> None:
        super().__init__(settings)
        self.outbox: list[SentEmail] = []
        logger.info("Using console email backend (emails will be logged, not sent)")

    async def send_email(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: str | None = None,
    ) -> bool:
        self.outbox.append(SentEmail(to_email, subject, html_content, text_content))
        separator = "=" * 60
        logger.info(
            "\n%s\nEMAIL (console backend - not sent)\nFrom: %s\nTo: %s\nSubject: %s\n%s\n%s\n%s",
            separator,
            self.format_sender(),
            to_email,
            subject,
            separator,
            text_content or "(no text content)",
            separator,
        )
        return True
