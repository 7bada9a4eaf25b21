import logging
from abc import ABC, abstractmethod
from typing import Any, Dict

logger = logging.getLogger(__name__)


class MailDeliveryError(Exception):
    """Raised when an email could not be delivered after every attempt"""

    def __init__(self, recipient: str, template: str, attempts: int, last_error: Exception):
        self.recipient = recipient
        self.template = template
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Failed to send '{template}' after {attempts} attempt(s): {last_error}"
        )


class IMailer(ABC):
    """Outbound email - application layer"""

    @abstractmethod
    async def send(self, recipient: str, template: str, data: Dict[str, Any]) -> None:
        """Render a template and deliver it; raises MailDeliveryError on failure"""
        pass


async def send_in_background(
    mailer: IMailer, recipient: str, template: str, data: Dict[str, Any]
) -> None:
    """
    Background-task entry point for email delivery.

    Runs after the response has been sent, so an exhausted retry policy is
    reported through the log rather than to the client.
    """
    try:
        await mailer.send(recipient, template, data)
    except MailDeliveryError as exc:
        logger.error(f"Email delivery failed for template '{template}': {exc}")
