"""
SMTP mailer with a bounded retry policy.

Delivery runs in a worker thread (smtplib is blocking) and is scheduled from
background tasks, so retries never hold up request handling.
"""

import asyncio
import logging
import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Any, Dict

from tenacity import (
    AsyncRetrying,
    RetryError,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from src.adapter.services.email_templates import RenderedEmail, render
from src.app.services.mailer import IMailer, MailDeliveryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    delay_seconds: float = 0.5

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")


class SmtpMailer(IMailer):
    """Send templated emails through an SMTP relay"""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        sender: str,
        timeout: float = 5.0,
        retry_policy: RetryPolicy = RetryPolicy(),
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.timeout = timeout
        self.retry_policy = retry_policy

    def _build_message(self, recipient: str, email: RenderedEmail) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["To"] = recipient
        msg["From"] = self.sender
        msg["Subject"] = email.subject
        # Plain text first, HTML alternative second
        msg.attach(MIMEText(email.plain_body, "plain"))
        msg.attach(MIMEText(email.html_body, "html"))
        return msg

    def _deliver(self, recipient: str, msg: MIMEMultipart) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.username:
                server.starttls()
                server.login(self.username, self.password)
            server.sendmail(self.sender, [recipient], msg.as_string())

    async def send(self, recipient: str, template: str, data: Dict[str, Any]) -> None:
        msg = self._build_message(recipient, render(template, data))

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.retry_policy.max_attempts),
            wait=wait_fixed(self.retry_policy.delay_seconds),
            retry=retry_if_exception_type((smtplib.SMTPException, OSError)),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=False,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    await asyncio.to_thread(self._deliver, recipient, msg)
        except RetryError as exc:
            last_attempt = exc.last_attempt
            raise MailDeliveryError(
                recipient, template, last_attempt.attempt_number, last_attempt.exception()
            ) from last_attempt.exception()
