import logging
from email.message import EmailMessage

import aiosmtplib
from fastapi import Request

from quizmaster.core.config import Settings

logger = logging.getLogger(__name__)


class EmailNotifier:
    """Best-effort SMTP sender. ``send`` reports failure with False and never raises."""

    def __init__(
        self,
        sender: str,
        password: str,
        hostname: str = "smtp.gmail.com",
        port: int = 587,
        timeout: float = 10,
    ):
        self.sender = sender
        self.password = password
        self.hostname = hostname
        self.port = port
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmailNotifier":
        return cls(
            sender=settings.MAIL_FROM,
            password=settings.MAIL_PASSWORD,
            hostname=settings.MAIL_HOST,
            port=settings.MAIL_PORT,
            timeout=settings.MAIL_TIMEOUT,
        )

    async def send(self, to_email: str, subject: str, body: str) -> bool:
        if not self.sender or not self.password:
            logger.warning("Mail credentials not configured, skipping %r to %s", subject, to_email)
            return False

        message = EmailMessage()
        message["From"] = f'"Quiz App" <{self.sender}>'
        message["To"] = to_email
        message["Subject"] = subject
        message.set_content(body)

        try:
            await aiosmtplib.send(
                message,
                hostname=self.hostname,
                port=self.port,
                start_tls=True,
                username=self.sender,
                password=self.password,
                timeout=self.timeout,
            )
        except Exception:
            logger.exception("Email %r to %s failed", subject, to_email)
            return False

        logger.info("Email %r sent to %s", subject, to_email)
        return True


def get_notifier(request: Request) -> EmailNotifier:
    return request.app.state.notifier
