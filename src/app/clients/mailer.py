"""SMTP email delivery."""

import asyncio
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import structlog

from app.clients.base import ClientError, ClientNotConfiguredError
from app.config import settings


logger = structlog.get_logger()


class MailerError(ClientError):
    """The SMTP server refused or dropped the message."""


def _build_message(to_address: str, subject: str, body: str) -> MIMEMultipart:
    message = MIMEMultipart("alternative")
    message["From"] = settings.smtp_from
    message["To"] = to_address
    message["Subject"] = subject
    message.attach(MIMEText(body, "plain", "utf-8"))
    if "<" in body and ">" in body:
        message.attach(MIMEText(body, "html", "utf-8"))
    return message


def _send_sync(message: MIMEMultipart) -> None:
    with smtplib.SMTP(
        settings.smtp_host or "localhost",
        settings.smtp_port,
        timeout=settings.http_timeout_seconds,
    ) as server:
        if settings.smtp_use_tls:
            server.starttls()
        if settings.smtp_user:
            server.login(settings.smtp_user, settings.smtp_password or "")
        server.send_message(message)


async def send_email(to_address: str, subject: str, body: str) -> None:
    """Send one email. smtplib blocks, so it runs in a worker thread.

    Raises:
        ClientNotConfiguredError: If SMTP_HOST is not set
        MailerError: If sending fails
    """
    if not settings.smtp_enabled:
        raise ClientNotConfiguredError("SMTP")

    message = _build_message(to_address, subject, body)
    try:
        await asyncio.to_thread(_send_sync, message)
    except (smtplib.SMTPException, OSError) as e:
        raise MailerError("SMTP_ERROR", str(e)) from e

    logger.info("email_sent", to=to_address, subject=subject)
