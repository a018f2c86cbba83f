"""
Email Notifiers.

SMTP delivery for production and a log-only notifier for development.
"""

import asyncio
import smtplib
from email.message import EmailMessage
from typing import Optional

from loguru import logger

from config.settings import NotifierSettings, get_settings
from rental_api.notifications.base import BaseNotifier

notify_log = logger.bind(module="Notify")

SUBJECT = "New flats available"


class SmtpNotifier(BaseNotifier):
    """Send notifications through an SMTP server."""

    service_name = "smtp"

    def __init__(self, settings: NotifierSettings):
        """
        Initialize SMTP notifier.

        Args:
            settings: SMTP settings
        """
        self.settings = settings

    def _build_message(self, email: str, message: str) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.settings.sender
        msg["To"] = email
        msg["Subject"] = SUBJECT
        msg.set_content(message)
        return msg

    def _deliver(self, msg: EmailMessage) -> None:
        with smtplib.SMTP(
            self.settings.host, self.settings.port, timeout=self.settings.timeout
        ) as smtp:
            if self.settings.use_tls:
                smtp.starttls()
            if self.settings.user:
                smtp.login(self.settings.user, self.settings.password)
            smtp.send_message(msg)

    async def send(self, email: str, message: str) -> None:
        """Send one email; smtplib is blocking, so it runs in a worker thread."""
        await asyncio.to_thread(self._deliver, self._build_message(email, message))
        notify_log.info(f"Email sent to {email}")


class LogNotifier(BaseNotifier):
    """Write notifications to the log instead of sending them."""

    service_name = "log"

    async def send(self, email: str, message: str) -> None:
        """Log the message."""
        notify_log.info(f"[to {email}] {message}")


_notifier: Optional[BaseNotifier] = None


def get_notifier() -> BaseNotifier:
    """Get notifier singleton, SMTP if configured, log-only otherwise."""
    global _notifier
    if _notifier is None:
        settings = get_settings().notifier
        if settings.host:
            _notifier = SmtpNotifier(settings)
        else:
            notify_log.warning("SMTP_HOST not configured, notifications go to the log")
            _notifier = LogNotifier()
    return _notifier
