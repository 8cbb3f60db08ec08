"""SMTP operator alerts."""

from __future__ import annotations

import asyncio
import logging
import smtplib
from email.message import EmailMessage

from pg_fork_backup.domain.errors import NotificationError
from pg_fork_backup.domain.ports import Notifier

SMTP_HOST = "smtp.sendgrid.net"
SMTP_PORT = 587
FROM_ADDRESS = "pg-fork-backup@noreply.invalid"
SUBJECT = "Database fork backup failed"

logger = logging.getLogger(__name__)


class SmtpNotifier(Notifier):
    """Send alerts over SMTP with STARTTLS."""

    def __init__(
        self,
        recipients: list[str],
        username: str,
        password: str,
        *,
        host: str = SMTP_HOST,
        port: int = SMTP_PORT,
        from_address: str = FROM_ADDRESS,
        subject: str = SUBJECT,
        timeout_seconds: float = 30.0,
    ) -> None:
        if not recipients:
            raise NotificationError("At least one alert recipient is required.")
        self._recipients = list(recipients)
        self._username = username
        self._password = password
        self._host = host
        self._port = port
        self._from_address = from_address
        self._subject = subject
        self._timeout_seconds = timeout_seconds

    async def notify(self, message: str) -> None:
        await asyncio.to_thread(self._send, self.build_message(message))
        logger.info("Sent alert to %s.", ", ".join(self._recipients))

    def build_message(self, body: str) -> EmailMessage:
        email = EmailMessage()
        email["Subject"] = self._subject
        email["From"] = self._from_address
        email["To"] = ", ".join(self._recipients)
        email.set_content(body)
        return email

    def _send(self, email: EmailMessage) -> None:
        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout_seconds) as server:
                server.starttls()
                server.login(self._username, self._password)
                server.send_message(email, to_addrs=self._recipients)
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationError(f"Sending alert via {self._host} failed: {exc}") from exc


__all__ = ["FROM_ADDRESS", "SMTP_HOST", "SMTP_PORT", "SUBJECT", "SmtpNotifier"]
