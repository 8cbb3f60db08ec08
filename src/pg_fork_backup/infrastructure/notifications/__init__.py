"""Operator alert adapters."""

from pg_fork_backup.infrastructure.notifications.logging_notifier import LoggingNotifier
from pg_fork_backup.infrastructure.notifications.smtp_notifier import SmtpNotifier

__all__ = ["LoggingNotifier", "SmtpNotifier"]
