"""Alert fallback used when no recipients are configured."""

import logging

from pg_fork_backup.domain.ports import Notifier

logger = logging.getLogger(__name__)


class LoggingNotifier(Notifier):
    """Write alerts to the log instead of sending them."""

    async def notify(self, message: str) -> None:
        logger.error("ALERT (no recipients configured): %s", message)


__all__ = ["LoggingNotifier"]
