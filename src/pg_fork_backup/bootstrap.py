"""Application bootstrap/wiring."""

import logging

from pg_fork_backup.application.services import (
    ForkBackupWorkflow,
    ReadinessWaiter,
    TransferWaiter,
)
from pg_fork_backup.config import Settings
from pg_fork_backup.domain.ports import Notifier
from pg_fork_backup.infrastructure.backups import PgBackupsClient
from pg_fork_backup.infrastructure.heroku import HerokuPlatformClient
from pg_fork_backup.infrastructure.notifications import LoggingNotifier, SmtpNotifier
from pg_fork_backup.infrastructure.probes import AsyncpgDatabaseProbe

logger = logging.getLogger(__name__)


def _build_notifier(settings: Settings) -> Notifier:
    username = settings.sendgrid_username
    password = settings.sendgrid_password
    if not settings.recipient_emails or username is None or password is None:
        logger.warning("RECIPIENT_EMAILS is not set. Alerts will only be logged.")
        return LoggingNotifier()
    return SmtpNotifier(
        recipients=settings.recipient_emails,
        username=username,
        password=password,
    )


def build_workflow(settings: Settings) -> ForkBackupWorkflow:
    """Compose service graph."""

    notifier = _build_notifier(settings)
    cloud_client = HerokuPlatformClient(
        api_key=settings.heroku_api_key,
        timeout_seconds=settings.http_timeout_seconds,
    )
    readiness_waiter = ReadinessWaiter(
        app_name=settings.app,
        cloud_client=cloud_client,
        probe=AsyncpgDatabaseProbe(
            connect_timeout_seconds=settings.probe_connect_timeout_seconds,
        ),
        notifier=notifier,
    )
    transfer_waiter = TransferWaiter(
        PgBackupsClient(
            api_key=settings.heroku_api_key,
            timeout_seconds=settings.http_timeout_seconds,
        ),
        stop_on_error=settings.stop_on_transfer_error,
    )
    return ForkBackupWorkflow(
        source_app=settings.fork_from_app,
        target_app=settings.app,
        addon_plan=settings.addon_plan,
        cloud_client=cloud_client,
        readiness_waiter=readiness_waiter,
        transfer_waiter=transfer_waiter,
        notifier=notifier,
    )


__all__ = ["build_workflow"]
