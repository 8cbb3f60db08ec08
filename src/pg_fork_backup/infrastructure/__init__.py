"""Infrastructure layer public API."""

from pg_fork_backup.infrastructure.backups import PgBackupsClient, PgBackupsClientError
from pg_fork_backup.infrastructure.heroku import HerokuClientError, HerokuPlatformClient
from pg_fork_backup.infrastructure.notifications import LoggingNotifier, SmtpNotifier
from pg_fork_backup.infrastructure.probes import AsyncpgDatabaseProbe

__all__ = [
    "AsyncpgDatabaseProbe",
    "HerokuClientError",
    "HerokuPlatformClient",
    "LoggingNotifier",
    "PgBackupsClient",
    "PgBackupsClientError",
    "SmtpNotifier",
]
