"""Heroku Postgres backups adapters."""

from pg_fork_backup.infrastructure.backups.client import PgBackupsClient, PgBackupsClientError

__all__ = ["PgBackupsClient", "PgBackupsClientError"]
