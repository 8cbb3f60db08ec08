"""Database readiness probes."""

from pg_fork_backup.infrastructure.probes.asyncpg_database_probe import (
    AsyncpgDatabaseProbe,
    classify_connection_error,
)

__all__ = ["AsyncpgDatabaseProbe", "classify_connection_error"]
