"""Heroku Platform API adapters."""

from pg_fork_backup.infrastructure.heroku.client import HerokuClientError, HerokuPlatformClient

__all__ = ["HerokuClientError", "HerokuPlatformClient"]
