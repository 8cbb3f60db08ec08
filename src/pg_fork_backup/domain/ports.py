"""Ports for the cloud provider, database probe, backups and alerts."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol

from pg_fork_backup.domain.entities import AddOn, ConnectionDescriptor, ManagedDatabase

Sleep = Callable[[float], Awaitable[None]]


class CloudResourceClient(Protocol):
    """Add-on and config var management for applications."""

    async def config_vars(self, app_name: str) -> dict[str, str]:
        """Return the current config vars of an application."""

    async def create_database_fork(
        self,
        app_name: str,
        *,
        plan: str,
        fork_source_url: str,
    ) -> ManagedDatabase:
        """Create a database add-on forked from `fork_source_url`."""

    async def list_addons(self, app_name: str) -> list[AddOn]:
        """Return all add-ons attached to an application."""

    async def delete_addon(self, app_name: str, addon_name: str) -> None:
        """Destroy one add-on."""


class ProbeSession(Protocol):
    """An open probe connection."""

    async def is_in_recovery(self) -> object:
        """Return the server's recovery flag as reported by the driver."""


class DatabaseProbe(Protocol):
    """Opens short-lived connections used to check replica readiness."""

    def connect(
        self, descriptor: ConnectionDescriptor
    ) -> AbstractAsyncContextManager[ProbeSession]:
        """Open a session; raise `ProbeConnectionError` when the connection fails."""


class BackupTransferClient(Protocol):
    """Backup transfer API for managed databases."""

    async def create_backup(self, database_name: str) -> str | None:
        """Start a backup and return its transfer id, or None when rejected."""

    async def get_transfer(self, database_name: str, transfer_id: str) -> dict[str, Any]:
        """Return the raw transfer detail record."""


class Notifier(Protocol):
    """Operator alert channel."""

    async def notify(self, message: str) -> None:
        """Send one alert."""


__all__ = [
    "BackupTransferClient",
    "CloudResourceClient",
    "DatabaseProbe",
    "Notifier",
    "ProbeSession",
    "Sleep",
]
