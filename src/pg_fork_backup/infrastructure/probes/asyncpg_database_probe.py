"""Readiness probe backed by asyncpg."""

from __future__ import annotations

import logging
import socket
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

import asyncpg  # type: ignore[import-untyped]

from pg_fork_backup.domain.entities import ConnectionDescriptor
from pg_fork_backup.domain.errors import ProbeConnectionError
from pg_fork_backup.domain.ports import DatabaseProbe, ProbeSession
from pg_fork_backup.domain.probe_errors import ProbeErrorKind

RECOVERY_QUERY = "SELECT pg_is_in_recovery()"

_STARTING_UP_MARKERS = (
    "the database system is starting up",
    "not yet accepting connections",
    "is the server running",
    "accepting tcp/ip connections",
)
_AUTHENTICATION_MARKERS = ("password authentication failed",)
_HOST_UNRESOLVED_MARKERS = (
    "could not translate host name",
    "name or service not known",
    "nodename nor servname",
    "temporary failure in name resolution",
)

logger = logging.getLogger(__name__)

Connect = Callable[..., Awaitable[Any]]


def classify_connection_error(exc: BaseException) -> ProbeErrorKind:
    """Map a driver connection failure to a `ProbeErrorKind`."""

    if isinstance(exc, (asyncpg.CannotConnectNowError, ConnectionRefusedError, TimeoutError)):
        return ProbeErrorKind.STARTING_UP
    if isinstance(
        exc,
        (asyncpg.InvalidPasswordError, asyncpg.InvalidAuthorizationSpecificationError),
    ):
        return ProbeErrorKind.AUTHENTICATION_FAILED
    if isinstance(exc, socket.gaierror):
        return ProbeErrorKind.HOST_UNRESOLVED

    text = str(exc).lower()
    if any(marker in text for marker in _STARTING_UP_MARKERS):
        return ProbeErrorKind.STARTING_UP
    if any(marker in text for marker in _AUTHENTICATION_MARKERS):
        return ProbeErrorKind.AUTHENTICATION_FAILED
    if any(marker in text for marker in _HOST_UNRESOLVED_MARKERS):
        return ProbeErrorKind.HOST_UNRESOLVED
    return ProbeErrorKind.OTHER


class _AsyncpgProbeSession(ProbeSession):
    def __init__(self, connection: Any) -> None:
        self._connection = connection

    async def is_in_recovery(self) -> object:
        return await self._connection.fetchval(RECOVERY_QUERY)


class AsyncpgDatabaseProbe(DatabaseProbe):
    """Opens one asyncpg connection per probe attempt."""

    def __init__(
        self,
        connect_timeout_seconds: float = 10.0,
        connect: Connect | None = None,
    ) -> None:
        self._connect_timeout_seconds = connect_timeout_seconds
        self._connect = connect or asyncpg.connect

    @asynccontextmanager
    async def connect(self, descriptor: ConnectionDescriptor) -> AsyncIterator[ProbeSession]:
        """Open a connection and close it when the block exits."""

        try:
            connection = await self._connect(
                host=descriptor.host,
                port=descriptor.port,
                database=descriptor.database,
                user=descriptor.user,
                password=descriptor.password,
                timeout=self._connect_timeout_seconds,
            )
        except (OSError, TimeoutError, asyncpg.PostgresError, asyncpg.InterfaceError) as exc:
            raise ProbeConnectionError(classify_connection_error(exc), str(exc)) from exc

        try:
            yield _AsyncpgProbeSession(connection)
        finally:
            try:
                await connection.close()
            except (OSError, asyncpg.InterfaceError) as exc:
                logger.warning("Failed to close probe connection to %s: %s", descriptor.host, exc)


__all__ = ["AsyncpgDatabaseProbe", "RECOVERY_QUERY", "classify_connection_error"]
