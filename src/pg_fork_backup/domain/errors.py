"""Domain exceptions for the fork-and-backup workflow."""

from __future__ import annotations

from pg_fork_backup.domain.probe_errors import ProbeErrorKind


class ForkBackupError(Exception):
    """Base class for workflow errors."""


class ProvisioningError(ForkBackupError):
    """Raised when the fork add-on cannot be created."""


class ProbeConnectionError(ForkBackupError):
    """Raised by a database probe when a connection cannot be opened."""

    def __init__(self, kind: ProbeErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class BackupTransferFailedError(ForkBackupError):
    """Raised when a backup transfer reports errors and the caller opted to stop."""


class NotificationError(ForkBackupError):
    """Raised when an operator alert cannot be delivered."""


__all__ = [
    "BackupTransferFailedError",
    "ForkBackupError",
    "NotificationError",
    "ProbeConnectionError",
    "ProvisioningError",
]
