"""Domain public API."""

from pg_fork_backup.domain.entities import (
    DEFAULT_POSTGRES_PORT,
    AddOn,
    ConnectionDescriptor,
    ManagedDatabase,
    TransferJob,
)
from pg_fork_backup.domain.errors import (
    BackupTransferFailedError,
    ForkBackupError,
    NotificationError,
    ProbeConnectionError,
    ProvisioningError,
)
from pg_fork_backup.domain.ports import (
    BackupTransferClient,
    CloudResourceClient,
    DatabaseProbe,
    Notifier,
    ProbeSession,
    Sleep,
)
from pg_fork_backup.domain.probe_errors import TRANSIENT_PROBE_ERROR_KINDS, ProbeErrorKind
from pg_fork_backup.domain.states import (
    AUTHENTICATION_RETRY_LIMIT,
    ReadinessOutcome,
    RetryBudget,
    TransferStatus,
    WorkflowStage,
)

__all__ = [
    "AUTHENTICATION_RETRY_LIMIT",
    "AddOn",
    "BackupTransferClient",
    "BackupTransferFailedError",
    "CloudResourceClient",
    "ConnectionDescriptor",
    "DEFAULT_POSTGRES_PORT",
    "DatabaseProbe",
    "ForkBackupError",
    "ManagedDatabase",
    "NotificationError",
    "Notifier",
    "ProbeConnectionError",
    "ProbeErrorKind",
    "ProbeSession",
    "ProvisioningError",
    "ReadinessOutcome",
    "RetryBudget",
    "Sleep",
    "TRANSIENT_PROBE_ERROR_KINDS",
    "TransferJob",
    "TransferStatus",
    "WorkflowStage",
]
