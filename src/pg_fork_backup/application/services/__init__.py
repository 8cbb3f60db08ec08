"""Application services public API."""

from pg_fork_backup.application.services.fork_backup_workflow import (
    ForkBackupWorkflow,
    WorkflowResult,
)
from pg_fork_backup.application.services.readiness_waiter import ReadinessWaiter
from pg_fork_backup.application.services.transfer_waiter import TransferWaiter

__all__ = ["ForkBackupWorkflow", "ReadinessWaiter", "TransferWaiter", "WorkflowResult"]
