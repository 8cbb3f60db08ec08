"""Workflow, readiness and transfer state helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

AUTHENTICATION_RETRY_LIMIT = 25


class TransferStatus(StrEnum):
    """Resolved status of a backup transfer."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    ERROR = "ERROR"
    UNKNOWN = "UNKNOWN"


class ReadinessOutcome(StrEnum):
    """How a readiness wait ended."""

    READY = "READY"
    DEGRADED = "DEGRADED"


class WorkflowStage(StrEnum):
    """Linear stages of one fork-and-backup run."""

    IDLE = "IDLE"
    CLEANUP_BEFORE = "CLEANUP_BEFORE"
    PROVISIONING = "PROVISIONING"
    AWAITING_READY = "AWAITING_READY"
    BACKING_UP = "BACKING_UP"
    AWAITING_BACKUP = "AWAITING_BACKUP"
    CLEANUP_AFTER = "CLEANUP_AFTER"
    DONE = "DONE"


@dataclass(slots=True)
class RetryBudget:
    """Counter bounding how often a suspicious transient error may repeat."""

    limit: int = AUTHENTICATION_RETRY_LIMIT
    used: int = 0

    def consume(self) -> bool:
        """Record one occurrence; return True once the limit is exceeded."""

        self.used += 1
        return self.used > self.limit


__all__ = [
    "AUTHENTICATION_RETRY_LIMIT",
    "ReadinessOutcome",
    "RetryBudget",
    "TransferStatus",
    "WorkflowStage",
]
