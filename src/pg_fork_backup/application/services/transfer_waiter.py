"""Start a backup transfer and wait for it to finish."""

from __future__ import annotations

import asyncio
import logging

from pg_fork_backup.domain.entities import ManagedDatabase, TransferJob
from pg_fork_backup.domain.errors import BackupTransferFailedError
from pg_fork_backup.domain.ports import BackupTransferClient, Sleep
from pg_fork_backup.domain.states import TransferStatus

POLL_INTERVAL_SECONDS = 10.0

logger = logging.getLogger(__name__)


class TransferWaiter:
    """Polling loops around the backup transfer API."""

    def __init__(
        self,
        backup_client: BackupTransferClient,
        *,
        sleep: Sleep = asyncio.sleep,
        stop_on_error: bool = False,
    ) -> None:
        self._backup_client = backup_client
        self._sleep = sleep
        self._stop_on_error = stop_on_error

    async def initiate_transfer(self, database: ManagedDatabase) -> TransferJob:
        """Start a backup, retrying until the provider accepts the request."""

        while True:
            transfer_id = await self._backup_client.create_backup(database.name)
            if transfer_id:
                logger.info("Started backup %s of %s.", transfer_id, database.name)
                return TransferJob(transfer_id=transfer_id, database_name=database.name)
            logger.info("Backup of %s was not accepted yet, retrying.", database.name)
            await self._sleep(POLL_INTERVAL_SECONDS)

    async def check_status(self, job: TransferJob) -> TransferStatus:
        """Resolve the current status of a transfer."""

        try:
            detail = await self._backup_client.get_transfer(job.database_name, job.transfer_id)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Could not check backup %s: %s", job.transfer_id, exc)
            return TransferStatus.UNKNOWN

        if detail.get("errors"):
            return TransferStatus.ERROR
        if detail.get("finished_at"):
            return TransferStatus.COMPLETED
        return TransferStatus.PENDING

    async def await_completion(self, database: ManagedDatabase, job: TransferJob) -> None:
        """Poll until the transfer completes.

        An errored transfer keeps being polled unless `stop_on_error` is set.
        """

        while True:
            status = await self.check_status(job)
            if status is TransferStatus.COMPLETED:
                logger.info("Backup %s of %s completed.", job.transfer_id, database.name)
                return
            if status is TransferStatus.ERROR:
                if self._stop_on_error:
                    raise BackupTransferFailedError(
                        f"Backup {job.transfer_id} of {database.name} reported errors."
                    )
                logger.warning("Backup %s of %s reported errors.", job.transfer_id, database.name)
            else:
                logger.info(
                    "Backup %s of %s is %s.",
                    job.transfer_id,
                    database.name,
                    status.value.lower(),
                )
            await self._sleep(POLL_INTERVAL_SECONDS)


__all__ = ["POLL_INTERVAL_SECONDS", "TransferWaiter"]
