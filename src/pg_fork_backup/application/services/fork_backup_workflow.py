"""Fork-and-backup workflow use case."""

from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass

from pg_fork_backup.application.services.readiness_waiter import ReadinessWaiter
from pg_fork_backup.application.services.transfer_waiter import TransferWaiter
from pg_fork_backup.domain.entities import ManagedDatabase
from pg_fork_backup.domain.errors import ProvisioningError
from pg_fork_backup.domain.ports import CloudResourceClient, Notifier
from pg_fork_backup.domain.states import ReadinessOutcome, WorkflowStage

DATABASE_SERVICE_NAME = "heroku-postgresql"
SOURCE_CONFIG_VAR_KEY = "DATABASE_URL"

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class WorkflowResult:
    """Summary of one workflow run."""

    stage: WorkflowStage
    succeeded: bool
    error: str | None = None
    database_name: str | None = None
    transfer_id: str | None = None
    readiness: ReadinessOutcome | None = None


def format_failure(exc: BaseException) -> str:
    """Render an exception with its class, message and traceback."""

    trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return f"{type(exc).__name__}: {exc}\n\n{trace}"


class ForkBackupWorkflow:
    """Sequences cleanup, fork provisioning, readiness, backup and teardown."""

    def __init__(
        self,
        *,
        source_app: str,
        target_app: str,
        addon_plan: str,
        cloud_client: CloudResourceClient,
        readiness_waiter: ReadinessWaiter,
        transfer_waiter: TransferWaiter,
        notifier: Notifier,
    ) -> None:
        self._source_app = source_app
        self._target_app = target_app
        self._addon_plan = addon_plan
        self._cloud_client = cloud_client
        self._readiness_waiter = readiness_waiter
        self._transfer_waiter = transfer_waiter
        self._notifier = notifier
        self.stage = WorkflowStage.IDLE

    async def run(self) -> WorkflowResult:
        """Run the workflow once.

        Failures between provisioning and backup completion are reported to
        the operator and do not propagate. Cleanup failures do.
        """

        self._enter(WorkflowStage.CLEANUP_BEFORE)
        await self.cleanup()

        result = WorkflowResult(stage=self.stage, succeeded=False)
        try:
            self._enter(WorkflowStage.PROVISIONING)
            database = await self.provision()
            result.database_name = database.name

            self._enter(WorkflowStage.AWAITING_READY)
            result.readiness = await self._readiness_waiter.wait_until_ready(
                database.primary_config_var_key
            )
            if result.readiness is ReadinessOutcome.DEGRADED:
                logger.warning(
                    "Continuing with %s although readiness could not be confirmed.",
                    database.name,
                )

            self._enter(WorkflowStage.BACKING_UP)
            job = await self._transfer_waiter.initiate_transfer(database)
            result.transfer_id = job.transfer_id

            self._enter(WorkflowStage.AWAITING_BACKUP)
            await self._transfer_waiter.await_completion(database, job)
            result.succeeded = True
        except Exception as exc:
            result.stage = self.stage
            result.error = format_failure(exc)
            await self._report_failure(result.error)
        finally:
            self._enter(WorkflowStage.CLEANUP_AFTER)
            await self.cleanup()

        self._enter(WorkflowStage.DONE)
        if result.succeeded:
            result.stage = self.stage
        return result

    async def cleanup(self) -> list[str]:
        """Delete every Postgres add-on on the target app and return their names."""

        addons = await self._cloud_client.list_addons(self._target_app)
        deleted: list[str] = []
        for addon in addons:
            if addon.service_name != DATABASE_SERVICE_NAME:
                continue
            logger.info("Deleting add-on %s from %s.", addon.name, self._target_app)
            await self._cloud_client.delete_addon(self._target_app, addon.name)
            deleted.append(addon.name)
        if not deleted:
            logger.info("No %s add-ons to delete on %s.", DATABASE_SERVICE_NAME, self._target_app)
        return deleted

    async def provision(self) -> ManagedDatabase:
        """Fork the source app's database into the target app."""

        source_config = await self._cloud_client.config_vars(self._source_app)
        source_url = source_config.get(SOURCE_CONFIG_VAR_KEY)
        if not source_url:
            raise ProvisioningError(
                f"{SOURCE_CONFIG_VAR_KEY} is not set on source app '{self._source_app}'."
            )

        logger.info(
            "Forking database of %s into %s with plan %s.",
            self._source_app,
            self._target_app,
            self._addon_plan,
        )
        database = await self._cloud_client.create_database_fork(
            self._target_app,
            plan=self._addon_plan,
            fork_source_url=source_url,
        )
        if not database.config_var_keys:
            raise ProvisioningError(f"Add-on {database.name} was created without config vars.")
        logger.info(
            "Created add-on %s exposing %s.",
            database.name,
            ", ".join(database.config_var_keys),
        )
        return database

    async def _report_failure(self, message: str) -> None:
        logger.error("Fork backup failed during %s:\n%s", self.stage, message)
        try:
            await self._notifier.notify(message)
        except Exception:
            logger.exception("Failed to notify operator about backup failure.")

    def _enter(self, stage: WorkflowStage) -> None:
        self.stage = stage
        logger.info("Workflow stage: %s", stage.value)


__all__ = [
    "DATABASE_SERVICE_NAME",
    "ForkBackupWorkflow",
    "SOURCE_CONFIG_VAR_KEY",
    "WorkflowResult",
    "format_failure",
]
