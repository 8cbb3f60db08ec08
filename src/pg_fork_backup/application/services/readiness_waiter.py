"""Wait for a forked database to finish catching up with its source."""

from __future__ import annotations

import asyncio
import logging

from pg_fork_backup.domain.entities import ConnectionDescriptor
from pg_fork_backup.domain.errors import ProbeConnectionError
from pg_fork_backup.domain.ports import CloudResourceClient, DatabaseProbe, Notifier, Sleep
from pg_fork_backup.domain.probe_errors import TRANSIENT_PROBE_ERROR_KINDS, ProbeErrorKind
from pg_fork_backup.domain.states import (
    AUTHENTICATION_RETRY_LIMIT,
    ReadinessOutcome,
    RetryBudget,
)

POLL_INTERVAL_SECONDS = 10.0

logger = logging.getLogger(__name__)


class ReadinessWaiter:
    """Poll a database until it reports it is no longer in recovery.

    Connection failures are classified by `ProbeErrorKind`:

    * starting up and unresolvable hosts are expected while a fork boots and
      are retried forever;
    * authentication failures are retried against a `RetryBudget`; once it is
      exceeded the operator is alerted and the wait ends as `DEGRADED`;
    * every other connection failure is re-raised.

    Any other error during an attempt alerts the operator and is re-raised.
    """

    def __init__(
        self,
        app_name: str,
        cloud_client: CloudResourceClient,
        probe: DatabaseProbe,
        notifier: Notifier,
        *,
        sleep: Sleep = asyncio.sleep,
        authentication_retry_limit: int = AUTHENTICATION_RETRY_LIMIT,
    ) -> None:
        self._app_name = app_name
        self._cloud_client = cloud_client
        self._probe = probe
        self._notifier = notifier
        self._sleep = sleep
        self._authentication_retry_limit = authentication_retry_limit
        self.last_budget: RetryBudget | None = None

    async def wait_until_ready(self, config_var_key: str) -> ReadinessOutcome:
        """Block until the database behind `config_var_key` is out of recovery."""

        budget = RetryBudget(limit=self._authentication_retry_limit)
        self.last_budget = budget
        while True:
            try:
                if await self._attempt(config_var_key):
                    logger.info("Database behind %s is ready.", config_var_key)
                    return ReadinessOutcome.READY
            except ProbeConnectionError as exc:
                if exc.kind in TRANSIENT_PROBE_ERROR_KINDS:
                    logger.info(
                        "Database behind %s not reachable yet (%s): %s",
                        config_var_key,
                        exc.kind,
                        exc.message,
                    )
                elif exc.kind is ProbeErrorKind.AUTHENTICATION_FAILED:
                    if budget.consume():
                        await self._notifier.notify(
                            f"Bad credentials for {config_var_key} on {self._app_name} "
                            f"after {budget.used} attempts: {exc.message}"
                        )
                        logger.warning(
                            "Giving up on readiness of %s after %s authentication failures.",
                            config_var_key,
                            budget.used,
                        )
                        return ReadinessOutcome.DEGRADED
                    logger.info(
                        "Authentication failed for %s (attempt %s of %s), retrying.",
                        config_var_key,
                        budget.used,
                        budget.limit,
                    )
                else:
                    logger.error("Probe connection to %s failed: %s", config_var_key, exc.message)
                    raise
            except Exception as exc:
                logger.error("Readiness probe for %s failed: %s", config_var_key, exc)
                await self._notifier.notify(
                    f"Readiness probe for {config_var_key} on {self._app_name} failed: "
                    f"{type(exc).__name__}: {exc}"
                )
                raise

            await self._sleep(POLL_INTERVAL_SECONDS)

    async def _attempt(self, config_var_key: str) -> bool:
        config_vars = await self._cloud_client.config_vars(self._app_name)
        url = config_vars.get(config_var_key)
        if not url:
            logger.info("Config var %s is not set on %s yet.", config_var_key, self._app_name)
            return False

        descriptor = ConnectionDescriptor.from_url(url)
        async with self._probe.connect(descriptor) as session:
            in_recovery = await session.is_in_recovery()

        if in_recovery is False:
            return True
        if in_recovery is True:
            logger.info("Database behind %s is still in recovery.", config_var_key)
        else:
            logger.info(
                "Database behind %s returned unexpected recovery flag %r.",
                config_var_key,
                in_recovery,
            )
        return False


__all__ = ["POLL_INTERVAL_SECONDS", "ReadinessWaiter"]
