"""Command-line entrypoint."""

import asyncio
import logging
import sys

from pg_fork_backup import __version__
from pg_fork_backup.bootstrap import build_workflow
from pg_fork_backup.config import Settings

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Write line-oriented progress to stdout."""

    logging.basicConfig(
        level=level,
        stream=sys.stdout,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run() -> None:
    """Run one fork-and-backup cycle."""

    settings = Settings()
    configure_logging(settings.log_level)
    logger.info(
        "pg-fork-backup %s: forking %s into %s.",
        __version__,
        settings.fork_from_app,
        settings.app,
    )

    workflow = build_workflow(settings)
    result = asyncio.run(workflow.run())
    if result.succeeded:
        logger.info("Backup %s of %s completed.", result.transfer_id, result.database_name)
    else:
        logger.info("Workflow stopped during %s; operator was notified.", result.stage)


__all__ = ["configure_logging", "run"]


if __name__ == "__main__":
    run()
