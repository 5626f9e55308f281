"""Centralized logging configuration."""

import logging

from config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s  %(message)s"

# SQL echo, pool checkouts, migration chatter and test-client requests
QUIET_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "alembic.runtime.migration",
    "httpx",
    "httpcore",
)


def setup_logging() -> None:
    """Configure the root logger from settings.LOG_LEVEL.

    Preference record writes log at INFO under ``preferences.*``; lookups and
    bulk loads log at DEBUG. Libraries in QUIET_LOGGERS stay at WARNING.
    """
    logging.basicConfig(
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        level=getattr(logging, settings.LOG_LEVEL),
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
