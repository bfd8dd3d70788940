"""Logging setup for the election API process.

Routes and the storage handle log event names with ``extra`` context; this
module installs the single stdout handler they go through.  Called from the
application lifespan so each server start begins from a clean root logger.
"""

import logging
import sys

from election_api.core.config import settings


def setup_logging(level: str | None = None) -> None:
    """Replace the root handlers with one pipe-delimited stdout handler.

    *level* overrides ``settings.LOG_LEVEL``; unknown names fall back to INFO.
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(log_level)

    # One handler, however many times the lifespan runs
    root.handlers.clear()
    root.addHandler(handler)

    # SQL echo and per-request access lines stay off unless asked for
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
