"""Logging setup for the gandisync command line."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# HTTP libraries log every request at INFO or DEBUG
_CHATTY_LOGGERS = ("httpx", "httpcore", "httpx_retries")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger with the CLI format.

    The HTTP stack stays at WARNING unless ``level`` is stricter, so request
    lines never drown out reconciliation messages. Pass ``force=True`` to
    replace handlers installed earlier.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def level_for(*, verbose: bool) -> int:
    return logging.DEBUG if verbose else logging.INFO
