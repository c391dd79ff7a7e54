"""Logging setup for the discographer CLI."""

from __future__ import annotations

import logging
from typing import Final

LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Third-party loggers that report every request or migration step at INFO
CHATTY_LOGGERS: Final[tuple[str, ...]] = ("httpx", "hishel", "alembic.runtime.migration")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once; ``force=True`` replaces existing handlers.

    Chatty third-party loggers stay at WARNING unless ``level`` is DEBUG.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    quiet_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)
