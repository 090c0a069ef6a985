"""Logging setup for the command line entry point."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

QUIET_LOGGERS: tuple[str, ...] = ("httpx", "httpcore")


def configure_logging(
    *,
    level: int = logging.INFO,
    force: bool = False,
    quiet: Iterable[str] = QUIET_LOGGERS,
) -> None:
    """Initialise the root logger with a terse CLI format.

    Loggers named in ``quiet`` never go below WARNING, so ``DEBUG`` output shows the
    decoding steps without transport chatter. Pass ``force=True`` to reconfigure
    during tests.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in quiet:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
