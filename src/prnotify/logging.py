"""Shared logging helpers for prnotify."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once with a terse format.

    Library code only ever logs through module level loggers; this helper is
    for scripts and ad-hoc runs. Pass ``force=True`` to reconfigure.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
