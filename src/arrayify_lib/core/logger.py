# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from .config import CFG


def debug_mode() -> bool:
    """Return True if the debug environment variable is set."""
    return CFG.env_vars.debug_mode in os.environ


def get_logger(name: str, show_time: bool = False) -> logging.Logger:
    """
    Return the logger of an arrayify module.

    Records are rendered by rich on stderr, so that stdout only carries
    the output meant for scripts (e.g. the job ID printed by `sub`).
    In debug mode, debug records are emitted and every record is timestamped.
    """
    debug = debug_mode()

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.propagate = False

    # one handler per logger even if the module is imported repeatedly
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(
            RichHandler(
                console=Console(stderr=True),
                markup=False,
                rich_tracebacks=True,
                show_path=False,
                show_time=show_time or debug,
                omit_repeated_times=False,
                log_time_format=CFG.date_formats.standard,
            )
        )

    return logger
