"""Process-wide logging setup rendered through Rich."""

import logging
import os

from rich.console import Console as RichConsole
from rich.logging import RichHandler

LOG_LEVEL_ENV = "DOOT_LOG"
DEFAULT_LEVEL = "WARNING"


def setup_logging(verbose: bool = False) -> None:
    """
    Configure the root logger.

    Records go to stderr so they never mix with plan and diff output.

    Args:
        verbose: Force DEBUG level, overriding DOOT_LOG.

    Environment variables:
        DOOT_LOG: Logging level (DEBUG, INFO, WARNING, ERROR). Default: WARNING.
    """
    if verbose:
        level = logging.DEBUG
    else:
        env_level = os.getenv(LOG_LEVEL_ENV, DEFAULT_LEVEL).upper()
        level = getattr(logging, env_level, logging.WARNING)

    handler = RichHandler(
        console=RichConsole(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )

    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
