"""Logging configuration for pkgtrend.

Library modules log through ``logging.getLogger("pkgtrend")`` and never
configure handlers themselves; only the CLI calls ``setup_logging``.
"""

import logging
import sys
from typing import TextIO

logger = logging.getLogger("pkgtrend")

# Tables go to stdout; status, warnings and fetch errors go to the handler
DEFAULT_FORMAT = "%(message)s"
VERBOSE_FORMAT = "%(levelname)s: %(name)s: %(message)s"


def setup_logging(
    verbose: bool = False, quiet: bool = False, stream: TextIO | None = None
) -> logging.Handler:
    """Install a single console handler on the pkgtrend logger.

    Args:
        verbose: Show DEBUG messages (pipeline stages) with level prefix.
        quiet: Only show WARNING and above; wins over ``verbose``.
        stream: Where to write; defaults to the current ``sys.stderr``.

    Returns:
        The installed handler.
    """
    logger.handlers.clear()

    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(VERBOSE_FORMAT if verbose else DEFAULT_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
