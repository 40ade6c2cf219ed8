"""
cutline.logging - Centralized logging configuration.

Every module logs through the ``cutline`` logger. Embedding applications
usually configure logging themselves; ``configure_logging`` is the quick
setup for scripts and tests.
"""

from __future__ import annotations

import logging

logger = logging.getLogger("cutline")

LOG_FORMAT = "%(levelname)s [%(threadName)s] %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Configure logging for the cutline package.

    Args:
        verbose: If True, enable DEBUG level logging; otherwise WARNING level
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logger.setLevel(level)
