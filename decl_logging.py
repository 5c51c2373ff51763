"""
godecls logging

Console-only logging configuration using loguru. Classification results are
printed to stdout; everything logged here goes to stderr.
"""

import sys

from loguru import logger


def setup_console_only(level: str = "WARNING"):
    """
    Setup console-only logging.

    Args:
        level: Log level
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=level,
        format="godecls: <level>{level}</level> <cyan>{module}:{line}</cyan> {message}",
        colorize=True,
    )
