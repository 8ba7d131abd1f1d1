"""
Centralized logging configuration for the axlocator package.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "axlocator"

NOISY_LIBRARIES = [
    "atomacos",
    "asyncio",
]


class NullHandler(logging.Handler):
    """Handler that discards all log records."""

    def emit(self, record):
        pass


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> logging.Logger:
    """
    Configure the package logger and silence noisy third-party loggers.

    Installs a single RichHandler on the "axlocator" logger. Calling this
    again replaces the handler instead of stacking a second one.

    Args:
        verbose: If True, log search internals at DEBUG. Otherwise WARNING.
        console: Optional rich console to render to (defaults to stderr)

    Returns:
        The configured package logger
    """
    for logger_name in NOISY_LIBRARIES:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.CRITICAL)
        logger.propagate = False
        logger.handlers = [NullHandler()]

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=verbose,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers = [handler]
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False
    return package_logger


def silence_logging() -> None:
    """Drop all axlocator output, e.g. for embedding in a JSON-only CLI."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers = [NullHandler()]
    package_logger.propagate = False
