"""Minimal logging utilities for RDML.

Provides a simple get_logger function that wraps the standard library logging.
The library never installs handlers; applications configure logging.

Example:
    >>> from rdml.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Compiling procedure")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "rdml." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'rdml.mymodule'
    """
    if not (name == "rdml" or name.startswith("rdml.")):
        name = f"rdml.{name}"
    return logging.getLogger(name)
