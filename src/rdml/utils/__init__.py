"""Utility modules for RDML.

Provides:
- logger: get_logger for logging
"""

from rdml.utils.logger import get_logger

__all__ = [
    "get_logger",
]
