"""Utility modules for Daybook"""

from .logger import (
    get_logger,
    preview,
    setup_logging,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "preview",
]
