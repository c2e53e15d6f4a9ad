"""Utility functions for StackForge."""

from stackforge.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
