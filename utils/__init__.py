"""Shared utilities for the Greenhouse tooling."""

from utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
