"""
Logging utilities for hexmaze.

Usage:
    >>> from hexmaze.utils.maze_logging import get_logger, configure_logging
    >>> configure_logging(level="INFO")
    >>> logger = get_logger(__name__)
    >>> logger.info("Carving maze...")
"""

from __future__ import annotations

from .logger import (
    LoggedOperation,
    MazeFormatter,
    MazeLogger,
    configure_logging,
    get_logger,
    log_maze_configuration,
    log_maze_summary,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "log_maze_configuration",
    "log_maze_summary",
    "LoggedOperation",
    "MazeFormatter",
    "MazeLogger",
]
