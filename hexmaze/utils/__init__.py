"""Shared utilities: exceptions and logging."""

from __future__ import annotations

from .exceptions import (
    ConfigurationError,
    MazeError,
    MazeStructureError,
    ResourceExhaustedError,
    validate_dimensions,
    validate_parameter_value,
)
from .maze_logging import LoggedOperation, configure_logging, get_logger

__all__ = [
    "ConfigurationError",
    "LoggedOperation",
    "MazeError",
    "MazeStructureError",
    "ResourceExhaustedError",
    "configure_logging",
    "get_logger",
    "validate_dimensions",
    "validate_parameter_value",
]
