"""
Configuration system for hexmaze.

Examples
--------
>>> from hexmaze.config import MazeConfig
>>> config = MazeConfig(columns=20, rows=30, seed=42)
>>> config.seed
42
"""

from __future__ import annotations

from .core import SEED_MASK, MazeConfig, create_default_config, derive_seed

__all__ = ["SEED_MASK", "MazeConfig", "create_default_config", "derive_seed"]
