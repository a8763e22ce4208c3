"""
Pytest configuration and shared fixtures for the hexmaze test suite.
"""

import pytest

from hexmaze.config import MazeConfig
from hexmaze.geometry.mazes import HexMazeGenerator
from hexmaze.utils.maze_logging import configure_logging

# =============================================================================
# Test Configuration
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (slower, cross-component)")
    config.addinivalue_line("markers", "slow: Slow tests (may take >10 seconds)")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test paths."""
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)

        if "large" in item.name or "slow" in item.name:
            item.add_marker(pytest.mark.slow)


@pytest.fixture(autouse=True)
def reset_logging():
    """Rebind log handlers after each test so none keeps a stream a test runner has closed."""
    yield
    configure_logging(level="WARNING", use_colors=False)


# =============================================================================
# Maze Fixtures
# =============================================================================


@pytest.fixture
def small_config():
    """A 6x5 grid with a fixed seed."""
    return MazeConfig(columns=6, rows=5, seed=42)


@pytest.fixture
def small_maze(small_config):
    """Maze generated from `small_config`."""
    return HexMazeGenerator(small_config).generate()


@pytest.fixture
def odd_maze():
    """Maze with an odd number of columns, so the last column is raised."""
    return HexMazeGenerator(MazeConfig(columns=7, rows=4, seed=1234)).generate()
