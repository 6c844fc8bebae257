"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

import numpy as np

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sweeper import Board, BoardConfig, Cell, GameState, RenderTracker


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random generator for reproducible boards."""
    return np.random.default_rng(1234)


@pytest.fixture
def default_state(rng: np.random.Generator) -> GameState:
    """Create a default 9x9 game with 10 mines."""
    return GameState(BoardConfig(), rng=rng)


@pytest.fixture
def corner_mine_board() -> Board:
    """3x3 board with a single mine in the top-left corner."""
    return Board.from_positions(BoardConfig(3, 3, 1), [(0, 0)])


@pytest.fixture
def corner_mine_state(corner_mine_board: Board) -> GameState:
    return GameState(board=corner_mine_board)


@pytest.fixture
def wall_board() -> Board:
    """
    5x5 board split by a column of mines.

        . . * . .
        . . * . .
        . . * . .
        . . * . .
        . . * . .
    """
    return Board.from_positions(
        BoardConfig(5, 5, 5), [(row, 2) for row in range(5)]
    )


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def opened_cell() -> Cell:
    """Create an opened cell with adjacent mines."""
    cell = Cell()
    cell.open(3)
    return cell


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)


# ============================================================================
# Render Fixtures
# ============================================================================

@pytest.fixture
def tracker() -> RenderTracker:
    """Render tracker for a 9x9 grid."""
    return RenderTracker(9, 9)
