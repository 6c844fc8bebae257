"""
Game state module for Minesweeper game.

Owns the mine layout, the per-cell visible state and the session
counters, and implements the open and mark actions.
"""
import logging
from enum import Enum, auto
from typing import List, Optional, Tuple

import numpy as np

from .board import Board, BoardConfig
from .cell import Cell, CellState
from .flood import flood_fill


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class OpenResult(Enum):
    """Outcome of the latest open action."""

    CONTINUE = auto()
    WIN = auto()
    LOSS = auto()


# ============================================================================
# GameState Class
# ============================================================================

class GameState:
    """
    Minesweeper game session state.

    Manages the grid of visible cells on top of a Board, the opened and
    flagged counters, first-move safety and win/lose conditions.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        board: Optional[Board] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Start a new game.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
                Ignored when board is given.
            board: Pre-built mine layout; generated when omitted.
            rng: Random generator used for mine placement.
        """
        if board is None:
            board = Board.generate(config or BoardConfig(), rng=rng)
        self.board = board
        self.config = board.config
        self._grid: List[List[Cell]] = [
            [Cell() for _ in range(self.config.width)]
            for _ in range(self.config.height)
        ]
        self.opened_count = 0
        self.flagged_count = 0
        self.target_opened = self.config.target_opened
        self.last_revealed: List[Tuple[int, int]] = []
        self.detonated: Optional[Tuple[int, int]] = None
        self._result = OpenResult.CONTINUE
        self._first_move = True

    # ========================================================================
    # Game Actions
    # ========================================================================

    def open(self, row: int, col: int) -> OpenResult:
        """
        Open the cell at the given position.

        The first successful open of a game never hits a mine: a mine
        under it is moved to the first mine-free cell in row-major order.
        An empty cell (0 adjacent mines) opens its surroundings.

        Args:
            row: Row index to open.
            col: Column index to open.

        Returns:
            WIN, LOSS or CONTINUE. Opening a cell that is not hidden, or
            opening after the game ended, changes nothing and returns the
            current result.
        """
        self.last_revealed = []
        cell = self.get_cell(row, col)
        if not self.is_playing or not cell.is_hidden:
            return self._result

        if self._first_move:
            self._first_move = False
            moved_to = self.board.relocate_mine(row, col)
            if moved_to is not None:
                logger.debug(
                    "First move on a mine at (%d, %d), moved it to %s",
                    row, col, moved_to,
                )

        if self.board.is_mine(row, col):
            logger.info("Mine detonated at (%d, %d)", row, col)
            self.detonated = (row, col)
            self._result = OpenResult.LOSS
            return self._result

        count = self.board.count_adjacent_mines(row, col)
        cell.open(count)
        self.last_revealed.append((row, col))
        if count == 0:
            self.last_revealed.extend(flood_fill(self.board, self._grid, row, col))
        self.opened_count += len(self.last_revealed)

        if self.opened_count == self.target_opened:
            logger.info("All %d safe cells opened", self.target_opened)
            self._result = OpenResult.WIN
        return self._result

    def toggle_mark(self, row: int, col: int) -> CellState:
        """
        Cycle the mark on a cell: hidden, flagged, questioned, hidden.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            State of the cell after the call. Opened cells, and any cell
            once the game ended, are left unchanged.
        """
        cell = self.get_cell(row, col)
        if not self.is_playing:
            return cell.state

        was_flagged = cell.is_flagged
        if cell.toggle_mark():
            if cell.is_flagged:
                self.flagged_count += 1
            elif was_flagged:
                self.flagged_count -= 1
        return cell.state

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def result(self) -> OpenResult:
        """Result of the latest open action."""
        return self._result

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._result == OpenResult.CONTINUE

    def is_won(self) -> bool:
        """Check if game was won."""
        return self._result == OpenResult.WIN

    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._result == OpenResult.LOSS

    def get_cell(self, row: int, col: int) -> Cell:
        """Get cell at position; out-of-range positions raise IndexError."""
        if not (0 <= row < self.config.height and 0 <= col < self.config.width):
            raise IndexError(
                f"Position ({row}, {col}) outside "
                f"{self.config.height}x{self.config.width} board"
            )
        return self._grid[row][col]

    def is_mine(self, row: int, col: int) -> bool:
        """Check whether a cell holds a mine."""
        return self.board.is_mine(row, col)

    def get_observation(self) -> np.ndarray:
        """
        Get visible board state as a numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                -3 = questioned
                0-8 = opened with adjacent count
        """
        obs = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for row in range(self.config.height):
            for col in range(self.config.width):
                obs[row, col] = self._grid[row][col].to_observation()
        return obs
