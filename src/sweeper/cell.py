"""
Cell module for Minesweeper game.

Represents the visible state of an individual grid cell
(hidden/flagged/questioned/opened) and its revealed mine count.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    FLAGGED = auto()
    QUESTIONED = auto()
    OPENED = auto()


# Marking cycle: hidden -> flagged -> questioned -> hidden
_NEXT_MARK = {
    CellState.HIDDEN: CellState.FLAGGED,
    CellState.FLAGGED: CellState.QUESTIONED,
    CellState.QUESTIONED: CellState.HIDDEN,
}


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Visible state of a single cell in the Minesweeper grid.

    The mine layout itself lives on the Board; a cell only knows what
    the player can see.

    Attributes:
        state: Current visual state.
        adjacent_mines: Count of mines in neighboring cells (0-8),
            meaningful once the cell is opened.
    """

    state: CellState = CellState.HIDDEN
    adjacent_mines: int = 0

    def open(self, adjacent_mines: int) -> bool:
        """
        Open this cell with its adjacent mine count.

        Returns:
            True if the cell was opened, False if it was not hidden.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.OPENED
        self.adjacent_mines = adjacent_mines
        return True

    def toggle_mark(self) -> bool:
        """
        Advance the mark cycle on this cell.

        Returns:
            True if the mark changed, False if cell is opened.
        """
        if self.state == CellState.OPENED:
            return False
        self.state = _NEXT_MARK[self.state]
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_opened(self) -> bool:
        """Check if cell is opened."""
        return self.state == CellState.OPENED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_questioned(self) -> bool:
        """Check if the cell carries a question mark."""
        return self.state == CellState.QUESTIONED

    def to_observation(self) -> int:
        """
        Convert cell to a numeric observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            -3: Questioned cell
            0-8: Opened cell with adjacent mine count
        """
        if self.state == CellState.HIDDEN:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        if self.state == CellState.QUESTIONED:
            return -3
        return self.adjacent_mines
