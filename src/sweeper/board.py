"""
Board module for Minesweeper game.

Implements board configuration, uniform mine placement and
adjacency-based mine counting over a rectangular grid.
"""
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 9
    height: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 2 or self.height < 2:
            raise ValueError("Board dimensions must be at least 2")
        if self.num_mines < 1:
            raise ValueError("Board needs at least one mine")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self.width * self.height

    @property
    def target_opened(self) -> int:
        """Number of safe cells that must be opened to win."""
        return self.size - self.num_mines


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)

PRESETS = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Mine layout of a Minesweeper game.

    Holds a (height, width) boolean grid. The layout never changes after
    generation except through relocate_mine, which the game uses once to
    make the first move safe.
    """

    def __init__(self, config: BoardConfig, mines: np.ndarray) -> None:
        """
        Wrap an existing mine grid.

        Args:
            config: Board configuration the grid was built for.
            mines: Boolean array of shape (height, width).
        """
        if mines.shape != (config.height, config.width):
            raise ValueError(
                f"Mine grid shape {mines.shape} does not match "
                f"{config.height}x{config.width} board"
            )
        mine_total = int(np.count_nonzero(mines))
        if mine_total != config.num_mines:
            raise ValueError(
                f"Mine grid holds {mine_total} mines, expected {config.num_mines}"
            )
        self.config = config
        self._mines = np.array(mines, dtype=bool, order="C")

    # ========================================================================
    # Generation (Low-level)
    # ========================================================================

    @classmethod
    def generate(
        cls,
        config: BoardConfig,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ) -> "Board":
        """
        Place mines uniformly at random.

        Runs a partial Fisher-Yates shuffle over the cell indices: each
        draw picks one of the cells not yet chosen, then swaps the last
        unconsumed index into its slot. Every set of num_mines cells is
        equally likely and only num_mines random draws are made.

        Args:
            config: Validated board configuration.
            rng: Random generator to draw from.
            seed: Seed for a fresh generator when rng is not given.

        Returns:
            Newly generated board.
        """
        rng = rng if rng is not None else np.random.default_rng(seed)
        size = config.size
        flat = np.zeros(size, dtype=bool)
        shuffler = np.arange(size)

        for last in range(size - 1, size - config.num_mines - 1, -1):
            index = int(rng.integers(0, last + 1))
            flat[shuffler[index]] = True
            shuffler[index] = shuffler[last]

        return cls(config, flat.reshape(config.height, config.width))

    @classmethod
    def from_positions(
        cls, config: BoardConfig, positions: List[Tuple[int, int]]
    ) -> "Board":
        """Build a board with mines at the given (row, col) positions."""
        if len(set(positions)) != config.num_mines:
            raise ValueError(
                f"Expected {config.num_mines} distinct mine positions, "
                f"got {len(set(positions))}"
            )
        mines = np.zeros((config.height, config.width), dtype=bool)
        for row, col in positions:
            if not (0 <= row < config.height and 0 <= col < config.width):
                raise IndexError(
                    f"Position ({row}, {col}) outside "
                    f"{config.height}x{config.width} board"
                )
            mines[row, col] = True
        return cls(config, mines)

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _check_position(self, row: int, col: int) -> None:
        """Reject coordinates outside the grid."""
        if not (0 <= row < self.config.height and 0 <= col < self.config.width):
            raise IndexError(
                f"Position ({row}, {col}) outside "
                f"{self.config.height}x{self.config.width} board"
            )

    def neighbors(self, row: int, col: int) -> Iterator[Tuple[int, int]]:
        """
        Yield valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Yields:
            (row, col) tuples for up to 8 neighbors, clipped at the edges.
        """
        self._check_position(row, col)
        for neighbor_row in range(max(row - 1, 0), min(row + 2, self.config.height)):
            for neighbor_col in range(max(col - 1, 0), min(col + 2, self.config.width)):
                if neighbor_row != row or neighbor_col != col:
                    yield neighbor_row, neighbor_col

    def count_adjacent_mines(self, row: int, col: int) -> int:
        """
        Count mines adjacent to a specific cell.

        Returns:
            Number of mines among the clipped Moore neighborhood (0-8).
        """
        self._check_position(row, col)
        window = self._mines[max(row - 1, 0):row + 2, max(col - 1, 0):col + 2]
        return int(window.sum()) - int(self._mines[row, col])

    # ========================================================================
    # Accessors
    # ========================================================================

    def is_mine(self, row: int, col: int) -> bool:
        """Check whether a cell holds a mine."""
        self._check_position(row, col)
        return bool(self._mines[row, col])

    def index(self, row: int, col: int) -> int:
        """Flat row-major index of a cell."""
        return row * self.config.width + col

    def position(self, index: int) -> Tuple[int, int]:
        """(row, col) of a flat row-major index."""
        return divmod(index, self.config.width)

    @property
    def mine_count(self) -> int:
        """Number of mines currently on the board."""
        return int(self._mines.sum())

    @property
    def mines(self) -> np.ndarray:
        """Read-only view of the mine grid."""
        view = self._mines.view()
        view.flags.writeable = False
        return view

    def relocate_mine(self, row: int, col: int) -> Optional[Tuple[int, int]]:
        """
        Move the mine at (row, col) to the first mine-free cell.

        Cells are scanned in row-major order from index 0.

        Returns:
            New (row, col) of the mine, or None if the cell held no mine.
        """
        if not self.is_mine(row, col):
            return None
        target_row, target_col = self.position(int(np.argmin(self._mines, axis=None)))
        self._mines[target_row, target_col] = True
        self._mines[row, col] = False
        return target_row, target_col
