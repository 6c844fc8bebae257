"""
Incremental rendering for Minesweeper game.

Turns "cell now shows glyph" and "cursor should end here" events into a
minimal ordered stream of abstract draw commands. A render backend
translates the commands into real terminal output.

Coordinates are in cells: x is the column, y the row. Row `height` is
the status line below the grid.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, List, Optional, Tuple, Union

from .cell import Cell, CellState


# ============================================================================
# Glyphs
# ============================================================================

class Glyph(Enum):
    """Abstract cell appearances understood by render backends."""

    HIDDEN = auto()
    FLAG = auto()
    QUESTION = auto()
    NUMBER_0 = auto()
    NUMBER_1 = auto()
    NUMBER_2 = auto()
    NUMBER_3 = auto()
    NUMBER_4 = auto()
    NUMBER_5 = auto()
    NUMBER_6 = auto()
    NUMBER_7 = auto()
    NUMBER_8 = auto()
    MINE = auto()
    FLAG_CORRECT = auto()
    FLAG_WRONG = auto()
    DETONATED = auto()
    BLANK = auto()


NUMBER_GLYPHS = (
    Glyph.NUMBER_0, Glyph.NUMBER_1, Glyph.NUMBER_2,
    Glyph.NUMBER_3, Glyph.NUMBER_4, Glyph.NUMBER_5,
    Glyph.NUMBER_6, Glyph.NUMBER_7, Glyph.NUMBER_8,
)

_MARK_GLYPHS = {
    CellState.HIDDEN: Glyph.HIDDEN,
    CellState.FLAGGED: Glyph.FLAG,
    CellState.QUESTIONED: Glyph.QUESTION,
}


def glyph_for_state(state: CellState, adjacent_mines: int = 0) -> Glyph:
    """Glyph for a visible cell state during play."""
    if state == CellState.OPENED:
        return NUMBER_GLYPHS[adjacent_mines]
    return _MARK_GLYPHS[state]


def glyph_for_cell(cell: Cell) -> Glyph:
    """Glyph for a cell as the player currently sees it."""
    return glyph_for_state(cell.state, cell.adjacent_mines)


def reveal_glyph(cell: Cell, is_mine: bool) -> Glyph:
    """
    Glyph for a cell in the end-of-game reveal.

    Flags are shown as correct or wrong, unflagged mines are exposed and
    every other cell keeps what is already on screen.
    """
    if cell.is_flagged:
        return Glyph.FLAG_CORRECT if is_mine else Glyph.FLAG_WRONG
    if is_mine:
        return Glyph.MINE
    return Glyph.BLANK


# ============================================================================
# Commands
# ============================================================================

@dataclass(frozen=True)
class MoveCursor:
    """
    Move the terminal cursor to cell (x, y).

    dx and dy are the offsets from the believed position before the
    move, so a backend can prefer short relative moves. dx is None when
    the previous column was unknown.
    """

    x: int
    y: int
    dx: Optional[int]
    dy: int


@dataclass(frozen=True)
class DrawGlyph:
    """Draw a glyph at the cursor; the cursor stays on the cell."""

    glyph: Glyph


@dataclass(frozen=True)
class DrawText:
    """Write free text at the cursor, which advances past it."""

    text: str


Command = Union[MoveCursor, DrawGlyph, DrawText]


# ============================================================================
# Render Tracker
# ============================================================================

class RenderTracker:
    """
    Tracks the believed terminal cursor and emits draw commands.

    The tracker never asks the backend where the cursor is, so it must
    be the only thing moving it.
    """

    def __init__(self, width: int, height: int) -> None:
        """
        Args:
            width: Grid columns.
            height: Grid rows; the status line sits at row `height`.
        """
        self.width = width
        self.height = height
        self.cursor_x: Optional[int] = 0
        self.cursor_y = 0
        self._pending: List[Command] = []

    @property
    def cursor(self) -> Tuple[Optional[int], int]:
        """Believed (x, y) of the terminal cursor."""
        return self.cursor_x, self.cursor_y

    @property
    def status_row(self) -> int:
        """Screen row of the status bar, just below the grid."""
        return self.height

    # ========================================================================
    # Primitive Commands
    # ========================================================================

    def move_to(self, x: int, y: int) -> None:
        """Move the cursor to (x, y) unless it is already there."""
        if x == self.cursor_x and y == self.cursor_y:
            return
        dx = None if self.cursor_x is None else x - self.cursor_x
        self._pending.append(MoveCursor(x, y, dx, y - self.cursor_y))
        self.cursor_x = x
        self.cursor_y = y

    def draw(self, x: int, y: int, glyph: Glyph) -> None:
        """Draw a glyph on the cell at (x, y)."""
        self.move_to(x, y)
        self._pending.append(DrawGlyph(glyph))

    def write(self, text: str) -> None:
        """Write text at the cursor and update the believed position."""
        self._pending.append(DrawText(text))
        newlines = text.count("\n")
        self.cursor_y += newlines
        if text.endswith("\n"):
            self.cursor_x = 0
        else:
            self.cursor_x = None

    def flush(self) -> List[Command]:
        """Hand out the pending commands and start a fresh batch."""
        commands, self._pending = self._pending, []
        return commands

    # ========================================================================
    # Composite Updates
    # ========================================================================

    def draw_cells(
        self,
        cells: Iterable[Tuple[int, int, Glyph]],
        return_to: Optional[Tuple[int, int]] = None,
    ) -> None:
        """
        Draw a batch of (x, y, glyph) cells in order.

        Args:
            cells: Cells to draw.
            return_to: Optional (x, y) to leave the cursor on afterwards.
        """
        for x, y, glyph in cells:
            self.draw(x, y, glyph)
        if return_to is not None:
            self.move_to(*return_to)

    def draw_initial_frame(self) -> None:
        """Draw the fully hidden grid and park the cursor on (0, 0)."""
        self.draw_cells(
            (
                (x, y, Glyph.HIDDEN)
                for y in range(self.height)
                for x in range(self.width)
            ),
            return_to=(0, 0),
        )

    def draw_status(
        self, opened: int, target: int, flagged: int, mines: int
    ) -> None:
        """
        Refresh the status line and restore the cursor.

        Shows opened/target safe cells and flagged/total mines.
        """
        restore_x, restore_y = self.cursor_x, self.cursor_y
        self.move_to(0, self.status_row)
        self.write(f"{opened} / {target}    {flagged} / {mines}")
        if restore_x is None:
            restore_x = 0
        self.move_to(restore_x, restore_y)

    def write_message(self, text: str) -> None:
        """Replace the status line with a final message and end the line."""
        self.move_to(0, self.status_row)
        self.write(f"{text}\n")
