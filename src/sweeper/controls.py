"""
Keyboard controls for Minesweeper game.

Decodes a stream of abstract key tokens into player commands and keeps
the grid cursor, wrapping at the edges.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple


# ============================================================================
# Constants
# ============================================================================

class Key(Enum):
    """Key tokens produced by an input backend."""

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    CONFIRM = auto()
    MARK = auto()
    QUIT = auto()
    ARROW_PREFIX = auto()


class Action(Enum):
    """Engine-level actions."""

    MOVE = auto()
    OPEN = auto()
    TOGGLE_MARK = auto()
    QUIT = auto()


class InputMode(Enum):
    NORMAL = auto()
    AWAITING_ARROW_CODE = auto()


# (delta_col, delta_row) per direction
_DIRECTIONS = {
    Key.UP: (0, -1),
    Key.DOWN: (0, 1),
    Key.LEFT: (-1, 0),
    Key.RIGHT: (1, 0),
}

_NORMAL_ACTIONS = {
    Key.CONFIRM: Action.OPEN,
    Key.MARK: Action.TOGGLE_MARK,
    Key.QUIT: Action.QUIT,
}


@dataclass(frozen=True)
class PlayerCommand:
    """
    A decoded player action.

    Attributes:
        action: What to do.
        col: Cursor column the action applies to.
        row: Cursor row the action applies to.
    """

    action: Action
    col: int
    row: int


# ============================================================================
# Input Controller
# ============================================================================

class InputController:
    """
    Two-state key decoder.

    In NORMAL mode confirm, mark and quit map straight to commands and an
    arrow prefix switches to AWAITING_ARROW_CODE. The next token then
    picks a direction; anything else is dropped. Either way the
    controller returns to NORMAL.
    """

    def __init__(self, width: int, height: int, col: int = 0, row: int = 0) -> None:
        self.width = width
        self.height = height
        self.col = col % width
        self.row = row % height
        self.mode = InputMode.NORMAL

    @property
    def cursor(self) -> Tuple[int, int]:
        """Current (col, row) of the grid cursor."""
        return self.col, self.row

    def feed(self, key: Key) -> Optional[PlayerCommand]:
        """
        Consume one key token.

        Args:
            key: Token from the input backend.

        Returns:
            The decoded command, or None if the token only changed the
            decoder state or was ignored.
        """
        if self.mode == InputMode.AWAITING_ARROW_CODE:
            self.mode = InputMode.NORMAL
            if key not in _DIRECTIONS:
                return None
            self._move(*_DIRECTIONS[key])
            return PlayerCommand(Action.MOVE, self.col, self.row)

        if key == Key.ARROW_PREFIX:
            self.mode = InputMode.AWAITING_ARROW_CODE
            return None
        action = _NORMAL_ACTIONS.get(key)
        if action is None:
            return None
        return PlayerCommand(action, self.col, self.row)

    def _move(self, delta_col: int, delta_row: int) -> None:
        """Step the cursor, wrapping around both axes."""
        self.col = (self.col + delta_col) % self.width
        self.row = (self.row + delta_row) % self.height
