"""
Game session loop for Minesweeper game.

Reads one key token at a time, applies it to the game state and sends
the resulting draw commands to a render backend.
"""
import logging
from enum import Enum, auto
from typing import Iterable, List, Optional, Protocol

import numpy as np

from .board import BoardConfig
from .controls import Action, InputController, Key, PlayerCommand
from .render import Command, Glyph, RenderTracker, glyph_for_cell, reveal_glyph
from .state import GameState, OpenResult


logger = logging.getLogger(__name__)

LOSS_MESSAGE = "You detonated a bomb. Better luck next time."
WIN_MESSAGE = "You win. All the safe cells have been opened."


class SessionOutcome(Enum):
    """How a session ended."""

    WON = auto()
    LOST = auto()
    QUIT = auto()


class RenderBackend(Protocol):
    """Anything that can consume a batch of draw commands."""

    def execute(self, commands: List[Command]) -> None:
        ...


# ============================================================================
# Session
# ============================================================================

class Session:
    """
    One game from the first frame to win, loss or quit.

    Attributes:
        state: Game state being played.
        controller: Key decoder holding the grid cursor.
        tracker: Render tracker holding the believed terminal cursor.
    """

    def __init__(
        self,
        state: GameState,
        backend: RenderBackend,
    ) -> None:
        self.state = state
        self.backend = backend
        config = state.config
        self.controller = InputController(config.width, config.height)
        self.tracker = RenderTracker(config.width, config.height)
        self.outcome: Optional[SessionOutcome] = None

    def start(self) -> None:
        """Draw the hidden grid and status line."""
        self.tracker.draw_initial_frame()
        self._refresh_status()
        self._flush()

    def play(self, keys: Iterable[Key]) -> SessionOutcome:
        """
        Run the session until it ends.

        An exhausted key stream is treated like a quit.

        Returns:
            The session outcome.
        """
        self.start()
        for key in keys:
            command = self.controller.feed(key)
            if command is not None:
                self.handle(command)
            self._flush()
            if self.outcome is not None:
                return self.outcome
        self._quit()
        self._flush()
        return self.outcome

    # ========================================================================
    # Command Handling
    # ========================================================================

    def handle(self, command: PlayerCommand) -> None:
        """Apply one decoded command and queue its render updates."""
        if command.action == Action.MOVE:
            self.tracker.move_to(command.col, command.row)
        elif command.action == Action.TOGGLE_MARK:
            self._toggle_mark(command.col, command.row)
        elif command.action == Action.OPEN:
            self._open(command.col, command.row)
        elif command.action == Action.QUIT:
            self._quit()

    def _toggle_mark(self, col: int, row: int) -> None:
        before = self.state.get_cell(row, col).state
        after = self.state.toggle_mark(row, col)
        if after == before:
            return
        self.tracker.draw(col, row, glyph_for_cell(self.state.get_cell(row, col)))
        self._refresh_status()

    def _open(self, col: int, row: int) -> None:
        result = self.state.open(row, col)
        if result == OpenResult.LOSS:
            self._reveal_board()
            self.tracker.write_message(LOSS_MESSAGE)
            self.outcome = SessionOutcome.LOST
            logger.info("Session lost after %d opened cells", self.state.opened_count)
            return

        self.tracker.draw_cells(
            (
                (c, r, glyph_for_cell(self.state.get_cell(r, c)))
                for r, c in self.state.last_revealed
            ),
            return_to=(col, row),
        )
        if result == OpenResult.WIN:
            self.tracker.write_message(WIN_MESSAGE)
            self.outcome = SessionOutcome.WON
            logger.info("Session won")
        elif self.state.last_revealed:
            self._refresh_status()

    def _quit(self) -> None:
        self.tracker.write_message("")
        self.outcome = SessionOutcome.QUIT
        logger.info("Session quit")

    # ========================================================================
    # Rendering Helpers
    # ========================================================================

    def _reveal_board(self) -> None:
        """Show every mine and judge every flag, marking the detonation."""
        config = self.state.config
        cells = []
        for row in range(config.height):
            for col in range(config.width):
                glyph = reveal_glyph(
                    self.state.get_cell(row, col), self.state.is_mine(row, col)
                )
                if (row, col) == self.state.detonated:
                    glyph = Glyph.DETONATED
                if glyph != Glyph.BLANK:
                    cells.append((col, row, glyph))
        self.tracker.draw_cells(cells)

    def _refresh_status(self) -> None:
        self.tracker.draw_status(
            self.state.opened_count,
            self.state.target_opened,
            self.state.flagged_count,
            self.state.config.num_mines,
        )

    def _flush(self) -> None:
        commands = self.tracker.flush()
        if commands:
            self.backend.execute(commands)


def run_session(
    config: BoardConfig,
    keys: Iterable[Key],
    backend: RenderBackend,
    rng: Optional[np.random.Generator] = None,
) -> SessionOutcome:
    """
    Play one game on a freshly generated board.

    Args:
        config: Validated board configuration.
        keys: Blocking iterable of key tokens.
        backend: Consumer of draw commands.
        rng: Random generator for mine placement.

    Returns:
        How the session ended.
    """
    state = GameState(config, rng=rng)
    logger.debug(
        "Starting %dx%d session with %d mines",
        config.width, config.height, config.num_mines,
    )
    return Session(state, backend).play(keys)
