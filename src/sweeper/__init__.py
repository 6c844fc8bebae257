"""
Terminal Minesweeper package.

Provides the game engine (board, cells, flood fill, game state), the
incremental render tracker, keyboard controls and the session loop.
"""
from .cell import Cell, CellState
from .board import Board, BoardConfig, BEGINNER, INTERMEDIATE, EXPERT, PRESETS
from .flood import flood_fill
from .state import GameState, OpenResult
from .render import (
    Glyph,
    MoveCursor,
    DrawGlyph,
    DrawText,
    RenderTracker,
    glyph_for_cell,
    glyph_for_state,
    reveal_glyph,
)
from .controls import Action, InputController, InputMode, Key, PlayerCommand
from .session import Session, SessionOutcome, run_session

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "PRESETS",
    "flood_fill",
    "GameState",
    "OpenResult",
    "Glyph",
    "MoveCursor",
    "DrawGlyph",
    "DrawText",
    "RenderTracker",
    "glyph_for_cell",
    "glyph_for_state",
    "reveal_glyph",
    "Action",
    "InputController",
    "InputMode",
    "Key",
    "PlayerCommand",
    "Session",
    "SessionOutcome",
    "run_session",
]
