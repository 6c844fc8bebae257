"""
Unit tests for the session loop, driven by scripted key tokens.
"""
from typing import List

import pytest
import numpy as np
from sweeper import (
    Board,
    BoardConfig,
    DrawGlyph,
    DrawText,
    GameState,
    Glyph,
    Key,
    MoveCursor,
    Session,
    SessionOutcome,
    run_session,
)
from sweeper.session import LOSS_MESSAGE, WIN_MESSAGE


class RecordingBackend:
    """Backend that keeps every batch it receives."""

    def __init__(self) -> None:
        self.batches: List[list] = []

    def execute(self, commands) -> None:
        self.batches.append(list(commands))

    @property
    def commands(self) -> list:
        return [command for batch in self.batches for command in batch]

    def texts(self) -> List[str]:
        return [c.text for c in self.commands if isinstance(c, DrawText)]

    def glyphs(self) -> List[Glyph]:
        return [c.glyph for c in self.commands if isinstance(c, DrawGlyph)]


RIGHT = [Key.ARROW_PREFIX, Key.RIGHT]
DOWN = [Key.ARROW_PREFIX, Key.DOWN]


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


def corner_session(backend: RecordingBackend) -> Session:
    board = Board.from_positions(BoardConfig(3, 3, 1), [(0, 0)])
    return Session(GameState(board=board), backend)


# ============================================================================
# Session Flow Tests
# ============================================================================

class TestSessionFlow:
    """Test start-up, quitting and plain moves."""

    def test_start_draws_frame_and_status(self, backend: RecordingBackend) -> None:
        session = corner_session(backend)
        session.start()
        assert backend.glyphs() == [Glyph.HIDDEN] * 9
        assert backend.texts() == ["0 / 8    0 / 1"]
        assert session.tracker.cursor == (0, 0)

    def test_quit_key(self, backend: RecordingBackend) -> None:
        outcome = corner_session(backend).play([Key.QUIT, Key.CONFIRM])
        assert outcome == SessionOutcome.QUIT
        assert backend.texts()[-1] == "\n"

    def test_exhausted_keys_quit(self, backend: RecordingBackend) -> None:
        assert corner_session(backend).play([]) == SessionOutcome.QUIT

    def test_move_only_moves_cursor(self, backend: RecordingBackend) -> None:
        session = corner_session(backend)
        session.start()
        backend.batches.clear()
        for key in RIGHT:
            command = session.controller.feed(key)
            if command is not None:
                session.handle(command)
        assert session.tracker.flush() == [MoveCursor(1, 0, 1, 0)]


# ============================================================================
# Marking Tests
# ============================================================================

class TestMarking:
    """Test marking redraws the cell and the status bar."""

    def test_flag_updates_cell_and_status(self, backend: RecordingBackend) -> None:
        session = corner_session(backend)
        session.play([Key.MARK, Key.QUIT])
        assert Glyph.FLAG in backend.glyphs()
        assert "0 / 8    1 / 1" in backend.texts()
        assert session.state.flagged_count == 1

    def test_marking_opened_cell_draws_nothing(self, backend: RecordingBackend) -> None:
        session = corner_session(backend)
        keys = DOWN + [Key.CONFIRM, Key.MARK]
        for key in keys:
            command = session.controller.feed(key)
            if command is not None:
                session.handle(command)
        session.tracker.flush()
        command = session.controller.feed(Key.MARK)
        session.handle(command)
        assert session.tracker.flush() == []


# ============================================================================
# Outcome Tests
# ============================================================================

class TestOutcomes:
    """Test win and loss rendering."""

    def test_win_message(self, backend: RecordingBackend) -> None:
        keys = DOWN + DOWN + RIGHT + RIGHT + [Key.CONFIRM]
        outcome = corner_session(backend).play(keys)
        assert outcome == SessionOutcome.WON
        assert backend.texts()[-1] == WIN_MESSAGE + "\n"
        assert backend.glyphs().count(Glyph.NUMBER_0) == 5
        assert backend.glyphs().count(Glyph.NUMBER_1) == 3

    def test_open_refreshes_status(self, backend: RecordingBackend) -> None:
        keys = DOWN + [Key.CONFIRM, Key.QUIT]
        corner_session(backend).play(keys)
        assert "1 / 8    0 / 1" in backend.texts()

    def test_loss_reveals_board(self, backend: RecordingBackend) -> None:
        board = Board.from_positions(BoardConfig(3, 3, 2), [(0, 0), (2, 2)])
        session = Session(GameState(board=board), backend)
        keys = (
            RIGHT + [Key.CONFIRM]          # (0, 1) safe first move
            + DOWN + DOWN + [Key.MARK]     # flag (2, 1), a safe cell
            + RIGHT + [Key.CONFIRM]        # (2, 2) mine
        )
        outcome = session.play(keys)

        assert outcome == SessionOutcome.LOST
        assert backend.texts()[-1] == LOSS_MESSAGE + "\n"
        final = backend.batches[-1]
        assert DrawGlyph(Glyph.MINE) in final
        assert DrawGlyph(Glyph.FLAG_WRONG) in final
        assert DrawGlyph(Glyph.DETONATED) in final
        assert DrawGlyph(Glyph.HIDDEN) not in final

    def test_keys_after_end_are_not_read(self, backend: RecordingBackend) -> None:
        consumed = []

        def keys():
            for key in DOWN + DOWN + RIGHT + RIGHT + [Key.CONFIRM, Key.QUIT]:
                consumed.append(key)
                yield key

        corner_session(backend).play(keys())
        assert Key.QUIT not in consumed

    def test_run_session_first_open_is_safe(self, backend: RecordingBackend) -> None:
        outcome = run_session(
            BoardConfig(2, 2, 3),
            [Key.CONFIRM],
            backend,
            rng=np.random.default_rng(8),
        )
        assert outcome == SessionOutcome.WON
