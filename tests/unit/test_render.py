"""
Unit tests for RenderTracker and glyph mapping.
"""
import pytest
from sweeper import (
    Cell,
    CellState,
    DrawGlyph,
    DrawText,
    Glyph,
    MoveCursor,
    RenderTracker,
    glyph_for_cell,
    glyph_for_state,
    reveal_glyph,
)


# ============================================================================
# Cursor Tracking Tests
# ============================================================================

class TestCursorTracking:
    """Test the believed cursor and move elision."""

    def test_starts_at_origin(self, tracker: RenderTracker) -> None:
        assert tracker.cursor == (0, 0)
        assert tracker.flush() == []

    def test_move_to_same_position_emits_nothing(self, tracker: RenderTracker) -> None:
        tracker.move_to(0, 0)
        assert tracker.flush() == []

    def test_move_records_delta(self, tracker: RenderTracker) -> None:
        tracker.move_to(3, 2)
        tracker.move_to(4, 2)
        assert tracker.flush() == [MoveCursor(3, 2, 3, 2), MoveCursor(4, 2, 1, 0)]
        assert tracker.cursor == (4, 2)

    def test_draw_keeps_cursor_on_cell(self, tracker: RenderTracker) -> None:
        tracker.draw(1, 1, Glyph.FLAG)
        tracker.draw(1, 1, Glyph.QUESTION)
        assert tracker.flush() == [
            MoveCursor(1, 1, 1, 1),
            DrawGlyph(Glyph.FLAG),
            DrawGlyph(Glyph.QUESTION),
        ]

    def test_flush_clears_pending(self, tracker: RenderTracker) -> None:
        tracker.draw(0, 0, Glyph.HIDDEN)
        tracker.flush()
        assert tracker.flush() == []

    def test_text_makes_column_unknown(self, tracker: RenderTracker) -> None:
        tracker.write("abc")
        assert tracker.cursor == (None, 0)
        tracker.move_to(0, 0)
        assert tracker.flush()[-1] == MoveCursor(0, 0, None, 0)

    def test_text_newline_advances_row(self, tracker: RenderTracker) -> None:
        tracker.write("done\n")
        assert tracker.cursor == (0, 1)


# ============================================================================
# Composite Update Tests
# ============================================================================

class TestCompositeUpdates:
    """Test batch drawing, status bar and messages."""

    def test_draw_cells_returns_to_cursor(self, tracker: RenderTracker) -> None:
        tracker.move_to(2, 2)
        tracker.flush()
        tracker.draw_cells(
            [(2, 2, Glyph.NUMBER_0), (3, 2, Glyph.NUMBER_1)], return_to=(2, 2)
        )
        assert tracker.flush() == [
            DrawGlyph(Glyph.NUMBER_0),
            MoveCursor(3, 2, 1, 0),
            DrawGlyph(Glyph.NUMBER_1),
            MoveCursor(2, 2, -1, 0),
        ]

    def test_initial_frame(self) -> None:
        tracker = RenderTracker(3, 2)
        tracker.draw_initial_frame()
        commands = tracker.flush()
        glyphs = [c for c in commands if isinstance(c, DrawGlyph)]
        assert len(glyphs) == 6
        assert all(g.glyph == Glyph.HIDDEN for g in glyphs)
        assert commands[-1] == MoveCursor(0, 0, -2, -1)
        assert tracker.cursor == (0, 0)

    def test_status_restores_cursor(self, tracker: RenderTracker) -> None:
        tracker.move_to(4, 3)
        tracker.flush()
        tracker.draw_status(5, 71, 2, 10)
        assert tracker.flush() == [
            MoveCursor(0, 9, -4, 6),
            DrawText("5 / 71    2 / 10"),
            MoveCursor(4, 3, None, -6),
        ]
        assert tracker.cursor == (4, 3)

    def test_status_row_below_grid(self, tracker: RenderTracker) -> None:
        assert tracker.status_row == 9

    def test_message_ends_line(self, tracker: RenderTracker) -> None:
        tracker.write_message("bye")
        assert tracker.flush() == [MoveCursor(0, 9, 0, 9), DrawText("bye\n")]
        assert tracker.cursor == (0, 10)


# ============================================================================
# Glyph Mapping Tests
# ============================================================================

class TestGlyphs:
    """Test engine state to glyph mapping."""

    @pytest.mark.parametrize(
        "state, glyph",
        [
            (CellState.HIDDEN, Glyph.HIDDEN),
            (CellState.FLAGGED, Glyph.FLAG),
            (CellState.QUESTIONED, Glyph.QUESTION),
        ],
    )
    def test_mark_glyphs(self, state: CellState, glyph: Glyph) -> None:
        assert glyph_for_state(state) == glyph

    def test_number_glyphs(self) -> None:
        assert glyph_for_state(CellState.OPENED, 0) == Glyph.NUMBER_0
        assert glyph_for_state(CellState.OPENED, 8) == Glyph.NUMBER_8

    def test_cell_glyph_uses_count(self, opened_cell: Cell) -> None:
        assert glyph_for_cell(opened_cell) == Glyph.NUMBER_3
        assert glyph_for_cell(Cell(state=CellState.FLAGGED)) == Glyph.FLAG

    def test_reveal_glyphs(self) -> None:
        flagged = Cell(state=CellState.FLAGGED)
        assert reveal_glyph(flagged, True) == Glyph.FLAG_CORRECT
        assert reveal_glyph(flagged, False) == Glyph.FLAG_WRONG
        assert reveal_glyph(Cell(), True) == Glyph.MINE
        assert reveal_glyph(Cell(state=CellState.QUESTIONED), True) == Glyph.MINE
        assert reveal_glyph(Cell(), False) == Glyph.BLANK
