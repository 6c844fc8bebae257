"""
Flood fill for Minesweeper game.

Opens the connected region of zero-count cells around an opened
empty cell, together with the numbered cells bordering it.
"""
from collections import deque
from typing import Deque, List, Tuple

from .board import Board
from .cell import Cell


def flood_fill(
    board: Board, cells: List[List[Cell]], row: int, col: int
) -> List[Tuple[int, int]]:
    """
    Breadth-first reveal starting from an opened zero-count cell.

    Only hidden neighbors are touched; flagged and questioned cells are
    left as the player marked them. Numbered cells are opened but not
    expanded, so they form the border of the filled region. Every
    neighbor of a zero-count cell is mine-free, so no mine is ever opened.

    Args:
        board: Mine layout.
        cells: Visibility grid, mutated in place.
        row: Row of the origin cell.
        col: Column of the origin cell.

    Returns:
        Positions opened by the fill, in the order they were opened.
        The origin itself is not included.
    """
    opened: List[Tuple[int, int]] = []
    queue: Deque[Tuple[int, int]] = deque([(row, col)])

    while queue:
        current_row, current_col = queue.popleft()
        for neighbor_row, neighbor_col in board.neighbors(current_row, current_col):
            neighbor = cells[neighbor_row][neighbor_col]
            if not neighbor.is_hidden:
                continue
            count = board.count_adjacent_mines(neighbor_row, neighbor_col)
            neighbor.open(count)
            opened.append((neighbor_row, neighbor_col))
            if count == 0:
                queue.append((neighbor_row, neighbor_col))

    return opened
