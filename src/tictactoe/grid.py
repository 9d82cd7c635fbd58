"""
The 3x3 tic-tac-toe grid and the geometry of winning lines.

A grid is an immutable tuple of rows, each cell holding a Mark value (0 empty, 1 player1, 2 player2), matching the wire format.
"""

from enum import IntEnum
from typing import Optional, Sequence

from src.core.exceptions import InvalidMoveError

GRID_SIZE = 3

Cell = tuple[int, int]
Grid = tuple[tuple[int, ...], ...]


class Mark(IntEnum):
    EMPTY = 0
    PLAYER1 = 1
    PLAYER2 = 2

    def symbol(self, empty: str = " ") -> str:
        return {Mark.EMPTY: empty, Mark.PLAYER1: "X", Mark.PLAYER2: "O"}[self]


MARK_VALUES = {mark.value for mark in Mark}
EMPTY_GRID: Grid = tuple(tuple(Mark.EMPTY.value for _ in range(GRID_SIZE)) for _ in range(GRID_SIZE))


def _winning_lines() -> list[tuple[Cell, ...]]:
    """Rows, then columns, then the two diagonals"""
    rows = [tuple((row, col) for col in range(GRID_SIZE)) for row in range(GRID_SIZE)]
    cols = [tuple((row, col) for row in range(GRID_SIZE)) for col in range(GRID_SIZE)]
    diagonal = tuple((i, i) for i in range(GRID_SIZE))
    anti_diagonal = tuple((i, GRID_SIZE - 1 - i) for i in range(GRID_SIZE))
    return rows + cols + [diagonal, anti_diagonal]


WINNING_LINES: list[tuple[Cell, ...]] = _winning_lines()


# --- MOVE TOKENS ---
def parse_cell(token: str) -> Cell:
    """'row,col' with both indices on the grid, ex. '1,1' is the center"""
    parts = token.split(",")
    if len(parts) != 2:
        raise InvalidMoveError(f"Cannot interpret {token!r} as 'row,col'.")
    if not all(part.isascii() and part.isdigit() for part in parts):
        raise InvalidMoveError(f"Cannot interpret {token!r} as 'row,col'.")

    row, col = int(parts[0]), int(parts[1])
    if not (row < GRID_SIZE and col < GRID_SIZE):
        raise InvalidMoveError(f"Cell {token!r} is not on the {GRID_SIZE}x{GRID_SIZE} grid.")
    return row, col


def cell_token(cell: Cell) -> str:
    row, col = cell
    return f"{row},{col}"


# --- GRID QUERIES ---
def is_valid_grid(board: Sequence[Sequence[int]]) -> bool:
    """Right dimensions, only known marks, and mark counts a real game can reach (player1 starts, players alternate)"""
    if len(board) != GRID_SIZE:
        return False
    if not all(
        len(row) == GRID_SIZE and all(value in MARK_VALUES for value in row)
        for row in board
    ):
        return False
    lead = sum(row.count(Mark.PLAYER1) - row.count(Mark.PLAYER2) for row in board)
    return lead in (0, 1)


def to_grid(board: list[list[int]]) -> Grid:
    return tuple(tuple(row) for row in board)


def mark_at(grid: Grid, cell: Cell) -> Mark:
    row, col = cell
    return Mark(grid[row][col])


def empty_cells(grid: Grid) -> list[Cell]:
    """Row-major order"""
    return [
        (row, col)
        for row in range(GRID_SIZE)
        for col in range(GRID_SIZE)
        if grid[row][col] == Mark.EMPTY
    ]


def is_full(grid: Grid) -> bool:
    return not empty_cells(grid)


def count_marks(grid: Grid, mark: Mark) -> int:
    return sum(row.count(mark.value) for row in grid)


def line_winner(grid: Grid) -> Optional[Mark]:
    """Mark owning the first complete line found, if any"""
    for line in WINNING_LINES:
        first = mark_at(grid, line[0])
        if first != Mark.EMPTY and all(mark_at(grid, cell) == first for cell in line):
            return first
    return None


def place_mark(grid: Grid, cell: Cell, mark: Mark) -> Grid:
    """Grids are immutable: returns a new grid"""
    target_row, target_col = cell
    return tuple(
        tuple(
            mark.value if (row, col) == (target_row, target_col) else value
            for col, value in enumerate(cells)
        )
        for row, cells in enumerate(grid)
    )
