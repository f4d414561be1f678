"""
Board representation shared by the engine, the round state machine and the API.

A board is a square, row-major list of rows. ``None`` marks an empty cell,
any other value is a player's mark (compared by value).
"""
from typing import List, Optional, Tuple

Mark = str
Cell = Optional[Mark]
Board = List[List[Cell]]
Coordinate = Tuple[int, int]

EMPTY: Cell = None

# Row/column steps: horizontal, vertical, diagonal down-right, diagonal down-left
DIRECTIONS: List[Coordinate] = [(0, 1), (1, 0), (1, 1), (1, -1)]


def new_board(grid_size: int) -> Board:
    """Create an empty grid_size x grid_size board."""
    return [[EMPTY for _ in range(grid_size)] for _ in range(grid_size)]


def copy_board(board: Board) -> Board:
    return [list(row) for row in board]


def in_bounds(board: Board, row: int, col: int) -> bool:
    size = len(board)
    return 0 <= row < size and 0 <= col < size


def empty_cells(board: Board) -> List[Coordinate]:
    """All empty cells in row-major order."""
    return [
        (row, col)
        for row, cells in enumerate(board)
        for col, cell in enumerate(cells)
        if cell is EMPTY
    ]


def corner_cells(grid_size: int) -> List[Coordinate]:
    last = grid_size - 1
    return [(0, 0), (0, last), (last, 0), (last, last)]


def marks_on(board: Board) -> List[Mark]:
    """Distinct marks present on the board, in order of first appearance."""
    seen: List[Mark] = []
    for cells in board:
        for cell in cells:
            if cell is not EMPTY and cell not in seen:
                seen.append(cell)
    return seen
