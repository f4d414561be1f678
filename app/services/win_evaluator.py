"""
Win detection for boards of any size and win length.

All functions are pure: they read the board and never modify it.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from app.core.exceptions import OutOfBounds
from app.models.board import Board, Coordinate, DIRECTIONS, EMPTY, Mark, in_bounds
from app.models.outcome import GameOutcome
from app.services.validators import board_validator_obj


@dataclass(frozen=True)
class WinCheck:
    won: bool
    cells: List[Coordinate] = field(default_factory=list)


def _run_from(board: Board, row: int, col: int, d_row: int, d_col: int,
              mark: Mark) -> List[Coordinate]:
    """Cells holding ``mark`` that continue from (row, col) one step at a time, origin excluded."""
    cells = []
    r, c = row + d_row, col + d_col
    while in_bounds(board, r, c) and board[r][c] == mark:
        cells.append((r, c))
        r += d_row
        c += d_col
    return cells


def _line_through(board: Board, row: int, col: int, d_row: int, d_col: int,
                  mark: Mark) -> List[Coordinate]:
    """The maximal contiguous run of ``mark`` through (row, col) along one direction."""
    return (
        [(row, col)]
        + _run_from(board, row, col, d_row, d_col, mark)
        + _run_from(board, row, col, -d_row, -d_col, mark)
    )


def check_line_from(board: Board, row: int, col: int, mark: Mark, win_length: int) -> bool:
    """
    Check whether ``mark`` at (row, col) completes a run of ``win_length``.

    The caller places the mark first. The origin is counted once, whatever
    it holds, and the run is extended in both directions along each of the
    four lines; the first line long enough wins.
    """
    if mark is EMPTY:
        return False
    for d_row, d_col in DIRECTIONS:
        count = (
            1
            + len(_run_from(board, row, col, d_row, d_col, mark))
            + len(_run_from(board, row, col, -d_row, -d_col, mark))
        )
        if count >= win_length:
            return True
    return False


def collect_winning_cells(board: Board, row: int, col: int, win_length: int) -> List[Coordinate]:
    """
    Get the cells of the first qualifying line through (row, col).

    The mark is read from the board. Returns an empty list when the cell is
    empty or no line reaches ``win_length``.
    """
    mark = board[row][col]
    if mark is EMPTY:
        return []
    for d_row, d_col in DIRECTIONS:
        cells = _line_through(board, row, col, d_row, d_col, mark)
        if len(cells) >= win_length:
            return cells
    return []


def is_full(board: Board) -> bool:
    """True iff every cell holds a mark."""
    return all(cell is not EMPTY for row in board for cell in row)


def evaluate_board(board: Board, mark_a: Mark, mark_b: Mark, win_length: int) -> Optional[Mark]:
    """
    Find a winner without knowing which cell was played last.

    Scans occupied cells in row-major order and returns the first of
    ``mark_a`` / ``mark_b`` that anchors a qualifying run, or None.
    """
    for row, cells in enumerate(board):
        for col, cell in enumerate(cells):
            if cell is EMPTY or (cell != mark_a and cell != mark_b):
                continue
            if check_line_from(board, row, col, cell, win_length):
                return cell
    return None


def evaluate_win_at(board: Board, row: int, col: int, win_length: int) -> WinCheck:
    """Entry point for callers: did the mark at (row, col) win, and on which cells."""
    board_validator_obj.validate_board(board, win_length)
    if not in_bounds(board, row, col):
        raise OutOfBounds(f"Position ({row}, {col}) is outside the board")

    cells = collect_winning_cells(board, row, col, win_length)
    return WinCheck(won=bool(cells), cells=cells)


def outcome_after_move(board: Board, row: int, col: int, win_length: int) -> GameOutcome:
    """Outcome once the mark at (row, col) has been placed; a win beats a full board."""
    cells = collect_winning_cells(board, row, col, win_length)
    if cells:
        return GameOutcome.win(board[row][col], cells)
    if is_full(board):
        return GameOutcome.draw()
    return GameOutcome.in_progress()


def evaluate_outcome(board: Board, win_length: int) -> GameOutcome:
    """Outcome of an arbitrary board, scanning every occupied cell."""
    board_validator_obj.validate_board(board, win_length)

    for row, cells in enumerate(board):
        for col, cell in enumerate(cells):
            if cell is EMPTY:
                continue
            winning = collect_winning_cells(board, row, col, win_length)
            if winning:
                return GameOutcome.win(cell, winning)

    if is_full(board):
        return GameOutcome.draw()
    return GameOutcome.in_progress()
