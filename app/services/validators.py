from app.core.exceptions import InvalidConfiguration, CellOccupied, OutOfBounds
from app.core.game_config import (
    MIN_GRID_SIZE, MAX_GRID_SIZE, MIN_WIN_LENGTH,
    is_valid_grid_size, is_valid_win_length
)
from app.models.board import Board, EMPTY, Mark, in_bounds, marks_on


class BoardValidator:
    """Validates engine input before any evaluation or search runs."""

    def validate_configuration(self, grid_size: int, win_length: int) -> None:
        """Validate grid size and win length for any grid size."""
        if not is_valid_grid_size(grid_size):
            raise InvalidConfiguration(
                f"Grid size must be between {MIN_GRID_SIZE} and {MAX_GRID_SIZE}, got {grid_size}"
            )
        if not is_valid_win_length(win_length, grid_size):
            raise InvalidConfiguration(
                f"Win length must be between {MIN_WIN_LENGTH} and {grid_size} "
                f"for a {grid_size}x{grid_size} grid, got {win_length}"
            )

    def validate_board(self, board: Board, win_length: int) -> None:
        """Check the board is square, in the supported range, and holds at most two marks."""
        grid_size = len(board)
        if any(len(row) != grid_size for row in board):
            raise InvalidConfiguration("Board must be square")

        self.validate_configuration(grid_size, win_length)

        marks = marks_on(board)
        if len(marks) > 2:
            raise InvalidConfiguration(
                f"Board holds {len(marks)} different marks, at most 2 are allowed"
            )

    def validate_marks(self, mover_mark: Mark, opponent_mark: Mark) -> None:
        if not mover_mark or not opponent_mark:
            raise InvalidConfiguration("Marks must be non-empty")
        if mover_mark == opponent_mark:
            raise InvalidConfiguration("Players must use different symbols")

    def validate_move(self, board: Board, row: int, col: int) -> None:
        """Validate a move is legal for any grid size."""
        if not in_bounds(board, row, col):
            grid_size = len(board)
            raise OutOfBounds(
                f"Position ({row}, {col}) is invalid for {grid_size}x{grid_size} grid"
            )

        if board[row][col] is not EMPTY:
            raise CellOccupied(f"Cell ({row}, {col}) is already occupied")


board_validator_obj = BoardValidator()
