"""
Computer move selection for every difficulty.

Easy picks a random empty cell, Medium follows a short rule cascade
(win, block, centre, corner, random) and Hard runs a depth-limited
minimax search with alpha-beta pruning.
"""
import logging
import random
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple, Union

from app.core.config import settings
from app.core.exceptions import InvalidConfiguration
from app.core.game_config import SEARCH_DEPTH_LIMIT
from app.models.board import (
    Board, Coordinate, EMPTY, Mark, copy_board, corner_cells, empty_cells
)
from app.models.difficulty import Difficulty
from app.services.validators import board_validator_obj
from app.services.win_evaluator import check_line_from, evaluate_board

logger = logging.getLogger(__name__)

WIN_SCORE = 10


@contextmanager
def placed(board: Board, row: int, col: int, mark: Mark) -> Iterator[None]:
    """Temporarily put ``mark`` on an empty cell; the cell is emptied again on exit."""
    board[row][col] = mark
    try:
        yield
    finally:
        board[row][col] = EMPTY


def find_winning_move(board: Board, mark: Mark, win_length: int) -> Optional[Coordinate]:
    """First empty cell, in row-major order, that completes a line for ``mark``."""
    for row, col in empty_cells(board):
        with placed(board, row, col, mark):
            if check_line_from(board, row, col, mark, win_length):
                return row, col
    return None


class _MinimaxSearch:
    """
    One alpha-beta search over a scratch board.

    The AI mark maximizes, the opponent minimizes. Scores favour quicker
    wins and slower losses; anything past SEARCH_DEPTH_LIMIT plies is
    scored as neutral.

    Only the root position is scanned in full. Every deeper position
    descends from a non-terminal one, so a new line has to run through
    the cell just played and needs at least win_length marks of its owner.
    """

    def __init__(self, board: Board, ai_mark: Mark, opponent_mark: Mark, win_length: int):
        self.board = board
        self.ai_mark = ai_mark
        self.opponent_mark = opponent_mark
        self.win_length = win_length

        # Row-major; the search only ever fills these cells
        self.cells = empty_cells(board)
        self.empty_left = len(self.cells)
        self.mark_counts = {
            mark: sum(row.count(mark) for row in board)
            for mark in (ai_mark, opponent_mark)
        }

        # Positions evaluated, for debugging
        self.nodes = 0

    def run(self) -> Tuple[float, Optional[Coordinate]]:
        return self.minimax(0, True, float('-inf'), float('inf'))

    def winner_after(self, last_move: Optional[Coordinate]) -> Optional[Mark]:
        """Winner of the current position; ``last_move`` is None at the root."""
        if last_move is None:
            return evaluate_board(self.board, self.ai_mark, self.opponent_mark, self.win_length)

        row, col = last_move
        mark = self.board[row][col]
        if self.mark_counts[mark] < self.win_length:
            return None
        if check_line_from(self.board, row, col, mark, self.win_length):
            return mark
        return None

    def minimax(
        self,
        depth: int,
        is_maximizing: bool,
        alpha: float,
        beta: float,
        last_move: Optional[Coordinate] = None
    ) -> Tuple[float, Optional[Coordinate]]:
        """
        Minimax algorithm with alpha-beta pruning.

        Args:
            depth: Plies played since the root.
            is_maximizing: True if it is the AI's ply.
            alpha: Best score the maximizer can already guarantee.
            beta: Best score the minimizer can already guarantee.
            last_move: Cell filled by the ply that led here, None for a
                position that has to be scanned in full.

        Returns:
            (score, move) where move is None at leaves.
        """
        self.nodes += 1

        winner = self.winner_after(last_move)
        if winner == self.ai_mark:
            return WIN_SCORE - depth, None
        if winner == self.opponent_mark:
            return depth - WIN_SCORE, None
        if self.empty_left == 0:
            return 0, None
        if depth >= SEARCH_DEPTH_LIMIT:
            return 0, None

        board = self.board
        mark = self.ai_mark if is_maximizing else self.opponent_mark
        best_score = float('-inf') if is_maximizing else float('inf')
        best_move = None

        for row, col in self.cells:
            if board[row][col] is not EMPTY:
                continue

            board[row][col] = mark
            self.empty_left -= 1
            self.mark_counts[mark] += 1
            try:
                score, _ = self.minimax(depth + 1, not is_maximizing, alpha, beta, (row, col))
            finally:
                board[row][col] = EMPTY
                self.empty_left += 1
                self.mark_counts[mark] -= 1

            if is_maximizing:
                if score > best_score:
                    best_score = score
                    best_move = (row, col)
                alpha = max(alpha, score)
            else:
                if score < best_score:
                    best_score = score
                    best_move = (row, col)
                beta = min(beta, score)

            if beta <= alpha:
                break  # Prune

        return best_score, best_move


class MoveSelector:
    """
    Chooses the computer's move.

    Holds nothing but its random source, so one instance can serve any
    board, mark pair and difficulty.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def select_move(
        self,
        board: Board,
        mover_mark: Mark,
        opponent_mark: Mark,
        grid_size: int,
        win_length: int,
        difficulty: Union[Difficulty, str]
    ) -> Optional[Coordinate]:
        """
        Pick an empty cell for ``mover_mark``.

        Args:
            board: Current board; it is left untouched.
            mover_mark: Mark of the computer player.
            opponent_mark: Mark of the other player.
            grid_size: Board width/height.
            win_length: Marks in a row needed to win.
            difficulty: Difficulty or its tag ("easy", "medium", "hard").

        Returns:
            (row, col) of the chosen cell, or None if no move is available.
        """
        difficulty = Difficulty.parse(difficulty)
        board_validator_obj.validate_board(board, win_length)
        board_validator_obj.validate_marks(mover_mark, opponent_mark)
        if grid_size != len(board):
            raise InvalidConfiguration(
                f"Grid size {grid_size} does not match a {len(board)}x{len(board)} board"
            )

        # Strategies may place marks while looking ahead; they never see the caller's board
        scratch = copy_board(board)
        if not empty_cells(scratch):
            return None

        if difficulty == Difficulty.EASY:
            move = self.random_move(scratch)
        elif difficulty == Difficulty.MEDIUM:
            move = self.medium_move(scratch, mover_mark, opponent_mark, grid_size, win_length)
        else:
            move = self.hard_move(scratch, mover_mark, opponent_mark, win_length)

        logger.debug(f"{difficulty.value} move for '{mover_mark}' on {grid_size}x{grid_size}: {move}")
        return move

    def random_move(self, board: Board) -> Optional[Coordinate]:
        available = empty_cells(board)
        if not available:
            return None
        return self.rng.choice(available)

    def medium_move(
        self,
        board: Board,
        mover_mark: Mark,
        opponent_mark: Mark,
        grid_size: int,
        win_length: int
    ) -> Optional[Coordinate]:
        """Win if possible, else block, else centre (3x3 only), else a corner, else random."""
        win_move = find_winning_move(board, mover_mark, win_length)
        if win_move:
            return win_move

        block_move = find_winning_move(board, opponent_mark, win_length)
        if block_move:
            return block_move

        if grid_size == 3 and board[1][1] is EMPTY:
            return 1, 1

        corners = [(r, c) for r, c in corner_cells(grid_size) if board[r][c] is EMPTY]
        if corners:
            return self.rng.choice(corners)

        return self.random_move(board)

    def hard_move(
        self,
        board: Board,
        mover_mark: Mark,
        opponent_mark: Mark,
        win_length: int
    ) -> Optional[Coordinate]:
        search = _MinimaxSearch(board, mover_mark, opponent_mark, win_length)
        score, move = search.run()
        logger.debug(f"Minimax evaluated {search.nodes} positions. Best move: {move} (score: {score})")
        return move


move_selector_obj = MoveSelector(random.Random(settings.RANDOM_SEED))


def select_move(
    board: Board,
    mover_mark: Mark,
    opponent_mark: Mark,
    grid_size: int,
    win_length: int,
    difficulty: Union[Difficulty, str],
    rng: Optional[random.Random] = None
) -> Optional[Coordinate]:
    """Module-level entry point; pass ``rng`` for reproducible Easy/Medium play."""
    selector = MoveSelector(rng) if rng is not None else move_selector_obj
    return selector.select_move(board, mover_mark, opponent_mark, grid_size, win_length, difficulty)
