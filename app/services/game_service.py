import logging
from dataclasses import dataclass
from typing import Optional

from app.models.board import Board, Coordinate, Mark
from app.models.difficulty import Difficulty
from app.models.game_round import GameRound
from app.models.outcome import GameOutcome
from app.services.move_selector import MoveSelector, move_selector_obj
from app.services.win_evaluator import WinCheck, evaluate_outcome, evaluate_win_at

logger = logging.getLogger(__name__)


@dataclass
class TurnResult:
    board: Board
    outcome: GameOutcome
    computer_move: Optional[Coordinate] = None


class GameService:
    """
    Stateless game operations for the HTTP layer.

    Every call works from the board the client sends; nothing is kept
    between requests.
    """

    def __init__(self, selector: Optional[MoveSelector] = None):
        self.selector = selector or move_selector_obj

    def check_win(self, board: Board, row: int, col: int, win_length: int) -> WinCheck:
        return evaluate_win_at(board, row, col, win_length)

    def suggest_move(self, board: Board, mover_mark: Mark, opponent_mark: Mark,
                     grid_size: int, win_length: int, difficulty: Difficulty) -> Optional[Coordinate]:
        return self.selector.select_move(
            board, mover_mark, opponent_mark, grid_size, win_length, difficulty
        )

    def get_outcome(self, board: Board, win_length: int) -> GameOutcome:
        return evaluate_outcome(board, win_length)

    def play_turn(self, board: Board, win_length: int, row: int, col: int,
                  mark: Mark, opponent_mark: Mark,
                  computer_difficulty: Optional[Difficulty] = None) -> TurnResult:
        """
        Apply ``mark`` at (row, col), then optionally answer for ``opponent_mark``.

        The computer only replies while the round is still in progress.
        """
        game_round = GameRound.from_board(board, win_length, mark, opponent_mark)
        outcome = game_round.apply_move(row, col)

        computer_move = None
        if not outcome.is_over and computer_difficulty is not None:
            pending = game_round.request_computer_move(self.selector, computer_difficulty)
            if pending.move is not None:
                outcome = game_round.apply_computer_move(pending)
                computer_move = pending.move

        if outcome.is_over:
            logger.info(f"Turn ended the round on {game_round.grid_size}x{game_round.grid_size}: "
                        f"{outcome.status.value} (winner: {outcome.winner})")

        return TurnResult(board=game_round.board, outcome=outcome, computer_move=computer_move)


game_service_obj = GameService()
