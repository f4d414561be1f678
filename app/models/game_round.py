"""
Per-round game state.

A round starts with an empty board, takes alternating moves and ends on
the first win or when the board fills up. Once over, it accepts no moves
until restarted.
"""
import itertools
import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from app.core.exceptions import GameEnded, InvalidConfiguration, NotYourTurn
from app.core.game_config import START_OPTIONS
from app.models.board import Board, Coordinate, Mark, copy_board, new_board
from app.models.outcome import GameOutcome
from app.services.validators import board_validator_obj
from app.services.win_evaluator import evaluate_outcome, outcome_after_move

logger = logging.getLogger(__name__)

_round_ids = itertools.count(1)


@dataclass(frozen=True)
class PendingMove:
    """A computer move computed for a specific round."""
    round_id: int
    mark: Mark
    move: Optional[Coordinate]


def choose_starter(option: str, last_starter: str, rng: Optional[random.Random] = None) -> str:
    """
    Decide who opens the next round.

    Args:
        option: One of "p1", "p2", "alternate", "random".
        last_starter: "p1" or "p2", whoever opened the previous round.
        rng: Random source for the "random" option.

    Returns:
        "p1" or "p2".
    """
    if option not in START_OPTIONS:
        raise InvalidConfiguration(f"Unknown start option '{option}'")
    if option == "alternate":
        return "p2" if last_starter == "p1" else "p1"
    if option == "random":
        return "p1" if (rng or random).random() < 0.5 else "p2"
    return option


@dataclass
class GameRound:
    """
    The complete state of one round.

    Tracks:
    - The board and win length
    - Both marks and whose turn it is
    - The outcome (in progress, win, draw)
    - A round id that changes on every restart
    """

    grid_size: int
    win_length: int
    marks: Tuple[Mark, Mark]
    current_mark: Mark
    board: Board
    outcome: GameOutcome = field(default_factory=GameOutcome.in_progress)
    round_id: int = field(default_factory=lambda: next(_round_ids))
    moves: List[Coordinate] = field(default_factory=list)

    @classmethod
    def new(cls, grid_size: int, win_length: int, starting_mark: Mark, other_mark: Mark) -> "GameRound":
        board_validator_obj.validate_configuration(grid_size, win_length)
        board_validator_obj.validate_marks(starting_mark, other_mark)
        return cls(
            grid_size=grid_size,
            win_length=win_length,
            marks=(starting_mark, other_mark),
            current_mark=starting_mark,
            board=new_board(grid_size),
        )

    @classmethod
    def from_board(cls, board: Board, win_length: int, current_mark: Mark, other_mark: Mark) -> "GameRound":
        """Resume a round from a board held by the caller."""
        board_validator_obj.validate_board(board, win_length)
        board_validator_obj.validate_marks(current_mark, other_mark)
        for cells in board:
            for cell in cells:
                if cell is not None and cell not in (current_mark, other_mark):
                    raise InvalidConfiguration(
                        f"Board holds mark '{cell}' which belongs to neither player"
                    )

        board = copy_board(board)
        return cls(
            grid_size=len(board),
            win_length=win_length,
            marks=(current_mark, other_mark),
            current_mark=current_mark,
            board=board,
            outcome=evaluate_outcome(board, win_length),
        )

    @property
    def is_over(self) -> bool:
        return self.outcome.is_over

    @property
    def other_mark(self) -> Mark:
        return self.marks[1] if self.current_mark == self.marks[0] else self.marks[0]

    def apply_move(self, row: int, col: int, mark: Optional[Mark] = None) -> GameOutcome:
        """
        Play ``mark`` (default: the current mover) at (row, col).

        Returns:
            The outcome after the move. The mover switches only while the
            round is still in progress.
        """
        if self.is_over:
            raise GameEnded(f"Round {self.round_id} has already ended")

        mark = self.current_mark if mark is None else mark
        if mark != self.current_mark:
            raise NotYourTurn(f"It's not {mark}'s turn")

        board_validator_obj.validate_move(self.board, row, col)

        self.board[row][col] = mark
        self.moves.append((row, col))

        # Win is checked before fullness
        self.outcome = outcome_after_move(self.board, row, col, self.win_length)
        if self.outcome.is_over:
            logger.info(f"Round {self.round_id} ended: {self.outcome.status.value} "
                        f"(winner: {self.outcome.winner}) after {len(self.moves)} moves")
        else:
            self.current_mark = self.other_mark

        return self.outcome

    def request_computer_move(self, selector, difficulty) -> PendingMove:
        """Compute a move for the current mover without applying it."""
        move = selector.select_move(
            self.board, self.current_mark, self.other_mark,
            self.grid_size, self.win_length, difficulty
        )
        return PendingMove(round_id=self.round_id, mark=self.current_mark, move=move)

    def apply_computer_move(self, pending: PendingMove) -> Optional[GameOutcome]:
        """
        Apply a previously computed move.

        Returns None when the move belongs to an earlier round or no move
        was available; such results are discarded.
        """
        if pending.round_id != self.round_id:
            logger.debug(f"Discarding move for round {pending.round_id}, current round is {self.round_id}")
            return None
        if pending.move is None:
            return None

        row, col = pending.move
        return self.apply_move(row, col, pending.mark)

    def restart(self, starting_mark: Optional[Mark] = None) -> None:
        """Start a new round on an empty board with the same settings."""
        if starting_mark is not None and starting_mark not in self.marks:
            raise InvalidConfiguration(f"'{starting_mark}' is not one of this round's marks")

        self.board = new_board(self.grid_size)
        self.outcome = GameOutcome.in_progress()
        self.moves = []
        self.current_mark = starting_mark or self.marks[0]
        self.round_id = next(_round_ids)
