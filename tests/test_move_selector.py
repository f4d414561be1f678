import copy
import random
import time

import pytest

from app.core.exceptions import InvalidConfiguration
from app.core.game_config import SEARCH_DEPTH_LIMIT
from app.models.board import corner_cells, empty_cells, new_board
from app.models.difficulty import Difficulty
from app.services.move_selector import WIN_SCORE, MoveSelector, _MinimaxSearch, placed, select_move
from app.services.win_evaluator import evaluate_board, is_full
from tests.boards import board_from_rows

FULL_BOARD = board_from_rows(
    "XOX",
    "XOO",
    "OXX",
)


def play_out(board, first_mark, second_mark, first_move, second_move, win_length=3):
    """Alternate two move functions until someone wins or the board fills up."""
    movers = [(first_mark, second_mark, first_move), (second_mark, first_mark, second_move)]
    turn = 0
    while evaluate_board(board, first_mark, second_mark, win_length) is None and not is_full(board):
        mark, other, choose = movers[turn % 2]
        row, col = choose(board, mark, other)
        assert board[row][col] is None
        board[row][col] = mark
        turn += 1
    return evaluate_board(board, first_mark, second_mark, win_length)


def opponent_can_force_a_win(selector, board, ai_mark, opponent_mark, opponent_to_move):
    """Try every opponent reply against the hard AI; True if any line of play beats it."""
    winner = evaluate_board(board, ai_mark, opponent_mark, 3)
    if winner is not None:
        return winner == opponent_mark
    if is_full(board):
        return False

    if opponent_to_move:
        for row, col in empty_cells(board):
            with placed(board, row, col, opponent_mark):
                if opponent_can_force_a_win(selector, board, ai_mark, opponent_mark, False):
                    return True
        return False

    move = selector.select_move(board, ai_mark, opponent_mark, 3, 3, Difficulty.HARD)
    with placed(board, move[0], move[1], ai_mark):
        return opponent_can_force_a_win(selector, board, ai_mark, opponent_mark, True)


def full_scan_minimax(board, ai_mark, opponent_mark, win_length,
                      depth=0, is_maximizing=True, alpha=float('-inf'), beta=float('inf')):
    """Plain alpha-beta search that rescans the whole board at every node."""
    winner = evaluate_board(board, ai_mark, opponent_mark, win_length)
    if winner == ai_mark:
        return WIN_SCORE - depth, None
    if winner == opponent_mark:
        return depth - WIN_SCORE, None
    if is_full(board) or depth >= SEARCH_DEPTH_LIMIT:
        return 0, None

    mark = ai_mark if is_maximizing else opponent_mark
    best_score = float('-inf') if is_maximizing else float('inf')
    best_move = None
    for row, col in empty_cells(board):
        with placed(board, row, col, mark):
            score, _ = full_scan_minimax(board, ai_mark, opponent_mark, win_length,
                                         depth + 1, not is_maximizing, alpha, beta)
        if is_maximizing and score > best_score or not is_maximizing and score < best_score:
            best_score, best_move = score, (row, col)
        if is_maximizing:
            alpha = max(alpha, score)
        else:
            beta = min(beta, score)
        if beta <= alpha:
            break
    return best_score, best_move


class TestSelectMoveContract:

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_full_board_has_no_move(self, selector, difficulty):
        assert selector.select_move(FULL_BOARD, "X", "O", 3, 3, difficulty) is None

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_never_mutates_the_board(self, selector, difficulty):
        board = board_from_rows(
            "XO..",
            "..XO",
            "O..X",
            ".XO.",
        )
        before = copy.deepcopy(board)
        selector.select_move(board, "O", "X", 4, 3, difficulty)
        assert board == before

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_always_returns_an_empty_cell(self, selector, difficulty):
        board = board_from_rows(
            "XO.",
            ".X.",
            "O..",
        )
        for _ in range(5):
            row, col = selector.select_move(board, "O", "X", 3, 3, difficulty)
            assert board[row][col] is None

    def test_accepts_difficulty_tags(self, selector):
        assert selector.select_move(new_board(3), "X", "O", 3, 3, "medium") == (1, 1)

    def test_unknown_difficulty_is_rejected(self, selector):
        with pytest.raises(InvalidConfiguration):
            selector.select_move(new_board(3), "X", "O", 3, 3, "impossible")

    def test_same_marks_are_rejected(self, selector):
        with pytest.raises(InvalidConfiguration):
            selector.select_move(new_board(3), "X", "X", 3, 3, Difficulty.EASY)

    def test_grid_size_must_match_board(self, selector):
        with pytest.raises(InvalidConfiguration):
            selector.select_move(new_board(4), "X", "O", 3, 3, Difficulty.EASY)

    def test_win_length_out_of_range_is_rejected(self, selector):
        with pytest.raises(InvalidConfiguration):
            selector.select_move(new_board(3), "X", "O", 3, 2, Difficulty.EASY)

    def test_third_mark_is_rejected(self, selector):
        board = board_from_rows(
            "XO*",
            "...",
            "...",
        )
        with pytest.raises(InvalidConfiguration):
            selector.select_move(board, "X", "O", 3, 3, Difficulty.EASY)

    def test_custom_glyphs_work_as_marks(self, selector):
        board = board_from_rows(
            "★★.",
            "♦♦.",
            "...",
        )
        assert selector.select_move(board, "★", "♦", 3, 3, Difficulty.MEDIUM) == (0, 2)


class TestEasy:

    def test_same_seed_gives_same_moves(self):
        board = new_board(5)
        first = [MoveSelector(random.Random(7)).select_move(board, "X", "O", 5, 4, Difficulty.EASY)
                 for _ in range(3)]
        second = [MoveSelector(random.Random(7)).select_move(board, "X", "O", 5, 4, Difficulty.EASY)
                  for _ in range(3)]
        assert first == second

    def test_module_level_select_move_uses_injected_rng(self):
        board = new_board(4)
        move_a = select_move(board, "X", "O", 4, 3, Difficulty.EASY, rng=random.Random(3))
        move_b = select_move(board, "X", "O", 4, 3, Difficulty.EASY, rng=random.Random(3))
        assert move_a == move_b

    def test_last_empty_cell_is_chosen(self, selector):
        board = board_from_rows(
            "XOX",
            "XO.",
            "OXO",
        )
        assert selector.select_move(board, "X", "O", 3, 3, Difficulty.EASY) == (1, 2)


class TestMedium:

    def test_takes_the_win(self, selector):
        board = board_from_rows(
            "OO.",
            "XX.",
            "X..",
        )
        assert selector.select_move(board, "O", "X", 3, 3, Difficulty.MEDIUM) == (0, 2)

    def test_winning_beats_blocking(self, selector):
        board = board_from_rows(
            "XX.",
            "OO.",
            "X..",
        )
        assert selector.select_move(board, "O", "X", 3, 3, Difficulty.MEDIUM) == (1, 2)

    def test_blocks_the_opponent(self, selector):
        board = board_from_rows(
            "XX.",
            ".O.",
            "...",
        )
        assert selector.select_move(board, "O", "X", 3, 3, Difficulty.MEDIUM) == (0, 2)

    def test_blocks_a_diagonal_on_a_larger_grid(self, selector):
        board = board_from_rows(
            "X...",
            ".X..",
            "....",
            "....",
        )
        assert selector.select_move(board, "O", "X", 4, 3, Difficulty.MEDIUM) == (2, 2)

    def test_takes_the_centre_on_3x3(self, selector):
        assert selector.select_move(new_board(3), "X", "O", 3, 3, Difficulty.MEDIUM) == (1, 1)

    def test_takes_a_corner_when_centre_is_taken(self, selector):
        board = board_from_rows(
            "...",
            ".X.",
            "...",
        )
        move = selector.select_move(board, "O", "X", 3, 3, Difficulty.MEDIUM)
        assert move in corner_cells(3)

    def test_takes_a_corner_on_larger_grids(self, selector):
        move = selector.select_move(new_board(6), "X", "O", 6, 4, Difficulty.MEDIUM)
        assert move in corner_cells(6)

    def test_falls_back_to_random_without_corners(self, selector):
        board = board_from_rows(
            "X..O",
            "....",
            "....",
            "O..X",
        )
        move = selector.select_move(board, "X", "O", 4, 4, Difficulty.MEDIUM)
        assert move not in corner_cells(4)
        assert board[move[0]][move[1]] is None


class TestHard:

    def test_takes_the_win(self, selector):
        board = board_from_rows(
            "XX.",
            "OO.",
            "...",
        )
        assert selector.select_move(board, "X", "O", 3, 3, Difficulty.HARD) == (0, 2)

    def test_blocks_the_opponent(self, selector):
        board = board_from_rows(
            "XX.",
            ".O.",
            "...",
        )
        assert selector.select_move(board, "O", "X", 3, 3, Difficulty.HARD) == (0, 2)

    def test_blocks_on_a_nearly_full_larger_grid(self, selector):
        board = board_from_rows(
            "XXOO",
            "OOXX",
            "XXOO",
            "O...",
        )
        # O threatens (3,3) on the diagonal; X must take it
        assert selector.select_move(board, "X", "O", 4, 3, Difficulty.HARD) == (3, 3)

    def test_already_won_board_has_no_move(self, selector):
        board = board_from_rows(
            "XXX",
            "OO.",
            "...",
        )
        assert selector.select_move(board, "O", "X", 3, 3, Difficulty.HARD) is None

    def test_hard_against_hard_is_a_draw(self, selector):
        hard = lambda board, mark, other: selector.select_move(board, mark, other, 3, 3, Difficulty.HARD)
        assert play_out(new_board(3), "X", "O", hard, hard) is None

    def test_opening_move_cannot_be_beaten(self, selector):
        assert not opponent_can_force_a_win(selector, new_board(3), "X", "O", opponent_to_move=False)

    def test_never_loses_as_second_player(self, selector):
        assert not opponent_can_force_a_win(selector, new_board(3), "O", "X", opponent_to_move=True)

    def test_beats_or_draws_random_play(self, selector):
        easy = MoveSelector(random.Random(99))
        random_player = lambda board, mark, other: easy.select_move(board, mark, other, 3, 3, Difficulty.EASY)
        hard = lambda board, mark, other: selector.select_move(board, mark, other, 3, 3, Difficulty.HARD)
        for _ in range(5):
            assert play_out(new_board(3), "X", "O", random_player, hard) != "X"


class TestMinimaxSearch:

    def test_cutoff_scores_an_open_position_as_neutral(self):
        board = board_from_rows(
            "XX.",
            "OO.",
            "...",
        )
        search = _MinimaxSearch(board, "X", "O", 3)
        # X could win next ply, but the search stops here
        assert search.minimax(SEARCH_DEPTH_LIMIT, True, float('-inf'), float('inf')) == (0, None)

    def test_win_at_the_cutoff_depth_still_counts(self):
        board = board_from_rows(
            "XXX",
            "OO.",
            "...",
        )
        alpha, beta = float('-inf'), float('inf')
        assert _MinimaxSearch(board, "X", "O", 3).minimax(SEARCH_DEPTH_LIMIT, True, alpha, beta) \
            == (WIN_SCORE - SEARCH_DEPTH_LIMIT, None)
        assert _MinimaxSearch(board, "O", "X", 3).minimax(SEARCH_DEPTH_LIMIT, True, alpha, beta) \
            == (SEARCH_DEPTH_LIMIT - WIN_SCORE, None)

    def test_move_completing_a_line_on_the_last_searched_ply(self):
        board = board_from_rows(
            "XX.",
            "OO.",
            "...",
        )
        search = _MinimaxSearch(board, "X", "O", 3)
        score, move = search.minimax(SEARCH_DEPTH_LIMIT - 1, True, float('-inf'), float('inf'))
        assert (score, move) == (WIN_SCORE - SEARCH_DEPTH_LIMIT, (0, 2))
        assert board == board_from_rows("XX.", "OO.", "...")

    @pytest.mark.parametrize("rows, ai_mark, opponent_mark, win_length", [
        (("...", "...", "..."), "X", "O", 3),
        (("X..", ".O.", "..."), "X", "O", 3),
        (("XO.", ".X.", "..O"), "O", "X", 3),
        (("XX.", "OO.", "..."), "O", "X", 3),
        (("XXOO", "OOXX", "XXOO", "O..."), "X", "O", 3),
        (("XO..", "..XO", "O..X", ".XO."), "O", "X", 3),
    ])
    def test_matches_a_full_rescan_search(self, rows, ai_mark, opponent_mark, win_length):
        board = board_from_rows(*rows)
        expected = full_scan_minimax(copy.deepcopy(board), ai_mark, opponent_mark, win_length)
        assert _MinimaxSearch(board, ai_mark, opponent_mark, win_length).run() == expected

    def test_hard_move_on_an_empty_8x8_board_is_interactive(self, selector):
        start = time.perf_counter()
        move = selector.select_move(new_board(8), "X", "O", 8, 5, Difficulty.HARD)
        elapsed = time.perf_counter() - start

        # Nothing is decided within the search horizon, so the first cell is kept
        assert move == (0, 0)
        assert elapsed < 10
