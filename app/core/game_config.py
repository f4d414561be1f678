"""
Configuration constants for the TicTacToe game engine.
"""
from typing import Dict, List

# Grid size limits
MIN_GRID_SIZE = 3
MAX_GRID_SIZE = 8
DEFAULT_GRID_SIZE = 3

# Win condition limits (consecutive marks needed to win)
MIN_WIN_LENGTH = 3
DEFAULT_WIN_LENGTH = 3

# Hard difficulty stops looking ahead after this many plies
SEARCH_DEPTH_LIMIT = 6

# Artificial "thinking" time before a computer move, in milliseconds
THINKING_TIME_MS: Dict[str, int] = {
    "easy": 400,
    "medium": 800,
    "hard": 1200,
}

DEFAULT_PLAYER1_SYMBOL = "X"
DEFAULT_PLAYER2_SYMBOL = "O"

PLAYER1_SYMBOLS = ["X", "O", "★", "♦", "●", "■", "🔥", "⚡", "💎", "🚀"]
PLAYER2_SYMBOLS = ["O", "X", "★", "♦", "●", "■", "🌟", "💫", "🎯", "🔮"]

# Who opens a new round: player 1, player 2, whoever did not start last, or a coin flip
START_OPTIONS = ["p1", "p2", "alternate", "random"]
DEFAULT_START_OPTION = "alternate"


def is_valid_grid_size(grid_size: int) -> bool:
    """Check if a grid size is valid."""
    return MIN_GRID_SIZE <= grid_size <= MAX_GRID_SIZE


def is_valid_win_length(win_length: int, grid_size: int) -> bool:
    """Check if a win length fits on the given grid."""
    return MIN_WIN_LENGTH <= win_length <= grid_size


def win_lengths_for(grid_size: int) -> List[int]:
    """All win lengths selectable for a grid size."""
    return list(range(MIN_WIN_LENGTH, grid_size + 1))


def get_thinking_time_ms(difficulty: str) -> int:
    """Get the simulated thinking time for a difficulty, defaulting to medium."""
    return THINKING_TIME_MS.get(difficulty, THINKING_TIME_MS["medium"])
