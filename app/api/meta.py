"""
Configuration discovery and health endpoints.
"""
from fastapi import APIRouter

from app.core.config import settings
from app.core.game_config import (
    DEFAULT_GRID_SIZE, DEFAULT_WIN_LENGTH, MIN_GRID_SIZE, MAX_GRID_SIZE,
    PLAYER1_SYMBOLS, PLAYER2_SYMBOLS,
    SEARCH_DEPTH_LIMIT, START_OPTIONS, THINKING_TIME_MS, win_lengths_for
)
from app.models.difficulty import Difficulty
from app.schemas import game as game_schemas

router = APIRouter(tags=["meta"])


@router.get("/config", response_model=game_schemas.GameConfigResponse)
def get_game_config():
    """
    Settings the front-end offers: grid sizes with their win lengths,
    difficulties, symbol palettes and start options.
    """
    grid_sizes = list(range(MIN_GRID_SIZE, MAX_GRID_SIZE + 1))
    return {
        "grid_sizes": grid_sizes,
        "win_lengths": {size: win_lengths_for(size) for size in grid_sizes},
        "difficulties": list(Difficulty),
        "default_difficulty": settings.DEFAULT_DIFFICULTY,
        "default_grid_size": DEFAULT_GRID_SIZE,
        "default_win_length": DEFAULT_WIN_LENGTH,
        "player1_symbols": PLAYER1_SYMBOLS,
        "player2_symbols": PLAYER2_SYMBOLS,
        "start_options": START_OPTIONS,
        "search_depth_limit": SEARCH_DEPTH_LIMIT,
        "thinking_time_ms": THINKING_TIME_MS,
    }


@router.get("/health")
def health():
    return {"status": "ok"}
