"""
Engine API endpoints: win checks, computer moves and board outcomes.
"""
import asyncio

from fastapi import APIRouter
from starlette.concurrency import run_in_threadpool

from app.core.config import settings
from app.core.game_config import get_thinking_time_ms
from app.schemas import game as game_schemas
from app.services.game_service import game_service_obj

router = APIRouter(
    prefix="/engine",
    tags=["engine"],
    responses={400: {"description": "Invalid board, configuration or move"}}
)


@router.post("/win-check", response_model=game_schemas.WinCheckResponse)
def check_win(request: game_schemas.WinCheckRequest):
    """
    Check whether the mark at (row, col) completes a winning line.

    Returns the cells of the winning line for highlighting, or an empty
    list when the move did not win.
    """
    result = game_service_obj.check_win(request.board, request.row, request.col, request.win_length)
    return {"won": result.won, "cells": [list(cell) for cell in result.cells]}


@router.post("/move", response_model=game_schemas.MoveResponse)
async def select_move(request: game_schemas.MoveRequest):
    """
    Choose the computer's next move.

    Difficulties:
    - easy: random empty cell
    - medium: win, block, centre, corner, then random
    - hard: minimax search with alpha-beta pruning

    Returns a null move when the board has no empty cell.
    """
    if request.simulate_thinking or settings.THINKING_DELAY_ENABLED:
        await asyncio.sleep(get_thinking_time_ms(request.difficulty.value) / 1000)

    move = await run_in_threadpool(
        game_service_obj.suggest_move,
        request.board,
        request.mover_mark,
        request.opponent_mark,
        request.grid_size,
        request.win_length,
        request.difficulty,
    )
    return {"move": list(move) if move else None, "difficulty": request.difficulty}


@router.post("/outcome", response_model=game_schemas.OutcomeResponse)
def get_outcome(request: game_schemas.BoardPayload):
    """
    Evaluate a whole board: in progress, won (with the winning line) or drawn.

    A full board with a winning line is reported as a win.
    """
    return game_service_obj.get_outcome(request.board, request.win_length).to_dict()
