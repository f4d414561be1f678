"""
Game-related API endpoints.
"""
from fastapi import APIRouter

from app.schemas import game as game_schemas
from app.services.game_service import game_service_obj

router = APIRouter(
    prefix="/games",
    tags=["games"],
    responses={400: {"description": "Illegal move"}, 409: {"description": "Round already over"}}
)


@router.post("/turn", response_model=game_schemas.TurnResponse)
def play_turn(turn: game_schemas.TurnRequest):
    """
    Play one move on the board held by the client.

    Validates:
    - The board is square and holds only the two players' marks
    - The round is not already over
    - The cell is inside the grid and empty

    When `computer_difficulty` is set and the round goes on, the other
    player answers as the computer in the same response.

    Returns:
    - The updated board
    - The outcome (in progress, win with the winning cells, or draw)
    - The computer's move, if one was played
    """
    result = game_service_obj.play_turn(
        turn.board, turn.win_length, turn.row, turn.col,
        turn.mark, turn.opponent_mark, turn.computer_difficulty
    )
    return {
        "board": result.board,
        "outcome": result.outcome.to_dict(),
        "computer_move": list(result.computer_move) if result.computer_move else None,
    }
