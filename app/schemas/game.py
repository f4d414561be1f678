from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from app.core.game_config import MIN_GRID_SIZE, MAX_GRID_SIZE, MIN_WIN_LENGTH
from app.models.difficulty import Difficulty
from app.models.outcome import OutcomeStatus


class BoardPayload(BaseModel):
    board: List[List[Optional[str]]] = Field(
        ...,
        description=f"Square grid ({MIN_GRID_SIZE}x{MIN_GRID_SIZE} to {MAX_GRID_SIZE}x{MAX_GRID_SIZE}); "
                    "null or \"\" for empty cells"
    )
    win_length: int = Field(..., ge=MIN_WIN_LENGTH, description="Marks in a row needed to win")

    @field_validator("board", mode="before")
    @classmethod
    def normalize_empty_cells(cls, v):
        if isinstance(v, list):
            return [
                [None if cell == "" else cell for cell in row] if isinstance(row, list) else row
                for row in v
            ]
        return v


class WinCheckRequest(BoardPayload):
    row: int = Field(..., ge=0, description="Row of the cell just played")
    col: int = Field(..., ge=0, description="Column of the cell just played")


class WinCheckResponse(BaseModel):
    won: bool
    cells: List[List[int]] = []


class MoveRequest(BoardPayload):
    mover_mark: str = Field(..., min_length=1, description="Mark of the computer player")
    opponent_mark: str = Field(..., min_length=1, description="Mark of the other player")
    grid_size: int = Field(..., ge=MIN_GRID_SIZE, le=MAX_GRID_SIZE)
    difficulty: Difficulty = Difficulty.MEDIUM
    simulate_thinking: bool = Field(False, description="Wait the difficulty's thinking time before answering")


class MoveResponse(BaseModel):
    move: Optional[List[int]] = Field(None, description="[row, col], or null when the board is full")
    difficulty: Difficulty


class OutcomeResponse(BaseModel):
    status: OutcomeStatus
    winner: Optional[str] = None
    winning_cells: List[List[int]] = []


class TurnRequest(BoardPayload):
    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)
    mark: str = Field(..., min_length=1, description="Mark being played")
    opponent_mark: str = Field(..., min_length=1, description="Mark of the other player")
    computer_difficulty: Optional[Difficulty] = Field(
        None, description="When set, the other player answers as the computer"
    )


class TurnResponse(BaseModel):
    board: List[List[Optional[str]]]
    outcome: OutcomeResponse
    computer_move: Optional[List[int]] = None


class GameConfigResponse(BaseModel):
    grid_sizes: List[int]
    win_lengths: Dict[int, List[int]]
    difficulties: List[Difficulty]
    default_difficulty: Difficulty
    default_grid_size: int
    default_win_length: int
    player1_symbols: List[str]
    player2_symbols: List[str]
    start_options: List[str]
    search_depth_limit: int
    thinking_time_ms: Dict[str, int]
