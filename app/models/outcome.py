from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, List, Optional

from app.models.board import Coordinate, Mark


class OutcomeStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"


@dataclass(frozen=True)
class GameOutcome:
    """Result of evaluating a board: still playing, won by a mark, or drawn."""
    status: OutcomeStatus
    winner: Optional[Mark] = None
    winning_cells: List[Coordinate] = field(default_factory=list)

    @classmethod
    def in_progress(cls) -> "GameOutcome":
        return cls(OutcomeStatus.IN_PROGRESS)

    @classmethod
    def win(cls, mark: Mark, cells: List[Coordinate]) -> "GameOutcome":
        return cls(OutcomeStatus.WIN, winner=mark, winning_cells=list(cells))

    @classmethod
    def draw(cls) -> "GameOutcome":
        return cls(OutcomeStatus.DRAW)

    @property
    def is_over(self) -> bool:
        return self.status != OutcomeStatus.IN_PROGRESS

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["status"] = self.status.value
        data["winning_cells"] = [list(cell) for cell in self.winning_cells]
        return data
