"""
Scores, player names and preferences kept in a key-value store.

The store lives with the client (browser storage, a local file); each key
holds one JSON-serialized record. Unreadable or unwritable entries are
logged and replaced with defaults so a broken store never stops a game.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from pydantic import BaseModel, Field, ValidationError

from app.core.config import settings
from app.core.exceptions import InvalidConfiguration
from app.core.game_config import (
    DEFAULT_PLAYER1_SYMBOL, DEFAULT_PLAYER2_SYMBOL, DEFAULT_START_OPTION, START_OPTIONS
)
from app.models.difficulty import Difficulty
from app.models.outcome import GameOutcome, OutcomeStatus

logger = logging.getLogger(__name__)

PLAYER_KEYS = ("player1", "player2")
DIFFICULTY_KEY = "aiDifficulty"
START_OPTION_KEY = "startOption"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class InMemoryStore:
    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """All keys in one JSON object on disk."""

    def __init__(self, path):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            logger.warning(f"{self.path} does not hold a JSON object, ignoring its contents")
            return {}
        return data

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


class PlayerProfile(BaseModel):
    symbol: str = Field(..., min_length=1, description="Mark placed by this player")
    name: str = Field(..., min_length=1, max_length=50)
    score: int = Field(0, ge=0, description="Rounds won")
    games: int = Field(0, ge=0, description="Rounds finished")


DEFAULT_PROFILES = {
    "player1": PlayerProfile(symbol=DEFAULT_PLAYER1_SYMBOL, name="Player 1"),
    "player2": PlayerProfile(symbol=DEFAULT_PLAYER2_SYMBOL, name="Player 2"),
}


class ScoreBoard:
    """Player profiles and preferences on top of a KeyValueStore."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def load(self, key: str, default: Any) -> Any:
        """Load a JSON value, falling back to ``default`` when missing or unreadable."""
        try:
            saved = self.store.get(key)
            return json.loads(saved) if saved else default
        except (AttributeError, OSError, TypeError, ValueError) as e:
            logger.error(f"Error loading '{key}' from store: {e}")
            return default

    def save(self, key: str, value: Any) -> None:
        try:
            self.store.set(key, json.dumps(value, ensure_ascii=False))
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error saving '{key}' to store: {e}")

    def get_player(self, key: str) -> PlayerProfile:
        if key not in PLAYER_KEYS:
            raise KeyError(f"Unknown player '{key}'")
        default = DEFAULT_PROFILES[key]
        data = self.load(key, None)
        if data is None:
            return default.model_copy()
        try:
            return PlayerProfile(**data)
        except (TypeError, ValidationError) as e:
            logger.error(f"Stored profile '{key}' is invalid, using defaults: {e}")
            return default.model_copy()

    def save_player(self, key: str, profile: PlayerProfile) -> None:
        self.save(key, profile.model_dump())

    def players(self) -> Dict[str, PlayerProfile]:
        return {key: self.get_player(key) for key in PLAYER_KEYS}

    def player_for_mark(self, mark: str) -> Optional[str]:
        for key, profile in self.players().items():
            if profile.symbol == mark:
                return key
        return None

    def record_outcome(self, outcome: GameOutcome) -> None:
        """Count a finished round: both players get a game, the winner also a point."""
        if not outcome.is_over:
            return

        winner_key = None
        if outcome.status == OutcomeStatus.WIN:
            winner_key = self.player_for_mark(outcome.winner)

        for key, profile in self.players().items():
            profile.games += 1
            if key == winner_key:
                profile.score += 1
            self.save_player(key, profile)

        logger.info(f"Recorded {outcome.status.value} (winner: {winner_key})")

    def reset_scores(self) -> None:
        for key, profile in self.players().items():
            profile.score = 0
            profile.games = 0
            self.save_player(key, profile)

    def rename(self, key: str, name: str) -> PlayerProfile:
        profile = self.get_player(key)
        profile.name = name
        self.save_player(key, profile)
        return profile

    def set_symbol(self, key: str, symbol: str) -> PlayerProfile:
        """Change a player's mark; both players must keep different symbols."""
        other_key = PLAYER_KEYS[1] if key == PLAYER_KEYS[0] else PLAYER_KEYS[0]
        if self.get_player(other_key).symbol == symbol:
            raise InvalidConfiguration("Players must have different symbols!")

        profile = self.get_player(key)
        profile.symbol = symbol
        self.save_player(key, profile)
        return profile

    @property
    def difficulty(self) -> Difficulty:
        value = self.load(DIFFICULTY_KEY, settings.DEFAULT_DIFFICULTY)
        try:
            return Difficulty.parse(value)
        except InvalidConfiguration:
            logger.error(f"Stored difficulty '{value}' is invalid, using medium")
            return Difficulty.MEDIUM

    @difficulty.setter
    def difficulty(self, value) -> None:
        self.save(DIFFICULTY_KEY, Difficulty.parse(value).value)

    @property
    def start_option(self) -> str:
        value = self.load(START_OPTION_KEY, DEFAULT_START_OPTION)
        return value if value in START_OPTIONS else DEFAULT_START_OPTION

    @start_option.setter
    def start_option(self, value: str) -> None:
        if value not in START_OPTIONS:
            raise InvalidConfiguration(f"Unknown start option '{value}'")
        self.save(START_OPTION_KEY, value)

    def ai_display_name(self) -> str:
        return f"AI ({self.difficulty.value})"
