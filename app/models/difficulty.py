from enum import Enum

from app.core.exceptions import InvalidConfiguration


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value) -> "Difficulty":
        """Accept a Difficulty or its string tag, rejecting anything else."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvalidConfiguration(
                f"Unknown difficulty '{value}', expected one of "
                f"{', '.join(d.value for d in cls)}"
            )
