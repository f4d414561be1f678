from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
import os

from app.models.difficulty import Difficulty


class Settings(BaseSettings):
    DEBUG: bool = os.getenv("DEBUG", "True") == "True"
    DEFAULT_DIFFICULTY: Difficulty = Difficulty.MEDIUM
    THINKING_DELAY_ENABLED: bool = os.getenv("THINKING_DELAY_ENABLED", "False") == "True"
    RANDOM_SEED: Optional[int] = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
