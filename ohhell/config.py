"""Application configuration using Pydantic settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ohhell.constants import (
    MAX_PLAYERS,
    MIN_PLAYERS,
    SCORE_MISS_PER_TRICK,
    SCORE_SUCCESS_BASE,
    SCORE_SUCCESS_PER_TRICK,
)
from ohhell.models.enums import TrumpRule


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")  # noqa: S104
    port: int = Field(default=8000, description="Server port")
    environment: str = Field(default="development", description="Environment")
    frontend_url: str = Field(default="http://localhost:5173", description="Frontend URL")
    log_level: str = Field(default="INFO", description="Log level for the ohhell loggers")

    # Game Configuration
    min_players: int = Field(default=MIN_PLAYERS, ge=2, description="Minimum players to start")
    max_players: int = Field(default=MAX_PLAYERS, le=52, description="Maximum players per game")
    trump_rule: TrumpRule = Field(
        default=TrumpRule.ALWAYS_PLAYABLE,
        description="Whether trump may be played while holding the led suit",
    )
    enforce_hook_rule: bool = Field(
        default=True, description="Forbid the last bid from making bids total the trick count"
    )

    # Scoring
    score_success_base: int = Field(default=SCORE_SUCCESS_BASE, ge=0)
    score_success_per_trick: int = Field(default=SCORE_SUCCESS_PER_TRICK, ge=0)
    score_miss_per_trick: int = Field(default=SCORE_MISS_PER_TRICK, ge=0)

    # Bot Configuration
    enable_bots: bool = Field(default=True, description="Allow seating bot players")
    auto_play_bots: bool = Field(default=True, description="Play bot turns automatically")


# Global settings instance
settings = Settings()
