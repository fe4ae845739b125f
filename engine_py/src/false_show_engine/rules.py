"""
Game rule configuration and validation.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .constants import (
    DEFAULT_SCORE_LIMIT, MAX_PLAYERS, MIN_PLAYERS,
    PENALTY_MODE_DRAW, WRONG_SHOW_PENALTY
)


class GameSettings(BaseModel):
    """Configuration for game rules and settings."""

    score_limit: int = Field(
        default=DEFAULT_SCORE_LIMIT,
        ge=1,
        description="Cumulative score at which a player is eliminated"
    )
    min_players: int = Field(
        default=MIN_PLAYERS,
        ge=MIN_PLAYERS,
        le=MAX_PLAYERS,
        description="Minimum number of players required to start"
    )
    max_players: int = Field(
        default=MAX_PLAYERS,
        ge=MIN_PLAYERS,
        le=MAX_PLAYERS,
        description="Maximum number of players the deck can serve"
    )
    wrong_show_penalty: int = Field(
        default=WRONG_SHOW_PENALTY,
        ge=0,
        description="Flat score added to a player whose Show call is wrong"
    )
    penalty_mode: Literal['draw', 'choice'] = Field(
        default=PENALTY_MODE_DRAW,
        description="'draw' draws a penalty card automatically, 'choice' lets the player pick deck or pickup"
    )
    seed: Optional[int] = Field(
        default=None,
        description="Seed for deterministic shuffles and starting players"
    )

    @field_validator('max_players')
    @classmethod
    def validate_max_players(cls, v, info):
        """Validate maximum players doesn't fall below minimum."""
        min_players = info.data.get('min_players', MIN_PLAYERS)
        if v < min_players:
            raise ValueError(f'max_players ({v}) must be >= min_players ({min_players})')
        return v

    def validate_player_count(self, player_count: int) -> bool:
        """Check if a player count is valid for this configuration."""
        return self.min_players <= player_count <= self.max_players


# Default configuration instance
default_settings = GameSettings()


def create_settings(**overrides) -> GameSettings:
    """Create GameSettings with optional overrides."""
    config_dict = default_settings.model_dump()
    config_dict.update(overrides)
    return GameSettings(**config_dict)
