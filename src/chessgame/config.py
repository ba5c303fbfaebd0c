"""Engine configuration.

Settings are read from ``CHESSGAME_*`` environment variables (or a
``.env.chessgame`` file).  Every field has a default, so the engine works
with no configuration at all.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CHESSGAME_",
        env_file=".env.chessgame",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Half-moves without a capture or pawn move before the game is drawn.
    fifty_move_halfmoves: int = Field(default=50, ge=1)
    # Occurrences of one position that end the game as a draw.
    repetition_limit: int = Field(default=3, ge=2)

    log_level: str = "WARNING"


@lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
    """Process-wide settings, loaded once."""
    return EngineSettings()
