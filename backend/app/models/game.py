"""
Nabeatsu game model definitions.

The game counts from start_num to end_num and "goes aho" on every number
that is a multiple of special_num or contains its digits, then finishes by
shouting the magic word.
"""

from typing import Optional

from pydantic import BaseModel, Field

GAME_CONFIG_ID = 1

DEFAULT_GAME_CONFIG = {
    "start_num": 1,
    "end_num": 41,
    "special_num": 3,
    "magic_word": "オモロー",
}

# Played on the closing magic word step
ENDING_SOUND_URL = "https://www.myinstants.com/media/sounds/meme-de-creditos-finales.mp3"


class GameConfig(BaseModel):
    """Stored game configuration."""

    id: int = GAME_CONFIG_ID
    start_num: int
    end_num: int
    special_num: int
    magic_word: Optional[str] = None
    aho_text: Optional[str] = None
    aho_image_url: Optional[str] = None
    aho_sound_url: Optional[str] = None

    class Config:
        from_attributes = True

    def callout_assets(self) -> dict[str, str]:
        """Assets attached to an aho step; unconfigured ones are left out."""
        assets = {
            "text": self.aho_text,
            "image": self.aho_image_url,
            "sound": self.aho_sound_url,
        }
        return {key: value for key, value in assets.items() if value}


class GameSettingsUpdate(BaseModel):
    """Admin settings payload. Presence and ranges are checked by GameService."""

    start_num: Optional[int] = None
    end_num: Optional[int] = None
    special_num: Optional[int] = None
    magic_word: Optional[str] = None
    aho_text: Optional[str] = None
    aho_image_url: Optional[str] = None
    aho_sound_url: Optional[str] = None


class SequenceStep(BaseModel):
    """One call in the generated sequence."""

    step: int
    value: Optional[str] = None
    is_aho: bool
    assets: dict[str, str] = Field(default_factory=dict)


class GameConfigSummary(BaseModel):
    """Config block returned alongside the sequence."""

    start: int
    end: int
    special_num: int
    magic_word: Optional[str] = None
    aho_text: Optional[str] = None
    aho_image_url: Optional[str] = None
    aho_sound_url: Optional[str] = None


class GameData(BaseModel):
    """Response for GET /game-data."""

    config: GameConfigSummary
    sequence: list[SequenceStep]


class SettingsUpdateResponse(BaseModel):
    """Response for PUT /settings."""

    message: str
    data: GameConfig
