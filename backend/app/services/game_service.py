"""
Nabeatsu game service.

Builds the call sequence from the stored config and validates admin
settings updates.
"""

from __future__ import annotations

from typing import Iterator, Optional

from app.core.exceptions import NotFoundError, ValidationError
from app.core.logger import setup_logger
from app.interfaces.game_config_repository import IGameConfigRepository
from app.models.game import (
    ENDING_SOUND_URL,
    GameConfig,
    GameConfigSummary,
    GameData,
    GameSettingsUpdate,
    SequenceStep,
)

logger = setup_logger(__name__)


def is_aho(number: int, special_num: int) -> bool:
    """A number goes aho when it is a multiple of special_num or contains its digits."""
    if special_num > 0 and number % special_num == 0:
        return True
    return str(special_num) in str(number)


def iter_sequence(config: GameConfig) -> Iterator[SequenceStep]:
    """Yield every call from start_num to end_num, then the closing magic word."""
    assets = config.callout_assets()
    for number in range(config.start_num, config.end_num + 1):
        aho = is_aho(number, config.special_num)
        yield SequenceStep(
            step=number,
            value=str(number),
            is_aho=aho,
            assets=dict(assets) if aho else {},
        )

    yield SequenceStep(
        step=config.end_num + 1,
        value=config.magic_word,
        is_aho=True,
        assets={"sound": ENDING_SOUND_URL},
    )


def build_sequence(config: GameConfig) -> list[SequenceStep]:
    return list(iter_sequence(config))


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value


class GameService:
    """Service for the game data endpoint and admin settings."""

    def __init__(self, config_repo: IGameConfigRepository):
        self.config_repo = config_repo

    async def get_game_data(self) -> GameData:
        config = await self.config_repo.get()
        if not config:
            raise NotFoundError("Config not found")

        return GameData(
            config=GameConfigSummary(
                start=config.start_num,
                end=config.end_num,
                special_num=config.special_num,
                magic_word=config.magic_word,
                aho_text=config.aho_text,
                aho_image_url=config.aho_image_url,
                aho_sound_url=config.aho_sound_url,
            ),
            sequence=build_sequence(config),
        )

    async def update_settings(self, update: GameSettingsUpdate) -> GameConfig:
        """Validate and overwrite the game settings.

        start_num, end_num and special_num must all be given and non-zero,
        start_num must be below end_num and special_num positive. Blank asset
        fields are cleared.
        """
        if not update.start_num or not update.end_num or not update.special_num:
            raise ValidationError("Start, End, and Special Num are required")
        if update.start_num >= update.end_num:
            raise ValidationError("Start Number must be smaller than End Number")
        if update.special_num <= 0:
            raise ValidationError("Special Number must be greater than 0")

        normalized = update.model_copy(
            update={
                "aho_text": _blank_to_none(update.aho_text),
                "aho_image_url": _blank_to_none(update.aho_image_url),
                "aho_sound_url": _blank_to_none(update.aho_sound_url),
            }
        )
        saved = await self.config_repo.save(normalized)
        logger.info(
            f"Game settings updated: {saved.start_num}..{saved.end_num}, special={saved.special_num}"
        )
        return saved
