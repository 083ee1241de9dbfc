"""
SQL implementation of game config repository.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select

from app.infrastructure.local.database import GameConfigORM, get_session_factory
from app.interfaces.game_config_repository import IGameConfigRepository
from app.models.game import GAME_CONFIG_ID, GameConfig, GameSettingsUpdate


class SqliteGameConfigRepository(IGameConfigRepository):
    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: GameConfigORM) -> GameConfig:
        return GameConfig(
            id=orm.id,
            start_num=orm.start_num,
            end_num=orm.end_num,
            special_num=orm.special_num,
            magic_word=orm.magic_word,
            aho_text=orm.aho_text,
            aho_image_url=orm.aho_image_url,
            aho_sound_url=orm.aho_sound_url,
        )

    async def get(self) -> Optional[GameConfig]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(GameConfigORM).where(GameConfigORM.id == GAME_CONFIG_ID)
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def save(self, update: GameSettingsUpdate) -> GameConfig:
        """Overwrite every field of the config row, creating it if missing."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(GameConfigORM).where(GameConfigORM.id == GAME_CONFIG_ID)
            )
            orm = result.scalar_one_or_none()
            if orm is None:
                orm = GameConfigORM(id=GAME_CONFIG_ID)
                session.add(orm)

            orm.start_num = update.start_num
            orm.end_num = update.end_num
            orm.special_num = update.special_num
            orm.magic_word = update.magic_word
            orm.aho_text = update.aho_text
            orm.aho_image_url = update.aho_image_url
            orm.aho_sound_url = update.aho_sound_url

            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)
