"""
Unit tests for GameConfig repository.
"""

import pytest

from app.infrastructure.local.database import init_db
from app.models.game import DEFAULT_GAME_CONFIG, GameSettingsUpdate


@pytest.mark.asyncio
async def test_seeded_defaults(game_config_repo):
    config = await game_config_repo.get()

    assert config.id == 1
    assert config.start_num == DEFAULT_GAME_CONFIG["start_num"]
    assert config.end_num == DEFAULT_GAME_CONFIG["end_num"]
    assert config.special_num == DEFAULT_GAME_CONFIG["special_num"]
    assert config.magic_word == "オモロー"
    assert config.aho_text is None


@pytest.mark.asyncio
async def test_seed_is_idempotent(engine, game_config_repo):
    await game_config_repo.save(
        GameSettingsUpdate(start_num=5, end_num=9, special_num=2, magic_word="x")
    )

    await init_db(engine, seed_game_config=True)

    config = await game_config_repo.get()
    assert config.start_num == 5


@pytest.mark.asyncio
async def test_save_overwrites_every_field(game_config_repo):
    saved = await game_config_repo.save(
        GameSettingsUpdate(
            start_num=10,
            end_num=20,
            special_num=4,
            magic_word="Yay",
            aho_text="Aho!",
            aho_image_url="https://example.com/aho.png",
            aho_sound_url=None,
        )
    )

    assert saved.start_num == 10
    assert saved.aho_text == "Aho!"
    assert saved.aho_sound_url is None
    assert await game_config_repo.get() == saved


@pytest.mark.asyncio
async def test_save_creates_missing_row(engine, session_factory):
    from app.infrastructure.local.database import Base
    from app.infrastructure.local.game_config_repository import SqliteGameConfigRepository

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await init_db(engine, seed_game_config=False)
    repo = SqliteGameConfigRepository(session_factory=session_factory)
    assert await repo.get() is None

    saved = await repo.save(GameSettingsUpdate(start_num=1, end_num=3, special_num=3, magic_word="end"))

    assert saved.id == 1
    assert (await repo.get()).end_num == 3
