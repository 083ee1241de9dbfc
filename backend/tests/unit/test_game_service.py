"""
Unit tests for the Nabeatsu game service.
"""

from unittest.mock import AsyncMock

import pytest

from app.core.exceptions import NotFoundError, ValidationError
from app.models.game import ENDING_SOUND_URL, GameConfig, GameSettingsUpdate
from app.services.game_service import GameService, build_sequence, is_aho, iter_sequence


def _config(**overrides) -> GameConfig:
    values = {"start_num": 1, "end_num": 3, "special_num": 3, "magic_word": "オモロー"}
    values.update(overrides)
    return GameConfig(**values)


class TestIsAho:
    def test_multiples(self):
        assert is_aho(3, 3)
        assert is_aho(6, 3)
        assert not is_aho(4, 3)

    def test_digit_rule(self):
        assert is_aho(13, 3)
        assert is_aho(31, 3)
        assert not is_aho(14, 3)

    def test_multi_digit_special(self):
        assert is_aho(112, 12)
        assert not is_aho(21, 12)


class TestSequence:
    def test_short_sequence(self):
        sequence = build_sequence(_config())

        assert [(s.step, s.value, s.is_aho) for s in sequence] == [
            (1, "1", False),
            (2, "2", False),
            (3, "3", True),
            (4, "オモロー", True),
        ]
        assert sequence[-1].assets == {"sound": ENDING_SOUND_URL}

    def test_assets_only_on_aho_steps(self):
        config = _config(end_num=4, aho_text="Aho!", aho_sound_url="https://example.com/a.mp3")

        sequence = build_sequence(config)

        assert sequence[0].assets == {}
        assert sequence[2].assets == {"text": "Aho!", "sound": "https://example.com/a.mp3"}
        assert sequence[3].assets == {}

    def test_default_range_has_digit_calls(self):
        sequence = build_sequence(_config(end_num=41))

        by_step = {s.step: s for s in sequence}
        assert by_step[13].is_aho
        assert by_step[35].is_aho
        assert not by_step[40].is_aho
        assert by_step[42].value == "オモロー"
        assert len(sequence) == 42

    def test_is_lazy(self):
        steps = iter_sequence(_config(end_num=10**9))

        assert next(steps).step == 1
        assert next(steps).step == 2


class TestGetGameData:
    @pytest.mark.asyncio
    async def test_returns_config_and_sequence(self):
        repo = AsyncMock()
        repo.get.return_value = _config(aho_image_url="https://example.com/aho.png")

        data = await GameService(repo).get_game_data()

        assert data.config.start == 1
        assert data.config.end == 3
        assert data.config.aho_image_url == "https://example.com/aho.png"
        assert data.sequence[2].assets == {"image": "https://example.com/aho.png"}

    @pytest.mark.asyncio
    async def test_missing_config(self):
        repo = AsyncMock()
        repo.get.return_value = None

        with pytest.raises(NotFoundError):
            await GameService(repo).get_game_data()


class TestUpdateSettings:
    @pytest.mark.asyncio
    async def test_saves_and_clears_blank_assets(self):
        repo = AsyncMock()
        repo.save.side_effect = lambda update: GameConfig(**update.model_dump())

        saved = await GameService(repo).update_settings(
            GameSettingsUpdate(
                start_num=1,
                end_num=30,
                special_num=5,
                magic_word="Done",
                aho_text="  ",
                aho_image_url="",
                aho_sound_url="https://example.com/s.mp3",
            )
        )

        assert saved.end_num == 30
        assert saved.aho_text is None
        assert saved.aho_image_url is None
        assert saved.aho_sound_url == "https://example.com/s.mp3"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "values",
        [
            {"start_num": None, "end_num": 10, "special_num": 3},
            {"start_num": 1, "end_num": 10, "special_num": 0},
            {"start_num": 10, "end_num": 10, "special_num": 3},
            {"start_num": 11, "end_num": 10, "special_num": 3},
            {"start_num": 1, "end_num": 10, "special_num": -3},
        ],
    )
    async def test_rejects_invalid_ranges(self, values):
        repo = AsyncMock()

        with pytest.raises(ValidationError):
            await GameService(repo).update_settings(GameSettingsUpdate(magic_word="x", **values))

        repo.save.assert_not_called()
