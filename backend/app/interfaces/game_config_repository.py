"""
Game config repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from app.models.game import GameConfig, GameSettingsUpdate


class IGameConfigRepository(ABC):
    @abstractmethod
    async def get(self) -> Optional[GameConfig]:
        pass

    @abstractmethod
    async def save(self, update: GameSettingsUpdate) -> GameConfig:
        pass
