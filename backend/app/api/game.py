"""
Nabeatsu game endpoints.
"""

from fastapi import APIRouter

from app.api.deps import GameSvc
from app.models.game import GameData, GameSettingsUpdate, SettingsUpdateResponse

router = APIRouter()


@router.get("/game-data", response_model=GameData)
async def get_game_data(service: GameSvc):
    """Current settings plus the full call sequence."""
    return await service.get_game_data()


@router.put("/settings", response_model=SettingsUpdateResponse)
async def update_settings(payload: GameSettingsUpdate, service: GameSvc):
    """Overwrite the game settings (admin screen)."""
    config = await service.update_settings(payload)
    return SettingsUpdateResponse(message="Settings updated successfully", data=config)
