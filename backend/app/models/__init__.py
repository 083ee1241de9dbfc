"""Pydantic models (schemas) for the application."""

from app.models.comment import (
    CommentCreate,
    CommentSort,
    CommentUpdate,
    CommentView,
    LikeRequest,
    LikeState,
)
from app.models.game import GameConfig, GameData, GameSettingsUpdate, SequenceStep
from app.models.user import User, UserLogin

__all__ = [
    # Comments
    "CommentCreate",
    "CommentSort",
    "CommentUpdate",
    "CommentView",
    "LikeRequest",
    "LikeState",
    # Game
    "GameConfig",
    "GameData",
    "GameSettingsUpdate",
    "SequenceStep",
    # Users
    "User",
    "UserLogin",
]
