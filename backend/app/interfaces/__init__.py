"""Abstract interfaces for infrastructure abstraction."""

from app.interfaces.comment_repository import ICommentRepository
from app.interfaces.game_config_repository import IGameConfigRepository
from app.interfaces.like_repository import ILikeRepository
from app.interfaces.storage_provider import IStorageProvider
from app.interfaces.user_repository import IUserRepository

__all__ = [
    "ICommentRepository",
    "IGameConfigRepository",
    "ILikeRepository",
    "IStorageProvider",
    "IUserRepository",
]
