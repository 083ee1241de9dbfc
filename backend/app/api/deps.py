"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the infrastructure
implementations and the services built on top of them.
"""

from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends, Request

from app.core.config import get_settings
from app.interfaces.comment_repository import ICommentRepository
from app.interfaces.game_config_repository import IGameConfigRepository
from app.interfaces.like_repository import ILikeRepository
from app.interfaces.storage_provider import IStorageProvider
from app.interfaces.user_repository import IUserRepository
from app.services.comment_service import CommentService
from app.services.game_service import GameService


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_user_repository() -> IUserRepository:
    """Get user repository instance."""
    from app.infrastructure.local.user_repository import SqliteUserRepository
    return SqliteUserRepository()


@lru_cache()
def get_comment_repository() -> ICommentRepository:
    """Get comment repository instance."""
    from app.infrastructure.local.comment_repository import SqliteCommentRepository
    return SqliteCommentRepository()


@lru_cache()
def get_like_repository() -> ILikeRepository:
    """Get like repository instance."""
    from app.infrastructure.local.like_repository import SqliteLikeRepository
    return SqliteLikeRepository()


@lru_cache()
def get_game_config_repository() -> IGameConfigRepository:
    """Get game config repository instance."""
    from app.infrastructure.local.game_config_repository import SqliteGameConfigRepository
    return SqliteGameConfigRepository()


@lru_cache()
def get_storage_provider() -> IStorageProvider:
    """Get storage provider instance."""
    from app.infrastructure.local.storage_provider import LocalStorageProvider
    return LocalStorageProvider(get_settings().UPLOAD_DIR)


# ===========================================
# Service Dependencies
# ===========================================


def get_comment_service(
    user_repo: IUserRepository = Depends(get_user_repository),
    comment_repo: ICommentRepository = Depends(get_comment_repository),
    like_repo: ILikeRepository = Depends(get_like_repository),
) -> CommentService:
    return CommentService(user_repo, comment_repo, like_repo)


def get_game_service(
    config_repo: IGameConfigRepository = Depends(get_game_config_repository),
) -> GameService:
    return GameService(config_repo)


# ===========================================
# Identity
# ===========================================


def get_line_user_id(request: Request) -> Optional[str]:
    """
    LINE user id sent as a request header.

    Accepted as "line_user_id" or "line-user-id"; proxies that drop
    underscored headers only pass the latter.
    """
    return request.headers.get("line_user_id") or request.headers.get("line-user-id") or None


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

UserRepo = Annotated[IUserRepository, Depends(get_user_repository)]
StorageProvider = Annotated[IStorageProvider, Depends(get_storage_provider)]
CommentSvc = Annotated[CommentService, Depends(get_comment_service)]
GameSvc = Annotated[GameService, Depends(get_game_service)]
LineUserId = Annotated[Optional[str], Depends(get_line_user_id)]
