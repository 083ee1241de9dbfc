"""
Comment board service.

Resolves the caller's LINE user id to a stored user and applies the board
rules on top of the comment and like repositories. The id is trusted as
given; verifying it is the LIFF client's job.
"""

from __future__ import annotations

from typing import Optional

from app.core.exceptions import AuthenticationError, NotFoundError, ValidationError
from app.core.logger import setup_logger
from app.interfaces.comment_repository import ICommentRepository
from app.interfaces.like_repository import ILikeRepository
from app.interfaces.user_repository import IUserRepository
from app.models.comment import COMMENT_MAX_LENGTH, CommentSort, CommentView, LikeState
from app.models.user import User

logger = setup_logger(__name__)


def validate_content(content: Optional[str]) -> str:
    if not content or len(content) > COMMENT_MAX_LENGTH:
        raise ValidationError("Content is empty or too long")
    return content


def validate_page(limit: int, offset: int) -> None:
    if limit < 0 or offset < 0:
        raise ValidationError("Invalid limit or offset")


class CommentService:
    """Service for comments, replies and likes."""

    def __init__(
        self,
        user_repo: IUserRepository,
        comment_repo: ICommentRepository,
        like_repo: ILikeRepository,
    ):
        self.user_repo = user_repo
        self.comment_repo = comment_repo
        self.like_repo = like_repo

    async def resolve_user(self, line_user_id: Optional[str]) -> User:
        """Acting user for a write; an unknown or missing id is an authentication failure."""
        user = await self.user_repo.get_by_line_user_id(line_user_id) if line_user_id else None
        if not user:
            raise AuthenticationError("User not found")
        return user

    async def list_top_level(
        self,
        line_user_id: Optional[str],
        limit: int = 10,
        offset: int = 0,
        sort: CommentSort = CommentSort.NEWEST,
    ) -> list[CommentView]:
        """List top-level comments.

        Without an identity the listing is anonymous (no is_liked / is_owner).
        An identity that is given but unknown is rejected.
        """
        validate_page(limit, offset)
        viewer_id = None
        if line_user_id:
            viewer_id = (await self.resolve_user(line_user_id)).id
        return await self.comment_repo.list_top_level(viewer_id, limit=limit, offset=offset, sort=sort)

    async def list_replies(
        self,
        parent_id: int,
        line_user_id: Optional[str],
        limit: int = 10,
        offset: int = 0,
    ) -> list[CommentView]:
        """List replies of a comment. An unknown identity falls back to an anonymous view."""
        validate_page(limit, offset)
        if not await self.comment_repo.exists(parent_id):
            raise NotFoundError("Parent comment not found")

        viewer = await self.user_repo.get_by_line_user_id(line_user_id) if line_user_id else None
        return await self.comment_repo.list_replies(
            parent_id, viewer.id if viewer else None, limit=limit, offset=offset
        )

    async def create(
        self, line_user_id: Optional[str], content: str, parent_id: Optional[int] = None
    ) -> CommentView:
        validate_content(content)
        user = await self.resolve_user(line_user_id)
        return await self.comment_repo.create(user, content, parent_id=parent_id)

    async def update(self, comment_id: int, line_user_id: Optional[str], content: str) -> CommentView:
        validate_content(content)
        user = await self.resolve_user(line_user_id)
        return await self.comment_repo.update(comment_id, user.id, content)

    async def delete(self, comment_id: int, line_user_id: Optional[str]) -> None:
        user = await self.resolve_user(line_user_id)
        await self.comment_repo.delete(comment_id, user.id)

    async def toggle_like(self, comment_id: int, line_user_id: Optional[str]) -> LikeState:
        user = await self.resolve_user(line_user_id)
        return await self.like_repo.toggle(comment_id, user.id)
