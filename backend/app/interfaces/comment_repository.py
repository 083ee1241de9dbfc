"""
Comment repository interface.

Defines the contract for comment persistence and viewer-scoped listings.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from app.models.comment import CommentSort, CommentView
from app.models.user import User


class ICommentRepository(ABC):
    """Abstract interface for comment persistence."""

    @abstractmethod
    async def list_top_level(
        self,
        viewer_id: Optional[int],
        limit: int = 10,
        offset: int = 0,
        sort: CommentSort = CommentSort.NEWEST,
    ) -> list[CommentView]:
        """List top-level comments, newest first or by like count."""
        pass

    @abstractmethod
    async def list_replies(
        self,
        parent_id: int,
        viewer_id: Optional[int],
        limit: int = 10,
        offset: int = 0,
    ) -> list[CommentView]:
        """List replies of a comment, oldest first."""
        pass

    @abstractmethod
    async def exists(self, comment_id: int) -> bool:
        """Check if a comment exists."""
        pass

    @abstractmethod
    async def create(
        self, author: User, content: str, parent_id: Optional[int] = None
    ) -> CommentView:
        """Create a comment or reply."""
        pass

    @abstractmethod
    async def update(self, comment_id: int, user_id: int, content: str) -> CommentView:
        """Update a comment's content (author only)."""
        pass

    @abstractmethod
    async def delete(self, comment_id: int, user_id: int) -> None:
        """Delete a comment (author only)."""
        pass
