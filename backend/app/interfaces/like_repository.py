"""
Like repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from app.models.comment import LikeState


class ILikeRepository(ABC):
    """Abstract interface for the comment like ledger."""

    @abstractmethod
    async def toggle(self, comment_id: int, user_id: int) -> LikeState:
        """Like the comment if the user has not liked it yet, otherwise unlike it."""
        pass
