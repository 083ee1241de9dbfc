"""
SQL implementation of the Like repository.
"""

from __future__ import annotations

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.core.logger import setup_logger
from app.infrastructure.local.database import (
    LikeORM,
    dialect_insert,
    get_session_factory,
    is_foreign_key_violation,
)
from app.interfaces.like_repository import ILikeRepository
from app.models.comment import LikeState
from app.utils.datetime_utils import now_utc

logger = setup_logger(__name__)


class SqliteLikeRepository(ILikeRepository):
    """SQL implementation of like repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    async def _count(self, session: AsyncSession, comment_id: int) -> int:
        result = await session.execute(
            select(func.count()).select_from(LikeORM).where(LikeORM.comment_id == comment_id)
        )
        return result.scalar() or 0

    async def toggle(self, comment_id: int, user_id: int) -> LikeState:
        """
        Toggle a like without a separate existence check.

        The DELETE decides the direction: removing a row means the user had
        liked the comment. Otherwise the like is inserted with ON CONFLICT DO
        NOTHING, so a concurrent toggle that inserted first cannot produce a
        duplicate row or a constraint error.
        """
        async with self._session_factory() as session:
            result = await session.execute(
                delete(LikeORM).where(
                    LikeORM.comment_id == comment_id, LikeORM.user_id == user_id
                )
            )
            if result.rowcount:
                is_liked = False
            else:
                stmt = (
                    dialect_insert(session, LikeORM.__table__)
                    .values(comment_id=comment_id, user_id=user_id, created_at=now_utc())
                    .on_conflict_do_nothing(index_elements=["comment_id", "user_id"])
                )
                try:
                    await session.execute(stmt)
                except IntegrityError as e:
                    await session.rollback()
                    if is_foreign_key_violation(e):
                        raise NotFoundError("Comment not found") from e
                    raise
                is_liked = True
            await session.commit()

            like_count = await self._count(session, comment_id)
            logger.info(
                f"User {user_id} {'liked' if is_liked else 'unliked'} comment {comment_id}"
            )
            return LikeState(is_liked=is_liked, like_count=like_count)
