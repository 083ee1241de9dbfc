"""
SQL implementation of Comment repository.

Every listing is a single SELECT: like/reply counts and the viewer-relative
flags are computed as correlated subqueries next to the comment columns.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import delete, desc, func, literal, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from app.core.exceptions import ForbiddenError, NotFoundError
from app.core.logger import setup_logger
from app.infrastructure.local.database import (
    CommentORM,
    LikeORM,
    UserORM,
    get_session_factory,
    is_foreign_key_violation,
)
from app.interfaces.comment_repository import ICommentRepository
from app.models.comment import CommentSort, CommentView
from app.models.user import User
from app.utils.datetime_utils import ensure_utc, now_utc

logger = setup_logger(__name__)


def _view_columns(viewer_id: Optional[int], count_replies: bool = True) -> list:
    """Columns of a CommentView for the given viewer."""
    like_count = (
        select(func.count())
        .select_from(LikeORM)
        .where(LikeORM.comment_id == CommentORM.id)
        .correlate(CommentORM)
        .scalar_subquery()
    )

    if count_replies:
        reply = aliased(CommentORM)
        reply_count = (
            select(func.count())
            .select_from(reply)
            .where(reply.parent_id == CommentORM.id)
            .correlate(CommentORM)
            .scalar_subquery()
        )
    else:
        # Only one level of nesting is shown
        reply_count = literal(0)

    if viewer_id is None:
        is_liked = literal(False)
        is_owner = literal(False)
    else:
        is_liked = (
            select(LikeORM.comment_id)
            .where(LikeORM.comment_id == CommentORM.id, LikeORM.user_id == viewer_id)
            .correlate(CommentORM)
            .exists()
        )
        is_owner = CommentORM.user_id == viewer_id

    return [
        CommentORM.id,
        CommentORM.parent_id,
        CommentORM.content,
        CommentORM.created_at,
        CommentORM.updated_at,
        UserORM.display_name,
        UserORM.picture_url,
        like_count.label("like_count"),
        reply_count.label("reply_count"),
        is_liked.label("is_liked"),
        is_owner.label("is_owner"),
        (CommentORM.created_at < CommentORM.updated_at).label("is_edited"),
    ]


def _view_query(viewer_id: Optional[int], count_replies: bool = True):
    return select(*_view_columns(viewer_id, count_replies)).join(
        UserORM, CommentORM.user_id == UserORM.id
    )


class SqliteCommentRepository(ICommentRepository):
    """SQL implementation of comment repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    async def _fetch_views(self, session: AsyncSession, query) -> list[CommentView]:
        result = await session.execute(query)
        views = []
        for row in result.mappings().all():
            view = CommentView(**row)
            view.created_at = ensure_utc(view.created_at)
            view.updated_at = ensure_utc(view.updated_at)
            views.append(view)
        return views

    async def list_top_level(
        self,
        viewer_id: Optional[int],
        limit: int = 10,
        offset: int = 0,
        sort: CommentSort = CommentSort.NEWEST,
    ) -> list[CommentView]:
        """List top-level comments with counts and viewer flags."""
        query = _view_query(viewer_id).where(CommentORM.parent_id.is_(None))
        if sort == CommentSort.TOP:
            query = query.order_by(
                desc("like_count"),
                CommentORM.created_at.desc(),
                CommentORM.id.desc(),
            )
        else:
            query = query.order_by(CommentORM.created_at.desc(), CommentORM.id.desc())

        async with self._session_factory() as session:
            return await self._fetch_views(session, query.limit(limit).offset(offset))

    async def list_replies(
        self,
        parent_id: int,
        viewer_id: Optional[int],
        limit: int = 10,
        offset: int = 0,
    ) -> list[CommentView]:
        """List replies of a comment, ordered by created_at ASC."""
        query = (
            _view_query(viewer_id, count_replies=False)
            .where(CommentORM.parent_id == parent_id)
            .order_by(CommentORM.created_at.asc(), CommentORM.id.asc())
            .limit(limit)
            .offset(offset)
        )
        async with self._session_factory() as session:
            return await self._fetch_views(session, query)

    async def exists(self, comment_id: int) -> bool:
        async with self._session_factory() as session:
            result = await session.execute(
                select(CommentORM.id).where(CommentORM.id == comment_id)
            )
            return result.first() is not None

    async def create(
        self, author: User, content: str, parent_id: Optional[int] = None
    ) -> CommentView:
        """Create a comment. A dangling parent_id is reported as NotFoundError."""
        async with self._session_factory() as session:
            now = now_utc()
            orm = CommentORM(
                user_id=author.id,
                parent_id=parent_id,
                content=content,
                created_at=now,
                updated_at=now,
            )
            session.add(orm)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                if is_foreign_key_violation(e):
                    raise NotFoundError("Parent comment not found") from e
                raise

            logger.info(f"Comment {orm.id} created by user {author.id} (parent={parent_id})")
            # A fresh comment has no likes, no replies and no edits yet
            return CommentView(
                id=orm.id,
                parent_id=orm.parent_id,
                content=orm.content,
                created_at=now,
                updated_at=now,
                display_name=author.display_name,
                picture_url=author.picture_url,
                like_count=0,
                reply_count=0,
                is_liked=False,
                is_owner=True,
                is_edited=False,
            )

    async def update(self, comment_id: int, user_id: int, content: str) -> CommentView:
        """Update content; missing comment and foreign owner both raise ForbiddenError.

        The returned view is read inside the same transaction as the UPDATE.
        """
        async with self._session_factory() as session:
            result = await session.execute(
                update(CommentORM)
                .where(CommentORM.id == comment_id, CommentORM.user_id == user_id)
                .values(content=content, updated_at=now_utc())
            )
            views = []
            if result.rowcount:
                views = await self._fetch_views(
                    session, _view_query(user_id).where(CommentORM.id == comment_id)
                )
            if not views:
                await session.rollback()
                raise ForbiddenError("Permission denied or Comment not found")
            await session.commit()

        logger.info(f"Comment {comment_id} edited by user {user_id}")
        return views[0]

    async def delete(self, comment_id: int, user_id: int) -> None:
        """Delete a comment; its replies and likes go with it (ON DELETE CASCADE)."""
        async with self._session_factory() as session:
            result = await session.execute(
                delete(CommentORM).where(
                    CommentORM.id == comment_id, CommentORM.user_id == user_id
                )
            )
            if result.rowcount == 0:
                await session.rollback()
                raise ForbiddenError("Permission denied or Comment not found")
            await session.commit()
            logger.info(f"Comment {comment_id} deleted by user {user_id}")
