"""
SQL implementation of user repository.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select

from app.core.exceptions import ValidationError
from app.infrastructure.local.database import UserORM, dialect_insert, get_session_factory
from app.interfaces.user_repository import IUserRepository
from app.models.user import User
from app.utils.datetime_utils import ensure_utc, now_utc


class SqliteUserRepository(IUserRepository):
    """SQL implementation of user repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: UserORM) -> User:
        return User(
            id=orm.id,
            line_user_id=orm.line_user_id,
            display_name=orm.display_name,
            picture_url=orm.picture_url,
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    async def upsert(
        self,
        line_user_id: str,
        display_name: Optional[str],
        picture_url: Optional[str],
    ) -> User:
        if not line_user_id:
            raise ValidationError("Missing line_user_id")

        async with self._session_factory() as session:
            now = now_utc()
            stmt = dialect_insert(session, UserORM.__table__).values(
                line_user_id=line_user_id,
                display_name=display_name,
                picture_url=picture_url,
                created_at=now,
                updated_at=now,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["line_user_id"],
                set_={
                    "display_name": stmt.excluded.display_name,
                    "picture_url": stmt.excluded.picture_url,
                    "updated_at": now,
                },
            ).returning(*UserORM.__table__.columns)

            result = await session.execute(stmt)
            row = result.mappings().one()
            await session.commit()
            user = User(**row)
            user.created_at = ensure_utc(user.created_at)
            user.updated_at = ensure_utc(user.updated_at)
            return user

    async def get_by_line_user_id(self, line_user_id: str) -> Optional[User]:
        if not line_user_id:
            return None
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserORM).where(UserORM.line_user_id == line_user_id)
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None
