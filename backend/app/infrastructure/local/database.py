"""
Database configuration and ORM models.

This module defines the SQLAlchemy ORM models, the process-wide async engine
and database initialization. SQLite (aiosqlite) is used locally; any async
SQLAlchemy URL such as postgresql+asyncpg works in production.
"""

from functools import lru_cache

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    event,
    insert,
    select,
)
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from app.core.config import get_settings
from app.core.logger import setup_logger
from app.models.comment import COMMENT_MAX_LENGTH
from app.models.game import DEFAULT_GAME_CONFIG, GAME_CONFIG_ID
from app.utils.datetime_utils import now_utc

logger = setup_logger(__name__)

# SQLSTATE for foreign_key_violation
_FOREIGN_KEY_VIOLATION = "23503"


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# ===========================================
# ORM Models
# ===========================================


class UserORM(Base):
    """User ORM model, keyed externally by LINE user id."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    line_user_id = Column(String(255), nullable=False, unique=True, index=True)
    display_name = Column(String(255), nullable=True)
    picture_url = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)


class CommentORM(Base):
    """Comment ORM model. parent_id is NULL for top-level comments."""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    parent_id = Column(
        Integer, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True, index=True
    )
    content = Column(String(COMMENT_MAX_LENGTH), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)


class LikeORM(Base):
    """Like ORM model. The composite primary key allows one like per user and comment."""

    __tablename__ = "likes"

    comment_id = Column(
        Integer, ForeignKey("comments.id", ondelete="CASCADE"), primary_key=True
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)


class GameConfigORM(Base):
    """Game configuration ORM model (single row, id = 1)."""

    __tablename__ = "game_config"

    id = Column(Integer, primary_key=True)
    start_num = Column(Integer, nullable=False, default=DEFAULT_GAME_CONFIG["start_num"])
    end_num = Column(Integer, nullable=False, default=DEFAULT_GAME_CONFIG["end_num"])
    special_num = Column(Integer, nullable=False, default=DEFAULT_GAME_CONFIG["special_num"])
    magic_word = Column(Text, nullable=True, default=DEFAULT_GAME_CONFIG["magic_word"])
    aho_text = Column(Text, nullable=True)
    aho_image_url = Column(Text, nullable=True)
    aho_sound_url = Column(Text, nullable=True)


# ===========================================
# Engine / Session Management
# ===========================================


def _configure_sqlite(engine: AsyncEngine) -> None:
    """
    Per-connection SQLite setup.

    Foreign keys (and ON DELETE CASCADE) are off unless enabled per connection.
    Transactions start with BEGIN IMMEDIATE so concurrent writers queue on the
    busy timeout instead of failing when a read lock cannot be upgraded.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
        # Let SQLAlchemy emit BEGIN itself
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_engine_for_url(url: str, echo: bool = False, **engine_options) -> AsyncEngine:
    """Create an async engine, applying the SQLite connection setup when needed."""
    engine = create_async_engine(url, echo=echo, **engine_options)
    if engine.dialect.name == "sqlite":
        _configure_sqlite(engine)
    return engine


@lru_cache()
def get_engine() -> AsyncEngine:
    """Get the process-wide async engine (and its connection pool)."""
    settings = get_settings()
    engine_options = {}
    if not settings.is_sqlite:
        engine_options = {
            "pool_size": settings.DB_POOL_SIZE,
            "pool_timeout": settings.DB_POOL_TIMEOUT,
            "pool_recycle": settings.DB_POOL_RECYCLE,
            "pool_pre_ping": True,
        }
    return create_engine_for_url(settings.DATABASE_URL, echo=settings.DEBUG, **engine_options)


def get_session_factory(engine: AsyncEngine | None = None):
    """Get async session factory."""
    return sessionmaker(engine or get_engine(), class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine | None = None, seed_game_config: bool | None = None):
    """Initialize database tables and, optionally, the default game config row."""
    engine = engine or get_engine()
    if seed_game_config is None:
        seed_game_config = get_settings().SEED_GAME_CONFIG

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

        if seed_game_config:
            result = await conn.execute(
                select(GameConfigORM.id).where(GameConfigORM.id == GAME_CONFIG_ID)
            )
            if result.first() is None:
                await conn.execute(insert(GameConfigORM).values(id=GAME_CONFIG_ID))
                logger.info("Inserted default game_config row")


async def dispose_engine() -> None:
    """Close every pooled connection; the next get_engine() call builds a fresh pool."""
    await get_engine().dispose()
    get_engine.cache_clear()


# ===========================================
# Dialect helpers
# ===========================================


def dialect_insert(session: AsyncSession, table):
    """INSERT construct supporting ON CONFLICT for the session's backend."""
    if session.bind.dialect.name == "postgresql":
        return pg_insert(table)
    return sqlite_insert(table)


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    """True when the integrity error was raised by a foreign key constraint."""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == _FOREIGN_KEY_VIOLATION:
        return True
    return "foreign key" in str(orig).lower()
