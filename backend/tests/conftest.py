"""
Shared pytest fixtures.

Every test runs against its own in-memory SQLite database; uploads go to a
throwaway directory.
"""

import os
import tempfile

# Must be set before app.core.config caches the settings
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="nabeatsu-uploads-"))
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api import deps
from app.core.config import get_settings
from app.infrastructure.local.comment_repository import SqliteCommentRepository
from app.infrastructure.local.database import create_engine_for_url, init_db
from app.infrastructure.local.game_config_repository import SqliteGameConfigRepository
from app.infrastructure.local.like_repository import SqliteLikeRepository
from app.infrastructure.local.storage_provider import LocalStorageProvider
from app.infrastructure.local.user_repository import SqliteUserRepository


@pytest.fixture
async def engine():
    """In-memory SQLite engine with tables and the default game config."""
    engine = create_engine_for_url(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(engine, seed_game_config=True)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def user_repo(session_factory):
    return SqliteUserRepository(session_factory=session_factory)


@pytest.fixture
def comment_repo(session_factory):
    return SqliteCommentRepository(session_factory=session_factory)


@pytest.fixture
def like_repo(session_factory):
    return SqliteLikeRepository(session_factory=session_factory)


@pytest.fixture
def game_config_repo(session_factory):
    return SqliteGameConfigRepository(session_factory=session_factory)


@pytest.fixture
async def alice(user_repo):
    return await user_repo.upsert("U-alice", display_name="Alice", picture_url="https://example.com/a.png")


@pytest.fixture
async def bob(user_repo):
    return await user_repo.upsert("U-bob", display_name="Bob", picture_url=None)


@pytest.fixture
def storage():
    return LocalStorageProvider(get_settings().UPLOAD_DIR)


@pytest.fixture
async def client(user_repo, comment_repo, like_repo, game_config_repo, storage):
    """HTTP client over the ASGI app with repositories bound to the test database."""
    from main import create_app

    app = create_app()
    app.dependency_overrides[deps.get_user_repository] = lambda: user_repo
    app.dependency_overrides[deps.get_comment_repository] = lambda: comment_repo
    app.dependency_overrides[deps.get_like_repository] = lambda: like_repo
    app.dependency_overrides[deps.get_game_config_repository] = lambda: game_config_repo
    app.dependency_overrides[deps.get_storage_provider] = lambda: storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
