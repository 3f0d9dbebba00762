"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path

# Test environment: no rate limiting, in-memory SQLite, schema built by fixtures
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CREATE_SCHEMA"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.config import settings
from domain.services.profile_service import ProfileService
from infrastructure.database.models import Base
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.storage.local_image_store import LocalImageStore

# Test database URL (SQLite in memory, one shared connection per engine)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with all tables for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for direct repository tests."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def images_dir(tmp_path: Path) -> Path:
    """Per-test upload directory."""
    return tmp_path / "images"


@pytest.fixture
def image_store(images_dir: Path) -> LocalImageStore:
    return LocalImageStore(images_dir)


@pytest.fixture
def default_image_bytes() -> bytes:
    """Bytes of the bundled placeholder image."""
    return settings.default_image_path.read_bytes()


@pytest.fixture
def profile_service(
    session_factory: async_sessionmaker[AsyncSession],
    image_store: LocalImageStore,
) -> ProfileService:
    """ProfileService wired to the test database and image directory."""

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return ProfileService(
        test_uow_factory,
        image_store=image_store,
        default_image_path=settings.default_image_path,
    )


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client with default wiring."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def api_client(
    session_factory: async_sessionmaker[AsyncSession],
    profile_service: ProfileService,
    image_store: LocalImageStore,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client backed by the in-memory database.

    This client:
    - Overrides the profile service to use the test database and image directory
    - Overrides the health check's session and image store dependencies
    """
    from api.dependencies.services import get_image_store, get_profile_service
    from infrastructure.database.session import get_async_session
    from main import create_app

    app = create_app()

    async def override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_profile_service] = lambda: profile_service
    app.dependency_overrides[get_image_store] = lambda: image_store
    app.dependency_overrides[get_async_session] = override_get_async_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
