import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from typing import AsyncGenerator
from mockshare.main import app
from mockshare.database import get_db, Base
from mockshare.auth.security import create_access_token

# Register every table on Base.metadata
from mockshare.mockups.models import Mockup  # noqa: F401
from mockshare.versions.models import VersionSnapshot  # noqa: F401
from mockshare.comments.models import Comment  # noqa: F401

# In-memory SQLite shared across the session's connections via StaticPool.
# Each test gets a fresh engine, so nothing leaks between tests.
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    TestingSessionLocal = sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with TestingSessionLocal() as session:
        yield session

    await test_engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Client for testing API endpoints."""
    # Override the get_db dependency to use our test session
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def designer_headers() -> dict:
    token = create_access_token(data={"sub": "designer@mockshare.test"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def product_content() -> dict:
    return {
        "brand": "Ozark Trail",
        "title": "Widget",
        "price": "19.99",
        "rating": 4.5,
        "reviewCount": 212,
        "description": "A widget for every campsite.",
        "bullets": ["Stainless steel", "Dishwasher safe"],
        "images": ["data:image/png;base64,iVBORw0KGgo="],
    }


@pytest_asyncio.fixture(scope="function")
async def session_factory(tmp_path) -> AsyncGenerator[sessionmaker, None]:
    """File-backed database for tests that need one session per concurrent task.

    The busy timeout lets SQLite queue competing writers instead of failing
    them with "database is locked".
    """
    test_engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'mockshare.db'}",
        echo=False,
        connect_args={"timeout": 30},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    await test_engine.dispose()
