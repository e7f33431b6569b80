from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from tarotdeck.api.uploads import get_upload_dir
from tarotdeck.db.database import get_session
from tarotdeck.main import app
from tarotdeck.models.db import Base


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine):
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory) -> AsyncSession:
    """Provide a database session for tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    """Directory uploaded files are written to during a test."""
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
async def client(session_factory, upload_dir: Path):
    """Provide an async test client with overridden database session and upload dir."""

    async def override_get_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_upload_dir] = lambda: upload_dir

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def deck_id(client: AsyncClient) -> str:
    """Create an empty custom deck through the API and return its id."""
    response = await client.post("/api/decks", json={"name": "Test Deck", "isCustom": True})
    assert response.status_code == 201
    return response.json()["id"]
