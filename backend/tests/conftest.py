"""Shared fixtures: a throwaway SQLite store per test and an API client bound to it."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from hive_monitor.database import Base, get_db
from hive_monitor.main import app
from hive_monitor.models import Reading


@pytest.fixture
async def session_factory(tmp_path):
    """Session factory over a fresh database file."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'hive-test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """Create test client wired to the test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def add_readings(session_factory):
    """Insert readings directly into the store."""

    async def _add(readings: list[Reading]) -> None:
        async with session_factory() as session:
            session.add_all(readings)
            await session.commit()

    return _add
