"""Async SQLAlchemy database setup."""

import ssl
from pathlib import Path
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from hive_monitor.config import DATABASE_PATH, DATABASE_URL, is_production


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def get_database_url() -> str:
    """Get the store URL, falling back to a local SQLite file."""
    if DATABASE_URL:
        return DATABASE_URL
    db_path = Path(DATABASE_PATH)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite+aiosqlite:///{db_path.resolve()}"


def get_connect_args(url: str) -> dict[str, Any]:
    """Build driver connect args; TLS verification is relaxed outside production."""
    if url.startswith("sqlite"):
        return {}

    context = ssl.create_default_context()
    if not is_production():
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return {"ssl": context}


_database_url = get_database_url()

engine = create_async_engine(
    _database_url,
    echo=False,
    connect_args=get_connect_args(_database_url),
)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncSession:
    """Dependency for getting async database sessions."""
    async with async_session() as session:
        yield session


def get_session():
    """Context manager for getting async database sessions outside of FastAPI routes."""
    return async_session()


async def init_store() -> None:
    """Connect to the store and create missing tables.

    Raises on connection failure so the app never serves an uninitialized store.
    """
    # Imported for table registration
    from hive_monitor import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
