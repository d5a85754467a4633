"""Shared fixtures.

Tests run against a throwaway SQLite file through aiosqlite. NullPool
keeps connections from outliving the event loop that opened them,
which matters because TestClient runs each request on its own loop.
"""

import asyncio
from collections.abc import AsyncGenerator, Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from app.infrastructure.database import Base, get_session
from app.main import app


def make_engine(path: Path) -> AsyncEngine:
    """Create an engine for a SQLite file."""
    return create_async_engine(f"sqlite+aiosqlite:///{path}", poolclass=NullPool)


async def create_schema(engine: AsyncEngine) -> None:
    """Create all catalog tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture
def client(tmp_path: Path) -> Iterator[TestClient]:
    """Create test client backed by a fresh database."""
    engine = make_engine(tmp_path / "catalog.db")
    asyncio.run(create_schema(engine))
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_session, None)
        asyncio.run(engine.dispose())
