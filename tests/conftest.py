# tests/conftest.py

from __future__ import annotations

import os
from collections.abc import AsyncIterator
from pathlib import Path

# The application engine is built at import time; point it somewhere harmless.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./taskboard-test.db")

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from taskboard.db import Base, get_db
from taskboard.db import models  # noqa: F401
from taskboard.features.tasks.repository import TaskRepository
from taskboard.features.tasks.service import TaskService
from taskboard.main import app


@pytest_asyncio.fixture()
async def session_factory(tmp_path: Path) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """
    Fresh on-disk SQLite database per test.

    A file (rather than :memory:) keeps every connection on the same data.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'tasks.sqlite3'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture()
async def db_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest.fixture()
def repository(db_session: AsyncSession) -> TaskRepository:
    return TaskRepository(db_session)


@pytest.fixture()
def service(db_session: AsyncSession) -> TaskService:
    return TaskService(db_session, debug=True)


@pytest_asyncio.fixture()
async def client(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[httpx.AsyncClient]:
    """HTTP client against the ASGI app, with get_db bound to the test database."""

    async def override_get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
        yield http
    app.dependency_overrides.clear()
