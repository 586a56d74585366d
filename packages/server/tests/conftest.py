"""
Shared fixtures: a throwaway SQLite store per test and an HTTP client bound
to it.
"""

import os
import tempfile

# Point the application engine at a scratch file before app modules import.
_SCRATCH_DIR = tempfile.mkdtemp(prefix="kanban-tests-")
os.environ.setdefault("KANBAN_DATABASE_URL", f"sqlite+aiosqlite:///{_SCRATCH_DIR}/app.db")
os.environ.setdefault("KANBAN_CREATE_TABLES_ON_STARTUP", "false")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

import app.models  # noqa: F401
from app.core.database import get_session
from app.main import app
from app.services.store import TaskStore


@pytest.fixture
async def engine(tmp_path):
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'board.db'}")
    async with eng.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s


@pytest.fixture
async def client(session_factory):
    async def _get_test_session():
        async with session_factory() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    app.dependency_overrides[get_session] = _get_test_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def column_titles(session: AsyncSession, status: str) -> list[str]:
    """Titles of a column in stored order."""
    store = TaskStore(session)
    titles = []
    for task_id in await store.column_ids(status):
        task = await store.get(task_id)
        titles.append(task.title)
    return titles


async def column_orders(session: AsyncSession, status: str) -> list[int]:
    rows = await TaskStore(session).all_rows()
    return sorted(row.order for row in rows if row.status == status)
