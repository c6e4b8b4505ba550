"""Pytest fixtures for the timeline backend."""

from collections.abc import AsyncIterator, Awaitable, Callable
from pathlib import Path
from typing import Any, cast

from alembic import command
from alembic.config import Config
import pytest
import pytest_asyncio
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.sql import ColumnElement
from sqlmodel import SQLModel

from core.config import settings
from db.sql_store import SqlTimelineStore
from db.store import TimelineStore
from models import Message
from tests.fakes import InMemoryTimelineStore


def _run_alembic_migrations(database_url: str) -> None:
    """Apply Alembic migrations to the given database URL."""
    backend_dir = Path(__file__).resolve().parents[1]
    alembic_cfg = Config(str(backend_dir / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(backend_dir / "alembic"))

    original_database_url = settings.database_url
    try:
        settings.database_url = database_url
        command.upgrade(alembic_cfg, "head")
    finally:
        settings.database_url = original_database_url


@pytest.fixture(scope="session")
def test_database_url(tmp_path_factory) -> str:
    """Create and migrate a file-backed SQLite database for tests."""
    db_dir = tmp_path_factory.mktemp("sqlite")
    db_path = db_dir / "backend-test.db"
    database_url = f"sqlite+aiosqlite:///{db_path}"
    _run_alembic_migrations(database_url)
    return database_url


@pytest.fixture(autouse=True)
def _fast_password_hashing(monkeypatch) -> None:
    monkeypatch.setattr(settings, "bcrypt_rounds", 4)


@pytest_asyncio.fixture()
async def test_engine(test_database_url: str) -> AsyncIterator[AsyncEngine]:
    """Create an async engine bound to the migrated database with empty tables."""
    engine = create_async_engine(
        test_database_url,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as connection:
        for table in reversed(SQLModel.metadata.sorted_tables):
            await connection.execute(table.delete())
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_maker(test_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Return a session factory bound to the test engine."""
    return async_sessionmaker(test_engine, expire_on_commit=False)


@pytest_asyncio.fixture()
async def db_session(session_maker) -> AsyncIterator[AsyncSession]:
    """Provide a raw database session to tests."""
    async with session_maker() as session:
        yield session


@pytest.fixture(params=["memory", "sql"])
def store(request, db_session: AsyncSession) -> TimelineStore:
    """Run service tests against both the in-memory fake and the SQL store."""
    if request.param == "memory":
        return InMemoryTimelineStore()
    return SqlTimelineStore(db_session)


@pytest.fixture()
def flag_message(
    store: TimelineStore,
    db_session: AsyncSession,
) -> Callable[[int], Awaitable[None]]:
    """Mark a message as flagged the way an external moderation tool would."""

    async def _flag(message_id: int) -> None:
        if isinstance(store, InMemoryTimelineStore):
            store.flag(message_id)
            return
        await db_session.execute(
            update(Message)
            .where(cast(ColumnElement[bool], cast(Any, Message.id) == message_id))
            .values(is_flagged=True)
        )
        await db_session.commit()

    return _flag
