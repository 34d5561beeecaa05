"""Pytest fixtures for testing."""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

# Settings are read at import time; tests never talk to these.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "42:TEST")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel  # noqa: E402

from devcensus.models import User  # noqa: E402

# Ensure the users table is registered with SQLModel.metadata
_ = (User,)


@pytest.fixture
async def db_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Fresh file-backed SQLite database per test.

    A file (rather than :memory:) lets the accrual job open its own sessions
    on separate connections, the way it does in production.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'devcensus.db'}",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False
    )


@pytest.fixture
async def db_session(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session
