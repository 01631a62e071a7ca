"""
Database engine and sessions for the relational adapter.

A replay runs inside one session: every accepted interaction is flushed
so later remarks read it back, and the whole replay is committed or
rolled back as a unit.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from rmrk_consolidator.config import settings
from rmrk_consolidator.models.db import Base

# Seconds SQLite waits on a locked database file before failing
SQLITE_BUSY_TIMEOUT = 30


def build_engine(database_url: str | None = None, echo: bool | None = None) -> AsyncEngine:
    """Create an async engine, defaulting to the configured database."""
    url = database_url or settings.database_url
    connect_args: dict[str, Any] = {}
    if url.startswith("sqlite"):
        connect_args["timeout"] = SQLITE_BUSY_TIMEOUT

    return create_async_engine(
        url,
        echo=settings.debug if echo is None else echo,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


engine = build_engine()

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@asynccontextmanager
async def consolidation_session(
    factory: async_sessionmaker[AsyncSession] = async_session_factory,
) -> AsyncIterator[AsyncSession]:
    """
    Session for one replay.

    Commits when the block exits normally; any exception rolls back
    everything written during the replay and is re-raised.

    Usage:
        async with consolidation_session() as session:
            await Consolidator(adapter=SqlAlchemyAdapter(session)).consolidate(remarks)
    """
    async with factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        await session.commit()


async def init_db(bind: AsyncEngine | None = None) -> None:
    """Create missing tables. Safe to call before every replay."""
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def reset_db(bind: AsyncEngine | None = None) -> None:
    """
    Drop and recreate all tables.

    WARNING: Destroys all consolidated state. Used for a full resync from
    the first remark.
    """
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
