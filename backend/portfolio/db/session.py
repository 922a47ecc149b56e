"""Async Session Factory — session factory and table helpers outside FastAPI.

Invariants:
    - Meant for scripts and test fixtures; the app itself goes through DatabaseSessionManager
    - create_tables() is idempotent (CREATE TABLE IF NOT EXISTS semantics)
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker,
)

from portfolio.db.base import Base
# Import all models so Base.metadata has them
from portfolio.models.blog_post import BlogPost  # noqa: F401
from portfolio.models.project import Project  # noqa: F401


def create_session_factory(
    engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to the given engine."""
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
