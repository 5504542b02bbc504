import os
from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

# Games are kept in a local SQLite file unless DATABASE_URL points elsewhere
DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./bowlscore.db"

engine: Optional[AsyncEngine] = None
SessionLocal: Optional[async_sessionmaker] = None
Base = declarative_base()


def database_url() -> str:
    url = (os.getenv("DATABASE_URL") or "").strip() or DEFAULT_DATABASE_URL
    # plain postgres URLs from hosting providers need the async driver
    if url.startswith("postgresql://"):
        url = "postgresql+asyncpg://" + url[len("postgresql://"):]
    return url


def engine_options(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    if ":memory:" in url:
        # an in-memory database only exists on its one connection
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    return {}


def get_engine() -> AsyncEngine:
    """Create the engine on first use.

    Importing this module touches nothing, so tests can choose
    ``DATABASE_URL`` before the first session is opened.
    """

    global engine, SessionLocal

    if engine is None:
        url = database_url()
        engine = create_async_engine(url, **engine_options(url))
        SessionLocal = async_sessionmaker(engine, expire_on_commit=False)
    return engine


async def init_models() -> None:
    from . import models  # noqa: F401  registers Game and GameFrame

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_session() -> AsyncIterator[AsyncSession]:
    get_engine()
    async with SessionLocal() as session:
        yield session
