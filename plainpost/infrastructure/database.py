# plainpost/infrastructure/database.py
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
from dotenv import load_dotenv
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine
from sqlalchemy.pool import StaticPool

load_dotenv()
logger = structlog.get_logger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./plainpost.db")
DATABASE_ECHO = os.getenv("DATABASE_ECHO", "false").lower() == "true"


def build_engine(url: str = DATABASE_URL, echo: bool = DATABASE_ECHO) -> AsyncEngine:
    # in-memory sqlite needs a single shared connection or every session sees an empty db
    if url.startswith("sqlite") and ":memory:" in url:
        return create_async_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(url, echo=echo, pool_pre_ping=True)


engine: AsyncEngine = build_engine()


async def init_db() -> None:
    # register table metadata before create_all
    from plainpost.models.post import Post  # noqa: F401

    async with engine.begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)
    logger.info("db_initialized", url=engine.url.render_as_string(hide_password=True))


async def dispose_db() -> None:
    await engine.dispose()


@asynccontextmanager
async def get_session() -> AsyncIterator[AsyncSession]:
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session
